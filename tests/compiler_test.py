import pytest

from bytecode import MAX_CONSTANTS, Opcode, Program, ValuePool, disassemble
from compiler import Compiler, compile_source
from errors import CapacityError, PoolIndexError
from lexer import Token


def test_pool_append_and_get():
    pool = ValuePool()
    assert pool.append(1.5) == 0
    assert pool.append(1.5) == 1
    assert pool.get(1) == 1.5
    assert len(pool) == 2


def test_pool_bad_index():
    pool = ValuePool()
    pool.append(3.0)
    with pytest.raises(PoolIndexError):
        pool.get(1)
    # still an IndexError for callers that only know the builtin
    with pytest.raises(IndexError):
        pool.get(-1)


def test_pool_capacity():
    pool = ValuePool(capacity=2)
    pool.append(1)
    pool.append(2)
    with pytest.raises(CapacityError):
        pool.append(3)
    assert list(pool) == [1.0, 2.0]


def test_pool_capacity_bounded_by_operand_width():
    with pytest.raises(ValueError):
        ValuePool(capacity=MAX_CONSTANTS + 1)


def test_compile_layout():
    program = compile_source("2 + 3 * 4")
    assert bytes(program.code) == bytes([
        Opcode.CONSTANT, 0,
        Opcode.CONSTANT, 1,
        Opcode.CONSTANT, 2,
        Opcode.MULTIPLY,
        Opcode.ADD,
        Opcode.PRINT,
        Opcode.END,
    ])
    assert list(program.pool) == [2.0, 3.0, 4.0]


def test_compile_empty_still_prints_and_ends():
    program = Compiler().compile([])
    assert bytes(program.code) == bytes([Opcode.PRINT, Opcode.END])


def test_stray_parens_are_skipped():
    tokens = [Token("NUMBER", 1.0), Token("LPAREN"), Token("RPAREN")]
    program = Compiler().compile(tokens)
    assert bytes(program.code) == bytes([Opcode.CONSTANT, 0, Opcode.PRINT, Opcode.END])


def test_constants_are_not_shared():
    program = compile_source("1 + 1")
    assert list(program.pool) == [1.0, 1.0]


def test_256_constants_fit():
    text = " + ".join(["1"] * MAX_CONSTANTS)
    program = compile_source(text)
    assert len(program.pool) == MAX_CONSTANTS
    assert program.code[-2:] == bytes([Opcode.PRINT, Opcode.END])


def test_257th_constant_is_rejected():
    text = " + ".join(["1"] * (MAX_CONSTANTS + 1))
    with pytest.raises(CapacityError):
        compile_source(text)


def test_disassemble():
    lines = disassemble(compile_source("(2 + 3) * 4"))
    assert lines == [
        "0000  CONSTANT 0 (2.0)",
        "0002  CONSTANT 1 (3.0)",
        "0004  ADD",
        "0005  CONSTANT 2 (4.0)",
        "0007  MULTIPLY",
        "0008  PRINT",
        "0009  END",
    ]


def test_disassemble_unknown_byte():
    program = Program()
    program.code.extend([0xFF, Opcode.END])
    assert disassemble(program) == ["0000  0xff", "0001  END"]
