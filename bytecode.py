from enum import IntEnum

from errors import CapacityError, PoolIndexError


# One-byte operand: a CONSTANT can address at most 256 pool entries.
MAX_CONSTANTS = 256


class Opcode(IntEnum):
    CONSTANT = 0
    ADD = 1
    SUBTRACT = 2
    MULTIPLY = 3
    DIVIDE = 4
    PRINT = 5
    END = 6


def opcode_name(byte: int) -> str:
    try:
        return Opcode(byte).name
    except ValueError:
        return f"0x{byte:02x}"


class ValuePool:
    def __init__(self, capacity: int = MAX_CONSTANTS):
        if not 0 < capacity <= MAX_CONSTANTS:
            raise ValueError(f"pool capacity must be between 1 and {MAX_CONSTANTS}")
        self.capacity = capacity
        self.values = []

    def append(self, value: float) -> int:
        if len(self.values) >= self.capacity:
            raise CapacityError(f"too many constants in one expression (limit {self.capacity})")
        self.values.append(float(value))
        return len(self.values) - 1

    def get(self, index: int) -> float:
        if index < 0 or index >= len(self.values):
            raise PoolIndexError(index, len(self.values))
        return self.values[index]

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


class Program:
    def __init__(self, pool: ValuePool | None = None):
        self.pool = pool if pool is not None else ValuePool()
        self.code = bytearray()  # opcodes and CONSTANT operands

    def emit(self, opcode, operand=None):
        # returns the offset of the opcode byte
        offset = len(self.code)
        self.code.append(int(opcode))
        if operand is not None:
            self.code.append(operand)
        return offset

    def write_constant(self, value: float) -> int:
        index = self.pool.append(value)
        self.emit(Opcode.CONSTANT, index)
        return index

    def __len__(self):
        return len(self.code)


def disassemble(program: Program) -> list[str]:
    """Render the opcode stream as one line per instruction.

    Operand bytes are shown next to their CONSTANT, with the pool value they
    point at. Bytes that do not decode are listed as-is.
    """
    lines = []
    code = program.code
    ip = 0
    while ip < len(code):
        byte = code[ip]
        name = opcode_name(byte)
        if byte == Opcode.CONSTANT:
            if ip + 1 >= len(code):
                lines.append(f"{ip:04d}  {name} <missing operand>")
                break
            index = code[ip + 1]
            if index < len(program.pool):
                lines.append(f"{ip:04d}  {name} {index} ({program.pool.get(index)!r})")
            else:
                lines.append(f"{ip:04d}  {name} {index} (<bad index>)")
            ip += 2
            continue
        lines.append(f"{ip:04d}  {name}")
        ip += 1
    return lines
