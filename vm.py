import math
import sys

from bytecode import Opcode, opcode_name
from errors import (
    BadConstantError,
    PoolIndexError,
    StackOverflowError,
    StackUnderflowError,
    TruncatedProgramError,
    UnknownOpcodeError,
)


STACK_MAX = 64


def format_value(value: float) -> str:
    # printf("%f") rendering: six decimals, inf/nan spelled out
    return f"{value:f}"


class VM:
    def __init__(self, program, max_stack: int = STACK_MAX, out=None, trace: bool = False):
        if max_stack < 1:
            raise ValueError("max_stack must be at least 1")
        self.program = program
        self.code = program.code
        self.pool = program.pool
        self.max_stack = max_stack
        self.out = out if out is not None else sys.stdout
        self.trace_enabled = trace

        self.ip = 0        # offset of the next opcode
        self.stack = []
        self.printed = None  # last value written by PRINT

    def push(self, value, ip=None, opcode=None):
        if len(self.stack) >= self.max_stack:
            raise StackOverflowError("stack overflow", ip=ip, opcode=opcode)
        self.stack.append(value)

    def pop(self, ip=None, opcode=None):
        if not self.stack:
            raise StackUnderflowError("stack underflow", ip=ip, opcode=opcode)
        return self.stack.pop()

    def peek(self, ip=None, opcode=None):
        if not self.stack:
            raise StackUnderflowError("stack underflow", ip=ip, opcode=opcode)
        return self.stack[-1]

    def read_byte(self, ip, opcode):
        if self.ip >= len(self.code):
            raise TruncatedProgramError("unexpected end of bytecode", ip=ip, opcode=opcode)
        byte = self.code[self.ip]
        self.ip += 1
        return byte

    def _trace(self, ip, opcode):
        text = f"TRACE ip={ip:04d} {opcode_name(opcode)}"
        if opcode == Opcode.CONSTANT and ip + 1 < len(self.code):
            text += f" {self.code[ip + 1]}"
        print(f"{text} stack={len(self.stack)}", file=self.out)

    def step(self) -> bool:
        ip = self.ip
        if ip >= len(self.code):
            raise TruncatedProgramError("ran past end of bytecode without END", ip=ip, opcode=None)
        opcode = self.code[ip]
        self.ip += 1

        if self.trace_enabled:
            self._trace(ip, opcode)

        if opcode == Opcode.CONSTANT:
            index = self.read_byte(ip, opcode)
            try:
                value = self.pool.get(index)
            except PoolIndexError as e:
                raise BadConstantError(e.args[0], ip=ip, opcode=opcode) from e
            self.push(value, ip, opcode)
            return False

        if opcode in (Opcode.ADD, Opcode.SUBTRACT, Opcode.MULTIPLY, Opcode.DIVIDE):
            if len(self.stack) < 2:
                raise StackUnderflowError("stack underflow", ip=ip, opcode=opcode)
            b = self.pop(ip, opcode)
            a = self.pop(ip, opcode)
            if opcode == Opcode.ADD:
                self.push(a + b, ip, opcode)
            elif opcode == Opcode.SUBTRACT:
                self.push(a - b, ip, opcode)
            elif opcode == Opcode.MULTIPLY:
                self.push(a * b, ip, opcode)
            else:
                self.push(divide(a, b), ip, opcode)
            return False

        if opcode == Opcode.PRINT:
            value = self.peek(ip, opcode)
            print(format_value(value), file=self.out)
            self.printed = value
            return False

        if opcode == Opcode.END:
            return True

        raise UnknownOpcodeError(f"unknown opcode {opcode}", ip=ip, opcode=opcode)

    def run(self):
        self.ip = 0
        self.stack = []
        self.printed = None
        while True:
            halted = self.step()
            if halted:
                break
        return self.printed


def divide(a: float, b: float) -> float:
    # IEEE 754 division: x/0 is a signed infinity, 0/0 is nan.
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
