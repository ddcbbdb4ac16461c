class StackCalcError(Exception):
    pass


class ScanError(StackCalcError):
    def __init__(self, char: str, column: int | None = None):
        super().__init__(f"unknown character: {char!r}")
        self.char = char
        self.column = column

    def __str__(self) -> str:
        if self.column is None:
            return f"Scan error: unknown character {self.char!r}"
        return f"Scan error: unknown character {self.char!r} at col {self.column}"


class MalformedExpressionError(StackCalcError):
    def __init__(self, message: str, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.column = column

    def __str__(self) -> str:
        if self.column is None:
            return f"Malformed expression: {self.message}"
        return f"Malformed expression: {self.message} at col {self.column}"


class CapacityError(StackCalcError):
    def __str__(self) -> str:
        return f"Capacity error: {self.args[0]}"


class PoolIndexError(StackCalcError, IndexError):
    def __init__(self, index: int, size: int):
        super().__init__(f"constant index {index} out of range (pool size {size})")
        self.index = index
        self.size = size

    def __str__(self) -> str:
        return f"Integrity error: {self.args[0]}"


class VMError(StackCalcError):
    def __init__(self, message: str, ip: int | None = None, opcode: int | None = None):
        super().__init__(message)
        self.message = message
        self.ip = ip
        self.opcode = opcode

    def format(self) -> str:
        # Local import: bytecode imports this module.
        from bytecode import opcode_name

        where = []
        if self.ip is not None:
            where.append(f"ip={self.ip:04d}")
        if self.opcode is not None:
            where.append(f"op={opcode_name(self.opcode)}")
        if not where:
            return f"Runtime error: {self.message}"
        return f"Runtime error: {self.message} ({', '.join(where)})"

    def __str__(self) -> str:
        return self.format()


class StackOverflowError(VMError):
    pass


class StackUnderflowError(VMError):
    pass


class UnknownOpcodeError(VMError):
    pass


class TruncatedProgramError(VMError):
    pass


class BadConstantError(VMError):
    pass
