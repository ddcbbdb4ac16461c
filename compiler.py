from bytecode import Opcode, Program, ValuePool, MAX_CONSTANTS
from lexer import tokenize
from postfix import infix_to_postfix


BINARY_OPCODES = {
    "PLUS": Opcode.ADD,
    "MINUS": Opcode.SUBTRACT,
    "STAR": Opcode.MULTIPLY,
    "SLASH": Opcode.DIVIDE,
}


class Compiler:
    def __init__(self, max_constants: int = MAX_CONSTANTS):
        self.program = Program(ValuePool(capacity=max_constants))

    def emit(self, opcode, operand=None):
        return self.program.emit(opcode, operand)

    def compile(self, tokens):
        # tokens must already be in postfix order
        for token in tokens:
            if token.type == "NUMBER":
                self.program.write_constant(token.value)
                continue

            opcode = BINARY_OPCODES.get(token.type)
            if opcode is not None:
                self.emit(opcode)
            # anything else (stray parens) emits nothing

        self.emit(Opcode.PRINT)
        self.emit(Opcode.END)
        return self.program


def compile_source(text, max_constants: int = MAX_CONSTANTS):
    tokens = tokenize(text)
    postfix = infix_to_postfix(tokens)
    return Compiler(max_constants=max_constants).compile(postfix)
