from errors import ScanError


DIGITS = "0123456789"


class Token:
    __slots__ = ("type", "value", "column")

    def __init__(self, type, value=None, column=1):
        self.type = type
        self.value = value
        self.column = column

    def __eq__(self, other):
        # position is diagnostic only
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self):
        return hash((self.type, self.value))

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value})"
        return f"{self.type}"


SYMBOLS = {
    "+": "PLUS",
    "-": "MINUS",
    "*": "STAR",
    "/": "SLASH",
    "(": "LPAREN",
    ")": "RPAREN",
}


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None

    @property
    def column(self):
        return self.pos + 1

    def advance(self):
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        return self.peek_n(1)

    def peek_n(self, n):
        idx = self.pos + n
        if idx >= len(self.text):
            return None
        return self.text[idx]

    def skip_whitespace(self):
        while self.current_char and self.current_char in " \t\r\n":
            self.advance()

    def _read_digits(self):
        result = ""
        while self.current_char and self.current_char in DIGITS:
            result += self.current_char
            self.advance()
        return result

    def read_number(self):
        # Longest decimal prefix (the decimal subset of strtod; no hex).
        start_col = self.column
        result = self._read_digits()

        if self.current_char == ".":
            self.advance()
            result += "." + self._read_digits()

        if result == ".":
            raise ScanError(".", start_col)

        if self.current_char and self.current_char in "eE":
            sign = self.peek()
            offset = 2 if sign is not None and sign in "+-" else 1
            nxt = self.peek_n(offset)
            if nxt is not None and nxt in DIGITS:
                for _ in range(offset):
                    result += self.current_char
                    self.advance()
                result += self._read_digits()

        return Token("NUMBER", float(result), column=start_col)

    def get_next_token(self):
        while self.current_char:
            if self.current_char in " \t\r\n":
                self.skip_whitespace()
                continue

            if self.current_char in DIGITS or self.current_char == ".":
                return self.read_number()

            kind = SYMBOLS.get(self.current_char)
            if kind is not None:
                start_col = self.column
                self.advance()
                return Token(kind, column=start_col)

            raise ScanError(self.current_char, self.column)

        return Token("EOF", column=self.column)


def tokenize(text):
    lexer = Lexer(text)
    tokens = []
    while True:
        token = lexer.get_next_token()
        if token.type == "EOF":
            return tokens
        tokens.append(token)
