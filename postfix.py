"""Operator-precedence reordering of a token list (shunting-yard).

Turns infix order into postfix order so the compiler can emit instructions
left to right with no precedence lookup. Parentheses are consumed here and
never reach the compiler.
"""

from errors import MalformedExpressionError

OPERATORS = ("PLUS", "MINUS", "STAR", "SLASH")


def precedence(token_type):
    if token_type in ("STAR", "SLASH"):
        return 2
    if token_type in ("PLUS", "MINUS"):
        return 1
    # parens never win the pop test
    return 0


def infix_to_postfix(tokens):
    output = []
    stack = []

    for token in tokens:
        if token.type == "NUMBER":
            output.append(token)
        elif token.type == "LPAREN":
            stack.append(token)
        elif token.type == "RPAREN":
            while stack and stack[-1].type != "LPAREN":
                output.append(stack.pop())
            if not stack:
                raise MalformedExpressionError("unmatched ')'", token.column)
            stack.pop()
        elif token.type in OPERATORS:
            # >= so equal precedence resolves left to right
            while stack and precedence(stack[-1].type) >= precedence(token.type):
                output.append(stack.pop())
            stack.append(token)
        else:
            raise MalformedExpressionError(f"unexpected token {token!r}", getattr(token, "column", None))

    while stack:
        token = stack.pop()
        if token.type == "LPAREN":
            raise MalformedExpressionError("unmatched '('", token.column)
        output.append(token)

    return output
