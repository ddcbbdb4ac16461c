from collections import Counter

import pytest

from errors import MalformedExpressionError
from lexer import tokenize
from postfix import infix_to_postfix, precedence


def rpn(text):
    out = []
    for t in infix_to_postfix(tokenize(text)):
        out.append(repr(int(t.value)) if t.type == "NUMBER" else t.type)
    return " ".join(out)


def test_precedence_table():
    assert precedence("STAR") == precedence("SLASH") == 2
    assert precedence("PLUS") == precedence("MINUS") == 1
    assert precedence("LPAREN") == 0


def test_higher_precedence_binds_first():
    assert rpn("2 + 3 * 4") == "2 3 4 STAR PLUS"


def test_parens_override_precedence():
    assert rpn("(2 + 3) * 4") == "2 3 PLUS 4 STAR"


def test_equal_precedence_is_left_associative():
    assert rpn("8 - 3 - 2") == "8 3 MINUS 2 MINUS"
    assert rpn("8 / 4 * 2") == "8 4 SLASH 2 STAR"


def test_nested_parens():
    assert rpn("((1 + 2) * (3 - 4)) / 5") == "1 2 PLUS 3 4 MINUS STAR 5 SLASH"


def test_parens_removed_and_multiset_kept():
    for text in ["(1 + 2) * 3", "1 - (2 - (3 - 4))", "((7))", "6 / (2 * 3) + 1"]:
        tokens = tokenize(text)
        expected = Counter(t for t in tokens if t.type not in ("LPAREN", "RPAREN"))
        assert Counter(infix_to_postfix(tokens)) == expected


def test_unmatched_right_paren():
    with pytest.raises(MalformedExpressionError) as info:
        infix_to_postfix(tokenize("2 + 3)"))
    assert info.value.column == 6


def test_lone_right_paren():
    with pytest.raises(MalformedExpressionError):
        infix_to_postfix(tokenize(")"))


def test_unmatched_left_paren():
    with pytest.raises(MalformedExpressionError) as info:
        infix_to_postfix(tokenize("(2 + 3"))
    assert "'('" in str(info.value)


def test_empty():
    assert infix_to_postfix([]) == []
