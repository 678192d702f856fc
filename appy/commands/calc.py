"""Calculator command: evaluates arithmetic without eval().

Handles:
    "@Appy calc 2+3*4"
    "@Appy calc (2+3*4)/5"
    "@Appy calc -5.5 + 3"
    "@Appy calc 6 × 7 − 2"

Pipeline: normalize glyphs -> tokenize -> shunting-yard to postfix -> stack
evaluation. Supports + - * /, parentheses and unary minus on numbers.
Division by zero follows IEEE float rules (inf / nan), it is not an error.
"""

import math
from dataclasses import dataclass

NAME = "calc"

PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}

# Unicode glyphs people paste from phones and word processors
_GLYPHS = {
    "−": "-",  # minus sign
    "–": "-",  # en dash
    "—": "-",  # em dash
    "×": "*",
    "÷": "/",
}

_NUM_CHARS = "0123456789."


class InvalidExpression(ValueError):
    """Malformed expression: bad character, mismatched parentheses, missing operand."""


@dataclass(frozen=True)
class Token:
    kind: str            # "num", "op", "lpar", "rpar"
    value: object = None  # float for "num", symbol for "op"


def _normalize(expr):
    for glyph, ascii_char in _GLYPHS.items():
        expr = expr.replace(glyph, ascii_char)
    return expr


def _number(text):
    try:
        return Token("num", float(text))
    except ValueError:
        raise InvalidExpression(f"Bad number: {text!r}") from None


def tokenize(expr):
    """Split an expression into a list of Tokens, left to right."""
    expr = _normalize(expr)
    tokens = []
    i = 0
    n = len(expr)
    while i < n:
        c = expr[i]
        if c.isspace():
            i += 1
            continue

        if c in _NUM_CHARS:
            start = i
            while i < n and expr[i] in _NUM_CHARS:
                i += 1
            tokens.append(_number(expr[start:i]))
            continue

        if c == "-" and (not tokens or tokens[-1].kind in ("op", "lpar")):
            # Unary minus: fuse into the following number
            if i + 1 < n and expr[i + 1] in _NUM_CHARS:
                start = i
                i += 1
                while i < n and expr[i] in _NUM_CHARS:
                    i += 1
                tokens.append(_number(expr[start:i]))
                continue
            tokens.append(Token("op", "-"))
        elif c in PRECEDENCE:
            tokens.append(Token("op", c))
        elif c == "(":
            tokens.append(Token("lpar"))
        elif c == ")":
            tokens.append(Token("rpar"))
        else:
            raise InvalidExpression(f"Invalid character: {c!r}")
        i += 1

    return tokens


def to_postfix(tokens):
    """Shunting-yard: reorder infix tokens into postfix (RPN) order."""
    out = []
    ops = []
    for t in tokens:
        if t.kind == "num":
            out.append(t)
        elif t.kind == "op":
            # Left-associative: equal precedence pops too
            while ops and ops[-1].kind == "op" and PRECEDENCE[ops[-1].value] >= PRECEDENCE[t.value]:
                out.append(ops.pop())
            ops.append(t)
        elif t.kind == "lpar":
            ops.append(t)
        elif t.kind == "rpar":
            while ops and ops[-1].kind != "lpar":
                out.append(ops.pop())
            if not ops:
                raise InvalidExpression("Mismatched parentheses")
            ops.pop()

    while ops:
        t = ops.pop()
        if t.kind in ("lpar", "rpar"):
            raise InvalidExpression("Mismatched parentheses")
        out.append(t)
    return out


def _divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


_APPLY = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
}


def evaluate_postfix(postfix):
    stack = []
    for t in postfix:
        if t.kind == "num":
            stack.append(t.value)
            continue
        if len(stack) < 2:
            raise InvalidExpression("Missing operand")
        b = stack.pop()
        a = stack.pop()
        stack.append(_APPLY[t.value](a, b))
    if len(stack) != 1:
        raise InvalidExpression("Invalid expression")
    return stack[0]


def evaluate(expr):
    """Evaluate an arithmetic expression string. Raises InvalidExpression."""
    return evaluate_postfix(to_postfix(tokenize(expr)))


def format_number(n):
    """14.0 -> '14', 2.8 -> '2.8', 1/3 -> '0.33', 1/0 -> 'Infinity'."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n % 1.0 == 0:
        return str(int(n))
    return str(round(n, 2))


def handle(args, message=None):
    expr = args.strip()
    if not expr:
        return "🧮 Usage: `@Appy calc 2+3*4`"
    try:
        result = evaluate(expr)
    except InvalidExpression:
        return "⚠️ Error in expression — are you sure that’s math? 🤔"
    return f"🧮 Result: {format_number(result)}"


# --- Standalone test ---

if __name__ == "__main__":
    tests = [
        "2+3*4",
        "(2+3*4)/5",
        "-5.5 + 3",
        "10 − 2 × 3",
        "1/0",
        "2*(-3)",
        "(1+2",
        "1+2)",
        "2 ^ 3",
        "+5",
    ]
    for t in tests:
        try:
            print(f"  {t!r:20s} => {format_number(evaluate(t))}")
        except InvalidExpression as e:
            print(f"  {t!r:20s} => error: {e}")
