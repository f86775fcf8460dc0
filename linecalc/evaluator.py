# -*- coding: utf-8 -*-
"""
Arithmetic grammar and evaluator.

The grammar is parsed with lark (LALR, basic lexer); the tree is reduced to
a float by a non-recursive Transformer bound to the caller's
:class:`~linecalc.environment.Environment`. Nothing here keeps state
between calls.
"""
import logging
import math

from lark import Lark, Transformer_NonRecursive, v_args
from lark.exceptions import UnexpectedInput, VisitError

from .environment import Environment
from .errors import CalcError, Err, ErrorKind, Ok, Outcome

logger = logging.getLogger(__name__)


# ----- Grammar -----
GRAMMAR = r"""
?start: sum

?sum: product
    | sum "+" product       -> add
    | sum "-" product       -> sub

?product: power
        | product "*" power -> mul
        | product "/" power -> div

// ^ 는 오른쪽 결합, 단항 부호가 더 강하게 묶임 (-2^2 = 4)
?power: unary
      | unary "^" power     -> pow

?unary: "-" unary           -> neg
      | "+" unary           -> pos
      | atom

?atom: NUMBER               -> number
     | NAME                 -> var
     | "(" sum ")"

// 소수: 12, 1.5, .5, 3.
NUMBER: /\d+(\.\d*)?|\.\d+/
NAME: /[A-Za-z_][A-Za-z0-9_]*/

%import common.WS_INLINE
%ignore WS_INLINE
"""

_PARSER = Lark(GRAMMAR, parser="lalr", start="start", lexer="basic")


@v_args(inline=True)
class ExpressionEvaluator(Transformer_NonRecursive):
    """Tree -> float, reading variables from ``env``."""

    def __init__(self, env: Environment):
        super().__init__()
        self.env = env

    def number(self, tok):
        return float(tok)

    def var(self, tok):
        return self.env.lookup(str(tok))

    def add(self, a, b): return a + b
    def sub(self, a, b): return a - b
    def mul(self, a, b): return a * b

    def div(self, a, b):
        if b == 0:
            raise CalcError("division by zero", ErrorKind.ARITHMETIC)
        return a / b

    def pow(self, a, b):
        # math.pow: 복소수 결과 대신 ValueError, 넘치면 OverflowError
        try:
            return math.pow(a, b)
        except (OverflowError, ValueError) as e:
            raise CalcError(f"{a} ^ {b}: {e}", ErrorKind.ARITHMETIC) from e

    def neg(self, x): return -x
    def pos(self, x): return +x


def parse(text: str):
    try:
        return _PARSER.parse(text)
    except UnexpectedInput as e:
        raise CalcError(f"cannot parse {text!r}", ErrorKind.SYNTAX,
                        position=getattr(e, "column", None)) from e


def compute(text: str, env: Environment) -> float:
    """Parse and evaluate ``text``; raises :class:`CalcError` on failure."""
    if not text.strip():
        raise CalcError("empty expression", ErrorKind.SYNTAX)

    tree = parse(text)
    try:
        value = ExpressionEvaluator(env).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, CalcError):
            raise e.orig_exc from None
        raise

    value = float(value)
    if not math.isfinite(value):
        raise CalcError(f"result is not finite: {value}", ErrorKind.ARITHMETIC)
    return value


def evaluate(text: str, env: Environment) -> Outcome:
    try:
        return Ok(compute(text, env))
    except CalcError as e:
        logger.debug("evaluate %r failed: %s (%s)", text, e, e.kind.name)
        return Err(e.kind, str(e))
