"""
Calculation pass over a document.

A document is a list of :class:`Line` records. :func:`calculate` evaluates
them in ``position`` order with one fresh :class:`Environment`, so a line can
read any variable assigned by an earlier line and never affects earlier
ones. The returned list keeps the caller's order and count.
"""
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, EngineConfig
from .environment import Environment
from .errors import CalcError, Ok, Outcome, as_outcome
from .evaluator import evaluate
from .formatter import format_outcome
from .preprocess import (
    normalize_identifiers,
    normalize_operators,
    rewrite_percentages,
    split_assignment,
    strip_comments,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Line:
    position: int
    expression: str
    result: str = ""


def prepare(text: str, config: EngineConfig = DEFAULT_CONFIG) -> Optional[str]:
    """Comment, operator, percentage and identifier stages; ``None`` for a no-op line."""
    if not text.strip():
        return None
    text = strip_comments(text, config.comment_marker)
    if not text.strip():
        return None

    text = normalize_operators(text, config.multiplication_glyphs, config.division_glyphs)
    text = rewrite_percentages(text)
    return normalize_identifiers(text)


def evaluate_line(text: str, env: Environment,
                  config: EngineConfig = DEFAULT_CONFIG) -> Optional[Tuple[Optional[str], Outcome]]:
    """Run one line against ``env``.

    Returns ``None`` for a blank or comment-only line, otherwise the
    assignment target (or ``None``) and the outcome. On success an
    assignment binds its target; on failure ``env`` is left alone.
    """
    prepared = prepare(text, config)
    if prepared is None:
        return None

    try:
        target, expression = split_assignment(prepared)
    except CalcError as e:
        return None, as_outcome(e)

    outcome = evaluate(expression, env)
    if target is not None and isinstance(outcome, Ok):
        env.bind(target, outcome.value)
    return target, outcome


def calculate(lines: Sequence[Line], config: Optional[EngineConfig] = None) -> List[Line]:
    config = config or DEFAULT_CONFIG
    env = Environment()
    results = [""] * len(lines)
    failed = 0

    # position 순으로 평가 (같은 position 은 입력 순서 유지)
    order = sorted(range(len(lines)), key=lambda i: lines[i].position)
    for i in order:
        line = lines[i]
        evaluated = evaluate_line(line.expression, env, config)
        if evaluated is None:
            continue

        _, outcome = evaluated
        if not isinstance(outcome, Ok):
            failed += 1
            logger.debug("line %d %r -> %s: %s", line.position, line.expression,
                         outcome.kind.name, outcome.message)
        results[i] = format_outcome(outcome, config)

    logger.info("calculated %d lines (%d failed, %d variables)", len(lines), failed, len(env))
    return [replace(line, result=result) for line, result in zip(lines, results)]
