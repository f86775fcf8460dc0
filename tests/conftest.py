"""Shared fixtures for the linecalc tests."""

from __future__ import annotations

from typing import Callable, List

import pytest

from linecalc import Environment, Line, calculate


@pytest.fixture
def env() -> Environment:
    """Return an empty, pass-scoped variable environment."""
    return Environment()


@pytest.fixture
def run() -> Callable[..., List[str]]:
    """Evaluate expressions as one document (positions 0..n-1) and return the results."""

    def _run(*expressions: str) -> List[str]:
        lines = [Line(position=i, expression=e) for i, e in enumerate(expressions)]
        return [line.result for line in calculate(lines)]

    return _run
