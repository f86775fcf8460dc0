"""
Engine configuration
====================
Characters and output conventions used by the calculation pipeline.
The defaults reproduce the calculator's documented behaviour; the command
line runner can override the error marker and the number of fractional
digits.
"""
from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class EngineConfig:
    comment_marker: str = "#"
    multiplication_glyphs: Tuple[str, ...] = ("×",)
    division_glyphs: Tuple[str, ...] = ("÷",)
    error_marker: str = "Err"
    fraction_digits: int = 2

    def __post_init__(self):
        if len(self.comment_marker) != 1:
            raise ValueError(f"comment marker must be one character, got {self.comment_marker!r}")
        if self.fraction_digits < 0:
            raise ValueError(f"fraction_digits must be >= 0, got {self.fraction_digits}")
        for glyph in (*self.multiplication_glyphs, *self.division_glyphs):
            if not glyph:
                raise ValueError("operator glyphs must not be empty")

    def with_overrides(self, **changes) -> "EngineConfig":
        # None 값은 기본값 유지
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


DEFAULT_CONFIG = EngineConfig()
