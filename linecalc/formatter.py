"""Rendering of evaluated values for display next to a line."""
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .config import DEFAULT_CONFIG, EngineConfig
from .errors import Err, Outcome

INT64_MIN, INT64_MAX = -2 ** 63, 2 ** 63 - 1


def is_whole(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value)


def format_value(value: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """
    Whole numbers print as plain integers while they fit a signed 64-bit
    integer (the 32-bit range is a subset), larger ones in scientific
    notation such as ``1.23e+15``. Everything else is fixed point, rounded
    half away from zero on the shortest decimal form of the float, so
    ``2.675`` shows as ``2.68``.
    """
    digits = config.fraction_digits
    if is_whole(value):
        if INT64_MIN <= value <= INT64_MAX:
            return str(int(value))
        return f"{value:.{digits}e}"

    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # 정수부 + 소수부 + 반올림 자리올림 여유
        ctx.prec = len(str(int(abs(value)))) + digits + 2
        rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:f}"


def format_outcome(outcome: Outcome, config: EngineConfig = DEFAULT_CONFIG) -> str:
    if isinstance(outcome, Err):
        return config.error_marker
    return format_value(outcome.value, config)
