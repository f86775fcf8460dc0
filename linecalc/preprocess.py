"""
Text stages that run before a line reaches the grammar.

Each stage takes and returns plain text; only :func:`split_assignment`
can fail (an assignment target that is not a legal identifier).
"""
import re
from typing import Iterable, List, NamedTuple, Optional

from .config import DEFAULT_CONFIG
from .errors import CalcError, ErrorKind


# ----- Comment / operator glyphs -----

def strip_comments(text: str, marker: str = DEFAULT_CONFIG.comment_marker) -> str:
    idx = text.find(marker)
    if idx < 0:
        return text
    return text[:idx].strip()


def normalize_operators(text: str,
                        multiplication: Iterable[str] = DEFAULT_CONFIG.multiplication_glyphs,
                        division: Iterable[str] = DEFAULT_CONFIG.division_glyphs) -> str:
    for glyph in multiplication:
        text = text.replace(glyph, "*")
    for glyph in division:
        text = text.replace(glyph, "/")
    return text


# ----- Percentage idioms -----

NUMBER = r"\d+(?:\.\d+)?"
NAME = r"[A-Za-z_][A-Za-z0-9_]*"

# B: 숫자 또는 (여러 단어일 수 있는) 변수명
_BASE = rf"(?<![\w.])(?P<base>{NUMBER}|{NAME}(?:[ \t]+{NAME})*)"
_PCT = rf"(?<![\w.])(?P<pct>{NUMBER})"


# +% / -% 규칙: 단어 묶음 전체를 먼저 먹고 꼬리는 선택적으로 확인 (긴 줄에서도 선형)
def _trailing_percent(sign: str) -> re.Pattern:
    return re.compile(rf"{_BASE}(?:\s*{sign}\s*(?P<pct>{NUMBER})\s*%)?")


class RewriteRule(NamedTuple):
    name: str
    pattern: re.Pattern
    template: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.expand_match, text)

    def expand_match(self, m) -> str:
        # 꼬리 없이 잡힌 단어 묶음은 그대로 둠
        if m.group("pct") is None:
            return m.group(0)
        return m.expand(self.template)


# 순서 주의: off / of 를 먼저 처리해야 +% / -% 규칙이 잘못 잡지 않음
PERCENT_RULES: List[RewriteRule] = [
    RewriteRule(
        "percent_off",
        re.compile(rf"{_PCT}\s*%\s+off\s+{_BASE}"),
        r"(\g<base> - \g<base> * \g<pct> / 100)",
    ),
    RewriteRule(
        "percent_of",
        re.compile(rf"{_PCT}\s*%\s+of\s+{_BASE}"),
        r"(\g<base> * \g<pct> / 100)",
    ),
    RewriteRule(
        "add_percent",
        _trailing_percent(r"\+"),
        r"(\g<base> * (1 + \g<pct> / 100))",
    ),
    RewriteRule(
        "subtract_percent",
        _trailing_percent("-"),
        r"(\g<base> * (1 - \g<pct> / 100))",
    ),
]


def rewrite_percentages(text: str, rules: Optional[Iterable[RewriteRule]] = None) -> str:
    """Rewrite ``A% off B``, ``A% of B``, ``B + A%`` and ``B - A%`` into plain arithmetic.

    Rules are applied in list order and every rule replaces all of its
    matches, so several idioms may appear in one line. Nothing is evaluated.
    """
    for rule in PERCENT_RULES if rules is None else rules:
        text = rule.apply(text)
    return text


# ----- Multi-word identifiers -----

# 단어 묶음은 한 번에 먹고, 뒤에 연산자/괄호/= 또는 줄 끝이 올 때만 합침
_WORD_RUN = re.compile(r"(?<![A-Za-z0-9_])[A-Za-z][A-Za-z0-9]*(?:[ \t]+[A-Za-z0-9]+)*")
_RUN_END = re.compile(r"[ \t]*(?:[=+\-*/^()]|$)")


def _join_run(m) -> str:
    if not _RUN_END.match(m.string, m.end()):
        return m.group(0)
    return "_".join(m.group(0).split())


def normalize_identifiers(text: str) -> str:
    return _WORD_RUN.sub(_join_run, text)


# ----- Assignment -----

_TARGET = re.compile(NAME)


class Assignment(NamedTuple):
    target: Optional[str]
    expression: str


def split_assignment(text: str) -> Assignment:
    parts = text.split("=")
    if len(parts) != 2:
        return Assignment(None, text.strip())

    target = parts[0].strip()
    if not _TARGET.fullmatch(target):
        raise CalcError(f"invalid assignment target {target!r}", ErrorKind.SYNTAX)
    return Assignment(target, parts[1].strip())
