"""Classifies generated quiz text line by line for display.

Rules, first match wins:

1. ``QUESTION``: starts with ``<number>.`` or ``<number>)``, or contains ``?``.
2. ``OPTION``: starts with a letter A-D followed by ``)`` or ``.``. Marked
   correct when it contains a check mark or the locale's word for
   "correct" (case-insensitive).
3. ``TEXT``: any other non-blank line.
4. ``SPACER``: blank line.
"""

import re
from dataclasses import dataclass
from enum import Enum

CHECK_MARK = "✓"

CORRECT_WORDS: dict[str, str] = {
    "uz": "to'g'ri",
    "en": "correct",
    "ru": "правильн",
}

_QUESTION_RE = re.compile(r"^\d+[.)]")
_OPTION_RE = re.compile(r"^[A-D][.)]")
_APOSTROPHES = str.maketrans({"\u2018": "'", "\u2019": "'", "\u02bb": "'", "\u02bc": "'"})


class LineKind(Enum):
    QUESTION = "question"
    OPTION = "option"
    TEXT = "text"
    SPACER = "spacer"


@dataclass(frozen=True)
class FormattedLine:
    index: int
    kind: LineKind
    text: str
    correct: bool = False


def format_result(text: str, locale: str = "uz") -> list[FormattedLine]:
    correct_word = CORRECT_WORDS.get(locale.lower(), CORRECT_WORDS["uz"])
    return [
        _classify(index, line, correct_word)
        for index, line in enumerate(text.split("\n"))
    ]


def count_questions(lines: list[FormattedLine]) -> int:
    return sum(1 for line in lines if line.kind is LineKind.QUESTION)


def _classify(index: int, line: str, correct_word: str) -> FormattedLine:
    if _QUESTION_RE.match(line) or "?" in line:
        return FormattedLine(index, LineKind.QUESTION, line)
    if _OPTION_RE.match(line):
        correct = CHECK_MARK in line or correct_word in line.translate(_APOSTROPHES).lower()
        return FormattedLine(index, LineKind.OPTION, line, correct)
    if line.strip():
        return FormattedLine(index, LineKind.TEXT, line)
    return FormattedLine(index, LineKind.SPACER, line)
