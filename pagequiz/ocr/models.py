import re
from dataclasses import dataclass
from enum import Enum

NO_TEXT_MESSAGE = "No text detected, please retake the photo."
READ_ERROR_MESSAGE = "Could not read the text, please try again."

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return _WHITESPACE_RE.sub(" ", raw).strip()


def is_valid_text(text: str, min_length: int = 5) -> bool:
    return len(normalize_text(text)) > min_length


class ExtractionStatus(Enum):
    OK = "ok"
    NO_TEXT = "no_text"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the text extractor for one image.

    For NO_TEXT and READ_ERROR, ``text`` holds the user-facing fallback
    message instead of recognized text.
    """

    status: ExtractionStatus
    text: str

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK

    @classmethod
    def success(cls, text: str) -> "ExtractionResult":
        return cls(ExtractionStatus.OK, text)

    @classmethod
    def no_text(cls) -> "ExtractionResult":
        return cls(ExtractionStatus.NO_TEXT, NO_TEXT_MESSAGE)

    @classmethod
    def read_error(cls) -> "ExtractionResult":
        return cls(ExtractionStatus.READ_ERROR, READ_ERROR_MESSAGE)
