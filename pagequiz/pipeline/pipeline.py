from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from pagequiz.images.models import ImageArtifact
from pagequiz.ocr.models import ExtractionResult

TEXT_SEPARATOR = "\n\n---\n\n"


class PipelineState(Enum):
    AWAITING_INPUT = "awaiting_input"
    EXTRACTING_TEXT = "extracting_text"
    GENERATING_TEST = "generating_test"
    SHOWING_RESULT = "showing_result"


BUSY_STATES = frozenset({PipelineState.EXTRACTING_TEXT, PipelineState.GENERATING_TEST})


@dataclass(slots=True)
class PipelineContext:
    run_id: int
    images: tuple[ImageArtifact, ...] = ()
    extraction_results: list[ExtractionResult] = field(default_factory=list)
    valid_texts: list[str] = field(default_factory=list)
    joined_text: str = ""
    generated_result: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
