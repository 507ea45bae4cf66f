import asyncio

from pagequiz.generation.base import BaseTestGenerator
from pagequiz.generation.exceptions import GenerationError
from pagequiz.images.models import ImageArtifact
from pagequiz.logging.logger import Log
from pagequiz.ocr.base import BaseTextExtractor
from pagequiz.ocr.models import ExtractionResult, is_valid_text, normalize_text
from pagequiz.pipeline.exceptions import NoUsableTextError, PipelineGenerationError
from pagequiz.pipeline.pipeline import TEXT_SEPARATOR, PipelineContext, PipelineStep


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: BaseTextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        results = await asyncio.gather(
            *(self._extract_one(image) for image in context.images)
        )
        context.extraction_results = list(results)
        # Images are not kept once their text has been read.
        context.images = ()
        ok_count = sum(1 for result in results if result.ok)
        Log.info(f"Run {context.run_id}: extracted text from {ok_count}/{len(results)} images")
        return context

    async def _extract_one(self, image: ImageArtifact) -> ExtractionResult:
        try:
            return await self._extractor.extract(image)
        except Exception as exc:
            Log.error(f"Text extractor raised for {image.filename}: {exc}")
            return ExtractionResult.read_error()


class SelectValidTextsStep(PipelineStep):
    def __init__(self, min_length: int = 5) -> None:
        self._min_length = min_length

    async def run(self, context: PipelineContext) -> PipelineContext:
        context.valid_texts = [
            normalize_text(result.text)
            for result in context.extraction_results
            if result.ok and is_valid_text(result.text, self._min_length)
        ]
        if not context.valid_texts:
            Log.warning(f"Run {context.run_id}: no usable text")
            raise NoUsableTextError()
        context.joined_text = TEXT_SEPARATOR.join(context.valid_texts)
        Log.info(
            f"Run {context.run_id}: {len(context.valid_texts)} valid texts, "
            f"{len(context.joined_text)} chars joined"
        )
        return context


class GenerateTestStep(PipelineStep):
    def __init__(self, generator: BaseTestGenerator) -> None:
        self._generator = generator

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.joined_text:
            raise ValueError("PipelineContext.joined_text must be set before generation")
        try:
            context.generated_result = await self._generator.generate(context.joined_text)
        except GenerationError as exc:
            raise PipelineGenerationError(str(exc)) from exc
        return context
