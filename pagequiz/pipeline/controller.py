from collections.abc import Callable, Sequence

from pagequiz.config.settings import Settings
from pagequiz.formatting.result_formatter import FormattedLine, format_result
from pagequiz.generation.base import BaseTestGenerator
from pagequiz.generation.factory import GeneratorFactory
from pagequiz.images.image_source import ImageSource
from pagequiz.images.models import ImageArtifact
from pagequiz.logging.logger import Log
from pagequiz.ocr.base import BaseTextExtractor
from pagequiz.ocr.factory import TextExtractorFactory
from pagequiz.pipeline.exceptions import (
    NoImagesError,
    PipelineBusyError,
    PipelineError,
    PipelineResetError,
)
from pagequiz.pipeline.pipeline import BUSY_STATES, PipelineContext, PipelineState
from pagequiz.pipeline.steps import ExtractTextStep, GenerateTestStep, SelectValidTextsStep
from pagequiz.session.context import SessionContext

StateListener = Callable[[PipelineState, str], None]


class PipelineController:
    """Sequences images through OCR and test generation.

    Pipeline: AWAITING_INPUT -> EXTRACTING_TEXT -> GENERATING_TEST -> SHOWING_RESULT.
    Any failure returns to AWAITING_INPUT with ``error_message`` set. At most
    one run is in flight; a second ``submit()`` is rejected, not queued.
    """

    def __init__(
        self,
        image_source: ImageSource,
        extractor: BaseTextExtractor,
        generator: BaseTestGenerator,
        *,
        min_text_length: int = 5,
        locale: str = "uz",
    ) -> None:
        self._image_source = image_source
        self._extract_step = ExtractTextStep(extractor)
        self._select_step = SelectValidTextsStep(min_text_length)
        self._generate_step = GenerateTestStep(generator)
        self._locale = locale
        self._state = PipelineState.AWAITING_INPUT
        self._result: str | None = None
        self._error_message = ""
        self._status_message = ""
        self._processing = False
        self._run_id = 0
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def result(self) -> str | None:
        return self._result

    @property
    def formatted_result(self) -> list[FormattedLine]:
        """The stored result classified for display, empty when there is none."""
        if self._result is None:
            return []
        return format_result(self._result, self._locale)

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def status_message(self) -> str:
        return self._status_message

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def image_source(self) -> ImageSource:
        return self._image_source

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener(state, status_message)`` on every transition."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def submit(self, images: Sequence[ImageArtifact] | None = None) -> str:
        """Run OCR and generation for the images (default: the image source's).

        Returns:
            The generated test text, also stored as ``result``.

        Raises:
            NoImagesError: no images; state unchanged.
            PipelineBusyError: a run is already in flight; it is not affected.
            NoUsableTextError, PipelineGenerationError: the run failed and the
                state is back to AWAITING_INPUT.
            PipelineResetError: reset() was called while this run was in flight.
        """
        if self._processing or self._state in BUSY_STATES:
            Log.warning("Rejected submit: a run is already in flight")
            raise PipelineBusyError()
        batch = tuple(images) if images is not None else self._image_source.images
        if not batch:
            error = NoImagesError()
            self._error_message = str(error)
            raise error

        self._run_id += 1
        run_id = self._run_id
        self._processing = True
        self._error_message = ""
        context = PipelineContext(run_id=run_id, images=batch)
        Log.info(f"Run {run_id} started with {len(batch)} images")

        try:
            self._transition(
                PipelineState.EXTRACTING_TEXT,
                f"Extracting text from {len(batch)} image(s)...",
            )
            context = await self._extract_step.run(context)
            context = await self._select_step.run(context)
            self._ensure_current(run_id)

            self._transition(PipelineState.GENERATING_TEST, "AI is generating the test...")
            context = await self._generate_step.run(context)
            self._ensure_current(run_id)
        except PipelineResetError:
            raise
        except Exception as exc:
            if run_id != self._run_id:
                Log.info(f"Run {run_id} discarded after reset: {exc}")
                raise PipelineResetError() from exc
            self._fail(run_id, exc)
            raise

        self._processing = False
        self._result = context.generated_result
        self._transition(PipelineState.SHOWING_RESULT, "")
        Log.info(f"Run {run_id} finished: {len(self._result)} chars generated")
        return self._result

    def reset(self) -> None:
        """Return to AWAITING_INPUT and drop images, result and any in-flight run."""
        self._run_id += 1
        self._processing = False
        self._result = None
        self._error_message = ""
        self._image_source.clear()
        self._transition(PipelineState.AWAITING_INPUT, "")
        Log.info("Pipeline reset")

    def _ensure_current(self, run_id: int) -> None:
        if run_id != self._run_id:
            Log.info(f"Run {run_id} discarded after reset")
            raise PipelineResetError()

    def _fail(self, run_id: int, exc: Exception) -> None:
        message = str(exc) if isinstance(exc, PipelineError) else f"Unexpected error: {exc}"
        Log.error(f"Run {run_id} failed: {message}")
        self._processing = False
        self._result = None
        self._error_message = message
        self._transition(PipelineState.AWAITING_INPUT, "")

    def _transition(self, state: PipelineState, status_message: str) -> None:
        self._state = state
        self._status_message = status_message
        for listener in list(self._listeners):
            try:
                listener(state, status_message)
            except Exception as exc:
                Log.error(f"Pipeline state listener failed: {exc}")


def build_controller(
    settings: Settings,
    session: SessionContext | None = None,
    image_source: ImageSource | None = None,
) -> PipelineController:
    """Build a PipelineController with all required adapters."""
    return PipelineController(
        image_source=image_source or ImageSource(
            max_images=settings.max_images,
            max_image_bytes=settings.max_image_bytes,
        ),
        extractor=TextExtractorFactory.create(settings),
        generator=GeneratorFactory.create(settings, session),
        min_text_length=settings.min_text_length,
        locale=settings.result_locale,
    )
