class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""


class NoImagesError(PipelineError):
    """Raised when a run is submitted without images."""

    def __init__(self) -> None:
        super().__init__("Please add at least one image")


class PipelineBusyError(PipelineError):
    """Raised when a run is submitted while another is in flight."""

    def __init__(self) -> None:
        super().__init__("AI is already working, please wait...")


class NoUsableTextError(PipelineError):
    """Raised when no image yielded valid text."""

    def __init__(self) -> None:
        super().__init__("No text found or the text is too short")


class PipelineResetError(PipelineError):
    """Raised to the caller of a run that was discarded by reset()."""

    def __init__(self) -> None:
        super().__init__("The run was cancelled by a reset")


class PipelineGenerationError(PipelineError):
    """Raised when the test generator fails."""
