from pathlib import Path

from pagequiz.quizgen.exceptions import CompletionConfigError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the quiz prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled quiz_prompt.txt.

    Returns:
        The raw template string with a ``{text}`` placeholder.

    Raises:
        CompletionConfigError: if the file cannot be read or has no placeholder.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "quiz_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CompletionConfigError(f"Failed to load prompt template: {exc}") from exc
    if "{text}" not in template:
        raise CompletionConfigError(f"Prompt template {path.name} has no {{text}} placeholder")
    return template
