from dataclasses import dataclass
from typing import Any

DEFAULT_FAILURE_MESSAGE = "Test generation failed"


@dataclass(frozen=True)
class GenerationRequest:
    """Body sent to the generation endpoint."""

    text: str

    def to_payload(self) -> dict[str, str]:
        return {"text": self.text}


@dataclass(frozen=True)
class GenerationResponse:
    """Tagged view of the endpoint's ``{result}`` / ``{error}`` payload."""

    result: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.error and bool(self.result)

    @property
    def failure_message(self) -> str:
        return self.error or DEFAULT_FAILURE_MESSAGE

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationResponse":
        if not isinstance(payload, dict):
            return cls(error=f"{DEFAULT_FAILURE_MESSAGE}: unexpected response")
        result = payload.get("result")
        error = payload.get("error")
        return cls(
            result=result if isinstance(result, str) else None,
            error=str(error) if error else None,
        )
