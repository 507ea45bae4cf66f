from dataclasses import dataclass


@dataclass(frozen=True)
class SamplingParams:
    """Generation parameters forwarded to the upstream model."""

    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40
    max_output_tokens: int = 2048
