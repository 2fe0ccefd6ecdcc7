"""VisionClient — abstract base for multimodal inference backends."""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from photocritic.constants import (
    INFERENCE_MAX_TOKENS,
    INFERENCE_TEMPERATURE,
    INFERENCE_TOP_P,
)


@dataclass(frozen=True)
class InferenceSettings:
    max_tokens: int = INFERENCE_MAX_TOKENS
    temperature: float = INFERENCE_TEMPERATURE
    top_p: float = INFERENCE_TOP_P


class VisionClient(ABC):
    @abstractmethod
    async def analyze(self, image_bytes: bytes, prompt: str | None = None) -> str:
        """Send one image plus one instruction and return the raw reply text.

        Raises InvocationError on any transport or service failure.
        """
        ...
