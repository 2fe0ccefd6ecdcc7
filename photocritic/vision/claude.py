"""ClaudeVisionClient — Anthropic Claude vision backend (direct API or AWS Bedrock)."""
import logging

from anthropic import AsyncAnthropic, AsyncAnthropicBedrock

from photocritic.constants import (
    ANALYSIS_PROMPT,
    BACKEND_ANTHROPIC,
    BACKEND_BEDROCK,
    IMAGE_MEDIA_TYPE,
    MSG_VISION_CALL,
)
from photocritic.errors import InvocationError
from photocritic.transport.codec import encode_image
from photocritic.vision.client import InferenceSettings, VisionClient

logger = logging.getLogger(__name__)


class ClaudeVisionClient(VisionClient):
    """Wraps a long-lived Anthropic SDK client; holds no per-request state."""

    def __init__(
        self,
        client: AsyncAnthropic | AsyncAnthropicBedrock,
        model: str,
        settings: InferenceSettings = InferenceSettings(),
        name: str = BACKEND_ANTHROPIC,
    ) -> None:
        self._client = client
        self._model = model
        self._settings = settings
        self._name = name

    @classmethod
    def from_api_key(
        cls, api_key: str, model: str, *, timeout: float, max_retries: int
    ) -> "ClaudeVisionClient":
        client = AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=max_retries)
        return cls(client, model, name=BACKEND_ANTHROPIC)

    @classmethod
    def for_bedrock(
        cls, aws_region: str, model: str, *, timeout: float, max_retries: int
    ) -> "ClaudeVisionClient":
        client = AsyncAnthropicBedrock(
            aws_region=aws_region, timeout=timeout, max_retries=max_retries
        )
        return cls(client, model, name=BACKEND_BEDROCK)

    async def analyze(self, image_bytes: bytes, prompt: str | None = None) -> str:
        logger.info(MSG_VISION_CALL, self._name, self._model)
        try:
            message = await self._client.messages.create(
                model=self._model,
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
                top_p=self._settings.top_p,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": IMAGE_MEDIA_TYPE,
                                    "data": encode_image(image_bytes),
                                },
                            },
                            {"type": "text", "text": prompt or ANALYSIS_PROMPT},
                        ],
                    }
                ],
            )
        except Exception as exc:
            raise InvocationError(f"{self._name} request failed") from exc

        texts = [
            block.text
            for block in (getattr(message, "content", None) or [])
            if getattr(block, "type", None) == "text"
        ]
        match texts:
            case [str() as text, *_] if text.strip():
                return text.strip()
            case _:
                raise InvocationError(f"no text content in {self._name} response")
