"""OpenAIVisionClient — OpenAI GPT-4o vision backend."""
import logging

from openai import AsyncOpenAI

from photocritic.constants import ANALYSIS_PROMPT, BACKEND_OPENAI, MSG_VISION_CALL
from photocritic.errors import InvocationError
from photocritic.transport.codec import to_data_url
from photocritic.vision.client import InferenceSettings, VisionClient

logger = logging.getLogger(__name__)


class OpenAIVisionClient(VisionClient):

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        settings: InferenceSettings = InferenceSettings(),
    ) -> None:
        self._client = client
        self._model = model
        self._settings = settings

    @classmethod
    def from_api_key(
        cls, api_key: str, model: str, *, timeout: float, max_retries: int
    ) -> "OpenAIVisionClient":
        client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)
        return cls(client, model)

    async def analyze(self, image_bytes: bytes, prompt: str | None = None) -> str:
        logger.info(MSG_VISION_CALL, BACKEND_OPENAI, self._model)
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
                top_p=self._settings.top_p,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image_url",
                                "image_url": {"url": to_data_url(image_bytes)},
                            },
                            {"type": "text", "text": prompt or ANALYSIS_PROMPT},
                        ],
                    }
                ],
            )
        except Exception as exc:
            raise InvocationError("openai request failed") from exc

        match getattr(response, "choices", None):
            case [choice, *_]:
                content = choice.message.content
            case _:
                raise InvocationError("no choices in openai response")
        match content:
            case str() as text if text.strip():
                return text.strip()
            case _:
                raise InvocationError("no text content in openai response")
