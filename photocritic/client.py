"""AnalysisClient — client side of the pipeline: normalize → encode → POST → relabel."""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import httpx

from photocritic.constants import (
    ANALYZE_PATH,
    DEFAULT_CLIENT_TIMEOUT,
    DEFAULT_SERVER_URL,
    HEALTH_PATH,
    MIN_ENCODED_IMAGE_LENGTH,
    MSG_HEALTH_FAIL,
    MSG_IMAGE_TOO_SMALL,
    MSG_SENDING,
)
from photocritic.errors import InvalidRequest
from photocritic.imaging.normalizer import normalize_bytes
from photocritic.imaging.presets import DEFAULT_MODE, ProcessingMode
from photocritic.transport.codec import decode_image, encode_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Feedback:
    composition: str
    lighting: str
    subject: str
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Presentation shape shown to the user."""
    overall_score: int
    feedback: Feedback
    strengths: list[str]
    timestamp: str

    @classmethod
    def from_response(cls, body: dict, now: datetime | None = None) -> "AnalysisResult":
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        return cls(
            overall_score=body["score"],
            feedback=Feedback(
                composition=body.get("composition", ""),
                lighting=body.get("lighting", ""),
                subject=body.get("subject", ""),
                suggestions=list(body.get("suggestions", [])),
            ),
            strengths=list(body.get("strengths", [])),
            timestamp=stamp,
        )

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "feedback": {
                "composition": self.feedback.composition,
                "lighting": self.feedback.lighting,
                "subject": self.feedback.subject,
                "suggestions": list(self.feedback.suggestions),
            },
            "strengths": list(self.strengths),
            "timestamp": self.timestamp,
        }


class AnalysisClient:

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def connect(
        cls, base_url: str = DEFAULT_SERVER_URL, timeout: float = DEFAULT_CLIENT_TIMEOUT
    ) -> "AnalysisClient":
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def __aenter__(self) -> "AnalysisClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._http.aclose()

    async def health(self) -> bool:
        try:
            response = await self._http.get(HEALTH_PATH)
        except httpx.HTTPError as exc:
            logger.debug(MSG_HEALTH_FAIL, exc)
            return False
        return response.status_code == 200

    async def analyze_image(
        self, image: bytes, mode: ProcessingMode | str = DEFAULT_MODE
    ) -> AnalysisResult:
        """Raises NormalizationError before any network call, httpx errors after."""
        normalized = normalize_bytes(image, mode)
        payload = encode_image(normalized.data)
        logger.info(MSG_SENDING, len(payload), ProcessingMode(mode).value)

        response = await self._http.post(ANALYZE_PATH, json={"image": payload})
        response.raise_for_status()
        return AnalysisResult.from_response(response.json())

    async def analyze_data_url(
        self, data_url: str, mode: ProcessingMode | str = DEFAULT_MODE
    ) -> AnalysisResult:
        """Captured frames this short are blank or broken; they never reach the server."""
        if len(data_url) < MIN_ENCODED_IMAGE_LENGTH:
            raise InvalidRequest(MSG_IMAGE_TOO_SMALL)
        return await self.analyze_image(decode_image(data_url), mode)

    async def analyze_file(
        self, path: Path, mode: ProcessingMode | str = DEFAULT_MODE
    ) -> AnalysisResult:
        return await self.analyze_image(Path(path).read_bytes(), mode)
