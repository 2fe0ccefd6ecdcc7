"""PhotoAnalyzer — server side of the pipeline: decode → invoke → extract → validate."""
import logging
import time

from photocritic.analysis.extractor import extract_payload
from photocritic.analysis.validator import StructuredAnalysis, validate_analysis
from photocritic.constants import (
    ANALYSIS_PROMPT,
    MSG_ANALYZE_OK,
    MSG_ANALYZE_REQUEST,
    MSG_RAW_REPLY,
)
from photocritic.errors import InvalidRequest, MalformedPayload, NoPayloadFound, ValidationError
from photocritic.transport.codec import decode_image
from photocritic.vision.client import VisionClient

logger = logging.getLogger(__name__)


class PhotoAnalyzer:
    """Runs one analysis per call. Safe to share across concurrent requests."""

    def __init__(self, vision_client: VisionClient, prompt: str = ANALYSIS_PROMPT) -> None:
        self._vision = vision_client
        self._prompt = prompt

    async def analyze(self, encoded_image: str) -> StructuredAnalysis:
        """Raises a ClientInputError subclass for bad input, ProcessingError otherwise."""
        if not encoded_image:
            raise InvalidRequest("image data is required")

        logger.info(MSG_ANALYZE_REQUEST, len(encoded_image))
        started = time.monotonic()

        image_bytes = decode_image(encoded_image)
        reply = await self._vision.analyze(image_bytes, self._prompt)

        try:
            analysis = validate_analysis(extract_payload(reply))
        except MalformedPayload as exc:
            logger.warning(MSG_RAW_REPLY, exc.payload)
            raise
        except (NoPayloadFound, ValidationError):
            logger.warning(MSG_RAW_REPLY, reply)
            raise

        logger.info(MSG_ANALYZE_OK, analysis.score, time.monotonic() - started)
        return analysis
