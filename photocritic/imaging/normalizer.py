"""ImageNormalizer — bounded, aspect-preserving JPEG re-encode for transmission."""
import logging
import math
from dataclasses import dataclass

import cv2
import numpy as np

from photocritic.constants import JPEG_EXTENSION, MSG_NORMALIZED
from photocritic.errors import DecodeError, NormalizationError
from photocritic.imaging.presets import DEFAULT_MODE, ProcessingMode, get_preset
from photocritic.transport.codec import decode_image, to_data_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedImage:
    data: bytes
    width: int
    height: int
    mode: ProcessingMode


# ── pure helpers (module-level so tests can import them directly) ──────────────


def _round_half_up(value: float) -> int:
    return max(1, math.floor(value + 0.5))


def calculate_target_size(
    original_width: int,
    original_height: int,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """Fit (width, height) inside the bounds, keeping aspect ratio and never upscaling."""
    aspect_ratio = original_width / original_height

    if aspect_ratio > 1:
        width = min(max_width, original_width)
        height = width / aspect_ratio
        if height > max_height:
            height = max_height
            width = height * aspect_ratio
    else:
        height = min(max_height, original_height)
        width = height * aspect_ratio
        if width > max_width:
            width = max_width
            height = width / aspect_ratio

    return _round_half_up(width), _round_half_up(height)


def _as_bgr(frame: np.ndarray) -> np.ndarray:
    match frame.ndim, frame.shape[-1] if frame.ndim == 3 else None:
        case (2, _):
            return frame
        case (3, 1):
            return frame[:, :, 0]
        case (3, 3):
            return frame
        case (3, 4):
            return cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
        case shape:
            raise NormalizationError(f"unsupported frame layout {shape}")


# ── public API ────────────────────────────────────────────────────────────────


def normalize_frame(frame: np.ndarray, mode: ProcessingMode | str = DEFAULT_MODE) -> NormalizedImage:
    """Resize a raw BGR/gray frame into the preset bounds and encode it as JPEG.

    Raises NormalizationError on any failure; the source frame is never modified.
    Pixel buffers are released on every exit path, so a traceback never pins them.
    """
    try:
        preset = get_preset(mode)
    except ValueError as exc:
        raise NormalizationError(f"unknown processing mode {mode!r}") from exc

    if not isinstance(frame, np.ndarray) or frame.size == 0 or frame.ndim not in (2, 3):
        raise NormalizationError("frame is empty or not an image buffer")

    height, width = frame.shape[:2]
    target_width, target_height = calculate_target_size(
        width, height, preset.max_width, preset.max_height
    )

    source = resized = encoded = None
    try:
        source = _as_bgr(frame)
        resized = cv2.resize(
            source, (target_width, target_height), interpolation=cv2.INTER_AREA
        )
        ok, encoded = cv2.imencode(
            JPEG_EXTENSION, resized, [cv2.IMWRITE_JPEG_QUALITY, preset.jpeg_quality]
        )
        if not ok:
            raise NormalizationError("JPEG encoder rejected the frame")
        data = encoded.tobytes()
    except cv2.error as exc:
        raise NormalizationError("OpenCV resize/encode failed") from exc
    finally:
        frame = source = resized = encoded = None

    logger.debug(
        MSG_NORMALIZED, width, height, target_width, target_height,
        ProcessingMode(mode).value, len(data),
    )
    return NormalizedImage(
        data=data, width=target_width, height=target_height, mode=ProcessingMode(mode)
    )


def normalize_bytes(data: bytes, mode: ProcessingMode | str = DEFAULT_MODE) -> NormalizedImage:
    """Decode compressed image bytes (JPEG, PNG, ...) and normalize them."""
    if not data:
        raise NormalizationError("no image bytes")

    decoded = None
    try:
        decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
        if decoded is None:
            raise NormalizationError("unsupported or corrupt image data")
        return normalize_frame(decoded, mode)
    except cv2.error as exc:
        raise NormalizationError("OpenCV could not decode the image") from exc
    finally:
        decoded = None


def normalize_data_url(data_url: str, mode: ProcessingMode | str = DEFAULT_MODE) -> str:
    """Data URL (or bare base64) in, ``data:image/jpeg;base64,...`` out."""
    try:
        raw = decode_image(data_url)
    except DecodeError as exc:
        raise NormalizationError("failed to load image") from exc
    return to_data_url(normalize_bytes(raw, mode).data)
