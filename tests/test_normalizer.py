"""ImageNormalizer tests"""
import cv2
import numpy as np
import pytest

from photocritic.errors import NormalizationError
from photocritic.imaging.normalizer import (
    calculate_target_size,
    normalize_bytes,
    normalize_data_url,
    normalize_frame,
)
from photocritic.imaging.presets import PRESETS, ProcessingMode, available_modes, get_preset
from photocritic.transport.codec import decode_image, to_data_url


def make_frame(width: int, height: int) -> np.ndarray:
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, : width // 2] = (40, 120, 200)
    return frame


def decoded_size(data: bytes) -> tuple[int, int]:
    image = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    height, width = image.shape[:2]
    return width, height


# ── presets ───────────────────────────────────────────────────────────────────


def test_preset_table():
    assert PRESETS[ProcessingMode.HIGH_QUALITY].max_width == 800
    assert PRESETS[ProcessingMode.BALANCED].max_height == 384
    assert PRESETS[ProcessingMode.COST_OPTIMIZED].quality == 0.6
    assert get_preset("balanced").jpeg_quality == 75


def test_available_modes_lists_every_mode():
    assert [m for m, _ in available_modes()] == list(ProcessingMode)


def test_unknown_mode_fails():
    with pytest.raises(NormalizationError):
        normalize_frame(make_frame(10, 10), "ultra")


# ── target size ───────────────────────────────────────────────────────────────


def test_landscape_fits_to_width():
    assert calculate_target_size(1600, 900, 800, 600) == (800, 450)


def test_landscape_falls_back_to_height():
    assert calculate_target_size(1000, 900, 800, 600) == (667, 600)


def test_portrait_fits_to_height():
    assert calculate_target_size(900, 1600, 800, 600) == (338, 600)


def test_portrait_falls_back_to_width():
    assert calculate_target_size(900, 1000, 200, 384) == (200, 222)
    assert calculate_target_size(300, 301, 240, 1000) == (240, 241)


def test_square_uses_height_branch():
    assert calculate_target_size(1000, 1000, 512, 384) == (384, 384)


def test_small_image_is_not_upscaled():
    assert calculate_target_size(200, 100, 800, 600) == (200, 100)
    assert calculate_target_size(100, 200, 800, 600) == (100, 200)


def test_rounds_half_up():
    assert calculate_target_size(801, 2, 800, 600) == (800, 2)
    assert calculate_target_size(3, 2, 1, 600) == (1, 1)


@pytest.mark.parametrize("mode", list(ProcessingMode))
@pytest.mark.parametrize("size", [(4032, 3024), (3024, 4032), (1920, 1080), (500, 2000), (333, 77)])
def test_target_size_preserves_ratio_within_bounds(mode, size):
    preset = PRESETS[mode]
    width, height = calculate_target_size(*size, preset.max_width, preset.max_height)
    assert width <= preset.max_width and height <= preset.max_height
    assert width <= size[0] and height <= size[1]
    assert abs(width - height * size[0] / size[1]) <= 1 or abs(height - width * size[1] / size[0]) <= 1


# ── encode ────────────────────────────────────────────────────────────────────


def test_normalize_frame_outputs_bounded_jpeg():
    result = normalize_frame(make_frame(1600, 1200), ProcessingMode.COST_OPTIMIZED)
    assert result.data[:2] == b"\xff\xd8"
    assert (result.width, result.height) == (240, 180)
    assert decoded_size(result.data) == (240, 180)


def test_normalize_frame_does_not_mutate_source():
    frame = make_frame(640, 480)
    before = frame.copy()
    normalize_frame(frame)
    assert np.array_equal(frame, before)


def test_normalize_frame_accepts_gray_and_bgra():
    gray = np.full((300, 400), 128, dtype=np.uint8)
    bgra = np.zeros((300, 400, 4), dtype=np.uint8)
    assert normalize_frame(gray).width == 400
    assert normalize_frame(bgra).height == 300


def test_higher_quality_gives_larger_output():
    rng = np.random.default_rng(0)
    frame = rng.integers(0, 255, size=(180, 240, 3), dtype=np.uint8)
    high = normalize_frame(frame, ProcessingMode.HIGH_QUALITY)
    low = normalize_frame(frame, ProcessingMode.COST_OPTIMIZED)
    assert len(high.data) > len(low.data)


def test_normalize_bytes_decodes_png():
    ok, png = cv2.imencode(".png", make_frame(1024, 768))
    assert ok
    result = normalize_bytes(png.tobytes(), ProcessingMode.BALANCED)
    assert (result.width, result.height) == (512, 384)


@pytest.mark.parametrize("bad", [b"", b"definitely not an image"])
def test_normalize_bytes_rejects_garbage(bad):
    with pytest.raises(NormalizationError):
        normalize_bytes(bad)


def test_normalize_frame_rejects_empty_frame():
    with pytest.raises(NormalizationError):
        normalize_frame(np.zeros((0, 0, 3), dtype=np.uint8))


def test_normalize_frame_wraps_engine_failure(monkeypatch):
    def boom(*_, **__):
        raise cv2.error("engine unavailable")

    monkeypatch.setattr("photocritic.imaging.normalizer.cv2.resize", boom)
    with pytest.raises(NormalizationError):
        normalize_frame(make_frame(100, 100))


def test_normalize_data_url_roundtrip_shape():
    ok, jpeg = cv2.imencode(".jpg", make_frame(1200, 800))
    out = normalize_data_url(to_data_url(jpeg.tobytes()), ProcessingMode.BALANCED)
    assert out.startswith("data:image/jpeg;base64,")
    assert decoded_size(decode_image(out)) == (512, 341)


def test_normalize_data_url_rejects_bad_base64():
    with pytest.raises(NormalizationError):
        normalize_data_url("data:image/jpeg;base64,%%%")


def _normalizer_arrays(exc: BaseException) -> list[str]:
    """Names of ndarray locals still held by normalizer frames in a traceback."""
    held = []
    tb = exc.__traceback__
    while tb is not None:
        frame = tb.tb_frame
        if frame.f_globals.get("__name__") == "photocritic.imaging.normalizer":
            held += [name for name, value in frame.f_locals.items() if isinstance(value, np.ndarray)]
        tb = tb.tb_next
    return held


@pytest.mark.parametrize("use_bytes", [False, True])
def test_failed_encode_releases_intermediate_buffers(monkeypatch, use_bytes):
    def boom(*_, **__):
        raise cv2.error("encoder unavailable")

    ok, png = cv2.imencode(".png", make_frame(640, 480))
    assert ok
    monkeypatch.setattr("photocritic.imaging.normalizer.cv2.imencode", boom)

    with pytest.raises(NormalizationError) as info:
        if use_bytes:
            normalize_bytes(png.tobytes())
        else:
            normalize_frame(make_frame(640, 480))

    assert _normalizer_arrays(info.value) == []
    assert _normalizer_arrays(info.value.__cause__) == []
