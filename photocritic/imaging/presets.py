"""Processing presets — fixed quality/cost tradeoffs for the analysis image."""
from dataclasses import dataclass
from enum import Enum


class ProcessingMode(str, Enum):
    HIGH_QUALITY = "high_quality"
    BALANCED = "balanced"
    COST_OPTIMIZED = "cost_optimized"


@dataclass(frozen=True)
class ProcessingPreset:
    max_width: int
    max_height: int
    quality: float

    @property
    def jpeg_quality(self) -> int:
        """Quality on OpenCV's 0-100 JPEG scale."""
        return round(self.quality * 100)


PRESETS: dict[ProcessingMode, ProcessingPreset] = {
    ProcessingMode.HIGH_QUALITY: ProcessingPreset(max_width=800, max_height=600, quality=0.9),
    ProcessingMode.BALANCED: ProcessingPreset(max_width=512, max_height=384, quality=0.75),
    ProcessingMode.COST_OPTIMIZED: ProcessingPreset(max_width=240, max_height=180, quality=0.6),
}

DEFAULT_MODE = ProcessingMode.BALANCED

_DESCRIPTIONS: dict[ProcessingMode, str] = {
    ProcessingMode.HIGH_QUALITY: "High Quality (800x600, best for analysis)",
    ProcessingMode.BALANCED: "Balanced (512x384, recommended)",
    ProcessingMode.COST_OPTIMIZED: "Cost Optimized (240x180, faster processing)",
}


def get_preset(mode: ProcessingMode | str) -> ProcessingPreset:
    return PRESETS[ProcessingMode(mode)]


def available_modes() -> list[tuple[ProcessingMode, str]]:
    return [(mode, _DESCRIPTIONS[mode]) for mode in ProcessingMode]
