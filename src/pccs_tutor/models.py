"""Data classes for the color taxonomy and advisory results."""
import colorsys
from dataclasses import dataclass


@dataclass(frozen=True)
class Tone:
    id: str
    name: str
    label: str
    saturation: int
    lightness: int
    description: str = ""


@dataclass(frozen=True)
class Hue:
    id: int
    name: str
    angle: int


@dataclass(frozen=True)
class ColorEntry:
    """One rendered swatch: a tone paired with a hue."""
    id: str
    tone_id: str
    tone_name: str
    tone_label: str
    hue_id: int
    hue_name: str
    hue: int
    saturation: int
    lightness: int
    description: str = ""

    @property
    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"

    @property
    def hex(self) -> str:
        r, g, b = colorsys.hls_to_rgb(self.hue / 360, self.lightness / 100, self.saturation / 100)
        return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


@dataclass(frozen=True)
class Settings:
    base_url: str = ""
    api_key: str = ""
    model: str = ""

    def to_record(self) -> dict:
        return {"baseUrl": self.base_url, "apiKey": self.api_key, "model": self.model}


@dataclass(frozen=True)
class MoodMatch:
    tone: Tone
    reasoning: str


@dataclass(frozen=True)
class PaletteColor:
    name: str
    hex: str
    reason: str = ""


@dataclass(frozen=True)
class SeasonalAnalysis:
    season: str
    confidence: str
    reasoning: str
    undertone: str
    contrast: str
    primary_feature: str
    palette: tuple[PaletteColor, ...]
    worst_colors: tuple[PaletteColor, ...]
    fashion_advice: str = ""
