"""PCCS tone and hue catalogs, and swatch derivation."""
from pccs_tutor.models import ColorEntry, Hue, Tone

TONES: tuple[Tone, ...] = (
    Tone("v", "Vivid", "01 Vivid", 100, 50, "Pure, saturated, striking"),
    Tone("b", "Bright", "02 Bright", 85, 65, "Cheerful, clear"),
    Tone("s", "Strong", "03 Strong", 70, 45, "Dynamic, intense"),
    Tone("dp", "Deep", "04 Deep", 80, 30, "Traditional, profound"),
    Tone("lt", "Light", "05 Light", 55, 75, "Comfortable, fresh"),
    Tone("sf", "Soft", "06 Soft", 40, 60, "Gentle, natural"),
    Tone("d", "Dull", "07 Dull", 40, 45, "Steady, plain"),
    Tone("dk", "Dark", "08 Dark", 50, 25, "Mature, solid"),
    Tone("p", "Pale", "09 Pale", 25, 88, "Delicate, airy"),
    Tone("ltg", "Light Grayish", "10 Light Grayish", 15, 70, "Calm, mellow"),
    Tone("g", "Grayish", "11 Grayish", 15, 45, "Quiet, chic"),
    Tone("dkg", "Dark Grayish", "12 Dark Grayish", 10, 25, "Heavy, sturdy"),
)

HUES: tuple[Hue, ...] = (
    Hue(2, "Red", 355),
    Hue(4, "Red-Orange", 15),
    Hue(6, "Orange", 35),
    Hue(8, "Yellow", 50),
    Hue(10, "Yellow-Green", 75),
    Hue(12, "Green", 120),
    Hue(14, "Blue-Green", 160),
    Hue(16, "Green-Blue", 180),
    Hue(18, "Blue", 210),
    Hue(20, "Violet", 260),
    Hue(22, "Purple", 290),
    Hue(24, "Red-Purple", 320),
)

_TONES_BY_ID = {tone.id: tone for tone in TONES}

# Open interval of hue angles that read lighter than the rest at equal S/L.
YELLOW_BAND = (30, 60)
YELLOW_BAND_BOOST = 5


def get_tone(tone_id: str) -> Tone:
    return _TONES_BY_ID[tone_id]


def rendered_lightness(tone: Tone, hue: Hue) -> int:
    low, high = YELLOW_BAND
    if low < hue.angle < high and tone.lightness < 50:
        return tone.lightness + YELLOW_BAND_BOOST
    return tone.lightness


def derive_color(tone: Tone, hue: Hue) -> ColorEntry:
    """Derive the swatch for a (tone, hue) pair.

    Dark tones in the yellow/orange band are lifted by a few lightness points
    so they stay distinguishable from neighbouring tones. The tone record
    itself keeps its catalog lightness.
    """
    return ColorEntry(
        id=f"{tone.id}-{hue.id}",
        tone_id=tone.id,
        tone_name=tone.name,
        tone_label=tone.label,
        hue_id=hue.id,
        hue_name=hue.name,
        hue=hue.angle,
        saturation=tone.saturation,
        lightness=rendered_lightness(tone, hue),
        description=tone.description,
    )


def tone_row(tone: Tone) -> list[ColorEntry]:
    """All twelve swatches of one tone, in hue order (one chart row)."""
    return [derive_color(tone, hue) for hue in HUES]
