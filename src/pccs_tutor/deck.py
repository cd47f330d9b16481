"""Deck construction and shuffling for the tone drill."""
import random

from pccs_tutor.models import ColorEntry
from pccs_tutor.palette import HUES, TONES, derive_color


def build_deck() -> list[ColorEntry]:
    """All 144 swatches, tones outer and hues inner, in catalog order."""
    return [derive_color(tone, hue) for tone in TONES for hue in HUES]


def shuffle_deck(deck: list[ColorEntry], rng: random.Random | None = None) -> list[ColorEntry]:
    """Return a uniformly shuffled copy of deck (Fisher-Yates)."""
    rng = rng or random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
