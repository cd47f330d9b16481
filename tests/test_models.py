"""Tests for data model classes."""
import dataclasses

import pytest

from pccs_tutor.models import ColorEntry, Hue, PaletteColor, Settings, Tone


def test_tone_creation():
    t = Tone(id="v", name="Vivid", label="01 Vivid", saturation=100, lightness=50)
    assert t.description == ""
    assert t.saturation == 100


def test_hue_is_frozen():
    h = Hue(id=2, name="Red", angle=355)
    with pytest.raises(dataclasses.FrozenInstanceError):
        h.angle = 0


def test_color_entry_css_and_hex():
    c = ColorEntry(
        id="p-18", tone_id="p", tone_name="Pale", tone_label="09 Pale",
        hue_id=18, hue_name="Blue", hue=0, saturation=0, lightness=100,
    )
    assert c.css == "hsl(0, 0%, 100%)"
    assert c.hex == "#ffffff"


def test_settings_defaults_empty():
    s = Settings()
    assert (s.base_url, s.api_key, s.model) == ("", "", "")


def test_settings_to_record():
    s = Settings(base_url="u", api_key="k", model="m")
    assert s.to_record() == {"baseUrl": "u", "apiKey": "k", "model": "m"}


def test_palette_color_default_reason():
    assert PaletteColor(name="Navy", hex="#000080").reason == ""
