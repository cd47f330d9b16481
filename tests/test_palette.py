"""Tests for the tone/hue catalogs and swatch derivation."""
import dataclasses

import pytest

from pccs_tutor.palette import HUES, TONES, derive_color, get_tone, tone_row


def test_catalog_sizes():
    assert len(TONES) == 12
    assert len(HUES) == 12


def test_catalog_ids_are_unique():
    assert len({t.id for t in TONES}) == 12
    assert len({h.id for h in HUES}) == 12


def test_hue_angles_in_range():
    assert all(0 <= h.angle < 360 for h in HUES)


def test_tones_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TONES[0].lightness = 10


def test_derive_color_is_deterministic():
    for tone in TONES:
        for hue in HUES:
            assert derive_color(tone, hue) == derive_color(tone, hue)


def test_derive_color_keeps_tone_saturation():
    for tone in TONES:
        for hue in HUES:
            assert derive_color(tone, hue).saturation == tone.saturation


def test_derive_color_identifier():
    entry = derive_color(get_tone("dp"), HUES[3])
    assert entry.id == "dp-8"
    assert entry.tone_id == "dp"
    assert entry.hue_id == 8
    assert entry.tone_label == "04 Deep"
    assert entry.hue == 50


def test_yellow_band_correction():
    for tone in TONES:
        for hue in HUES:
            entry = derive_color(tone, hue)
            if tone.lightness < 50 and 30 < hue.angle < 60:
                assert entry.lightness == tone.lightness + 5
            else:
                assert entry.lightness == tone.lightness


def test_yellow_band_does_not_touch_tone_record():
    dark = get_tone("dk")
    derive_color(dark, HUES[3])
    assert dark.lightness == 25


def test_yellow_band_dark_tone_on_orange():
    entry = derive_color(get_tone("dk"), HUES[2])  # Orange, 35 degrees
    assert entry.lightness == 30


def test_yellow_band_skips_light_tones():
    entry = derive_color(get_tone("v"), HUES[3])  # Vivid is exactly 50
    assert entry.lightness == 50


def test_yellow_green_is_outside_band():
    entry = derive_color(get_tone("dk"), HUES[4])  # 75 degrees
    assert entry.lightness == 25


def test_css_string():
    entry = derive_color(get_tone("s"), HUES[3])
    assert entry.css == "hsl(50, 70%, 50%)"


def test_hex_for_vivid_green():
    entry = derive_color(get_tone("v"), HUES[5])  # hsl(120, 100%, 50%)
    assert entry.hex == "#00ff00"


def test_hex_is_well_formed():
    for tone in TONES:
        for entry in tone_row(tone):
            assert entry.hex.startswith("#") and len(entry.hex) == 7


def test_tone_row_covers_all_hues():
    row = tone_row(get_tone("p"))
    assert [c.hue_id for c in row] == [h.id for h in HUES]
    assert all(c.tone_id == "p" for c in row)


def test_get_tone_unknown_raises():
    with pytest.raises(KeyError):
        get_tone("zz")
