from __future__ import annotations

import pytest

from haloinfo.domain.extraction.labels import (
    parse_channel_frequencies,
    parse_elevation,
    parse_frequency,
    parse_runway_designator,
    parse_runway_lengths,
    scan_fields,
)
from haloinfo.domain.model import LengthUnit


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("118.500 MHz", 118.5),
        ("LFEV TWR 118.5", 118.5),
        ("ATIS 136.975", 136.975),
        ("UHF 243.000", 243.0),
        ("118500 kHz", 118.5),
        ("118500", 118.5),
    ],
)
def test_parse_frequency_reads_aviation_band(label: str, expected: float) -> None:
    assert parse_frequency(label) == expected


@pytest.mark.parametrize("label", ["500.000 MHz", "100.000 MHz", "138.000", "RWY 09/27", ""])
def test_parse_frequency_rejects_out_of_band_values(label: str) -> None:
    assert parse_frequency(label) is None


def test_parse_frequency_skips_out_of_band_and_takes_next_match() -> None:
    assert parse_frequency("500.000 then 122.800") == 122.8


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("680 ft MSL", 207),
        ("LFEV 207 m MSL", 207),
        ("elevation 1000 FT AMSL", 305),
        ("-5 m MSL", -5),
    ],
)
def test_parse_elevation_converts_to_meters(label: str, expected: int) -> None:
    assert parse_elevation(label) == expected


@pytest.mark.parametrize("label", ["680 ft", "1200 m", "FL 65", "no elevation here"])
def test_parse_elevation_requires_msl_suffix(label: str) -> None:
    assert parse_elevation(label) is None


def test_parse_runway_lengths_reads_units_and_bounds() -> None:
    lengths = parse_runway_lengths("RWY 09/27 1200 m, RWY 18/36 2600 ft, taxiway 50 m")

    assert [(length.value, length.unit) for length in lengths] == [
        (1200, LengthUnit.METER),
        (2600, LengthUnit.FOOT),
    ]
    assert [length.meters for length in lengths] == [1200, 792]


@pytest.mark.parametrize("label", ["207 m MSL", "680 ft AMSL", "300 m AGL", "15000 m"])
def test_parse_runway_lengths_ignores_altitudes_and_implausible_values(label: str) -> None:
    assert parse_runway_lengths(label) == []


def test_parse_runway_lengths_accepts_spelled_out_units() -> None:
    lengths = parse_runway_lengths("800 metres grass, 3000 feet paved")

    assert [length.meters for length in lengths] == [800, 914]


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("RWY 09/27 grass", "09/27"),
        ("03L/21R", "03L/21R"),
        ("rwy 18c/36c", "18C/36C"),
    ],
)
def test_parse_runway_designator(label: str, expected: str) -> None:
    assert parse_runway_designator(label) == expected


@pytest.mark.parametrize("label", ["45/63", "00/18", "2024/05/01", "no runway"])
def test_parse_runway_designator_rejects_invalid_headings(label: str) -> None:
    assert parse_runway_designator(label) is None


def test_parse_channel_frequencies_labels_channels() -> None:
    result = parse_channel_frequencies("Apron 121.875 / TWR 118.500 / Ground 500.000")

    assert result == [("Apron", 121.875), ("Tower", 118.5)]


def test_scan_fields_returns_first_hit_in_field_order() -> None:
    props: dict[str, object] = {
        "name_label": "122.500",
        "name_label_full": "   ",
        "label": "119.250",
    }

    result = scan_fields(props, ("name_label_full", "name_label", "label"), parse_frequency)

    assert result == 122.5
