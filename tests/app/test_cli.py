from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from haloinfo.domain.model import (
    DataProvenance,
    FeatureAttributes,
    FeatureCategory,
    MergedRecord,
    TileIdentity,
)
from haloinfo.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path


def _write_feature(tmp_path: Path, feature: object) -> str:
    path = tmp_path / "feature.json"
    path.write_text(json.dumps(feature), encoding="utf-8")
    return str(path)


def test_lookup_prints_merged_record(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: dict[str, object] = {}

    def fake_lookup(
        raw_feature: object, *, category: FeatureCategory | None = None
    ) -> MergedRecord:
        captured["feature"] = raw_feature
        captured["category"] = category
        return MergedRecord(
            identifier="LFEV",
            name="Chateauroux",
            country="FR",
            type="apt",
            coordinates=None,
            feature_category=FeatureCategory.AIRPORT,
            provenance=DataProvenance.HYBRID_VERIFIED,
            attributes=FeatureAttributes(elevation_m=207),
        )

    monkeypatch.setattr(cli_module, "lookup_feature", fake_lookup)
    feature = {"sourceLayer": "airports", "properties": {"icao_code": "LFEV"}}

    cli_module.main(["lookup", _write_feature(tmp_path, feature), "--category", "airport"])

    output = json.loads(capsys.readouterr().out)
    assert captured == {"feature": feature, "category": FeatureCategory.AIRPORT}
    assert output["provenance"] == "hybrid_verified"
    assert output["attributes"]["elevation_m"] == 207


def test_extract_does_not_query_catalog(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def fail_lookup(*_: object, **__: object) -> MergedRecord:
        raise AssertionError("catalog lookup not expected")

    monkeypatch.setattr(cli_module, "lookup_feature", fail_lookup)
    feature = {
        "sourceLayer": "navaids",
        "geometry": {"type": "Point", "coordinates": [2.35, 48.85]},
        "properties": {"ident": "PGS", "frequency": 115.5},
    }

    cli_module.main(["extract", _write_feature(tmp_path, feature)])

    output = json.loads(capsys.readouterr().out)
    assert output["identifier"] == "PGS"
    assert output["feature_category"] == "navaid"
    assert output["attributes"]["frequency_mhz"] == 115.5
    assert output["coordinates"] == {"lon": 2.35, "lat": 48.85}


def test_invalid_feature_json_exits_with_usage_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["extract", str(path)])

    assert excinfo.value.code == 2


def test_missing_feature_file_exits_with_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["lookup", str(tmp_path / "absent.json")])

    assert excinfo.value.code == 2


def test_unexpected_failure_exits_with_error(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    def broken_identify(*_: object, **__: object) -> TileIdentity:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "identify_feature", broken_identify)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["extract", _write_feature(tmp_path, {"properties": {}})])

    assert excinfo.value.code == 1


def test_unknown_category_is_rejected_by_argparse(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["lookup", _write_feature(tmp_path, {}), "--category", "heliport"])

    assert excinfo.value.code == 2
