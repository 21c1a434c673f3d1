from __future__ import annotations

import pytest

from haloinfo.domain.model import Coordinates, DataProvenance, FeatureAttributes
from haloinfo.domain.reconciliation import WARNINGS, merge_records
from tests.support.catalog import make_candidate, make_identity


def test_identity_fields_always_come_from_tile() -> None:
    identity = make_identity(
        "LFEV", name="Chateauroux", country="FR", coordinates=Coordinates(1.72, 46.78)
    )
    matched = make_candidate(
        "LFXX", name="Other name", country="BE", coordinates=Coordinates(4.0, 50.0)
    )

    merged = merge_records(identity, matched)

    assert merged.identifier == "LFEV"
    assert merged.name == "Chateauroux"
    assert merged.country == "FR"
    assert merged.coordinates == Coordinates(1.72, 46.78)
    assert merged.type == identity.type
    assert merged.catalog_identifier == "LFXX"
    assert merged.catalog_name == "Other name"


def test_matched_record_supplies_attributes() -> None:
    identity = make_identity(attributes=FeatureAttributes(elevation_m=150, frequency_mhz=118.5))
    matched = make_candidate(elevation_m=207)

    merged = merge_records(identity, matched)

    assert merged.provenance is DataProvenance.HYBRID_VERIFIED
    assert merged.is_verified
    assert merged.elevation == 207
    assert merged.frequency is None
    assert merged.warning is None
    assert merged.catalog_id == "cat-1"


def test_unmatched_record_keeps_tile_attributes_and_warns() -> None:
    identity = make_identity(attributes=FeatureAttributes(elevation_m=150))

    merged = merge_records(identity, None)

    assert merged.provenance is DataProvenance.VECTOR_ONLY
    assert merged.elevation == 150
    assert merged.warning == WARNINGS[DataProvenance.VECTOR_ONLY]
    assert merged.catalog_id is None


def test_error_fallback_is_distinct_from_vector_only() -> None:
    merged = merge_records(make_identity(), None, provenance=DataProvenance.ERROR_FALLBACK)

    assert merged.provenance is DataProvenance.ERROR_FALLBACK
    assert merged.warning
    assert merged.warning != WARNINGS[DataProvenance.VECTOR_ONLY]


def test_merged_record_is_immutable() -> None:
    merged = merge_records(make_identity(), make_candidate())

    with pytest.raises(AttributeError):
        merged.name = "changed"  # type: ignore[misc]
    with pytest.raises(TypeError):
        merged.raw_attributes["icao_code"] = "changed"  # type: ignore[index]


@pytest.mark.parametrize(
    ("matched", "provenance"),
    [
        (None, DataProvenance.HYBRID_VERIFIED),
        (make_candidate(), DataProvenance.VECTOR_ONLY),
    ],
)
def test_inconsistent_provenance_is_rejected(
    matched: object, provenance: DataProvenance
) -> None:
    with pytest.raises(ValueError, match="provenance|hybrid_verified"):
        merge_records(make_identity(), matched, provenance=provenance)  # type: ignore[arg-type]
