"""Combine a tile identity with its matched catalog record."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from haloinfo.domain.model import DataProvenance, MergedRecord

if TYPE_CHECKING:
    from haloinfo.domain.model import RemoteDetailRecord, TileIdentity

WARNINGS: Final = {
    DataProvenance.VECTOR_ONLY: "No confident catalog match found; limited data available.",
    DataProvenance.ERROR_FALLBACK: "Catalog lookup failed; limited data available.",
}


def merge_records(
    identity: TileIdentity,
    matched: RemoteDetailRecord | None,
    *,
    provenance: DataProvenance | None = None,
    warning: str | None = None,
) -> MergedRecord:
    """Build the output record.

    Identity fields (identifier, name, country, coordinates, type) always come
    from ``identity``, even when ``matched`` disagrees. Attributes come from
    ``matched`` when present; otherwise the tile-derived attributes are kept and
    a warning is attached. ``provenance`` may only override the unmatched case,
    to mark a failed lookup as ``error_fallback``.
    """

    if matched is not None:
        if provenance not in (None, DataProvenance.HYBRID_VERIFIED):
            raise ValueError(f"A matched record cannot have provenance {provenance}")
        return MergedRecord(
            identifier=identity.identifier,
            name=identity.name,
            country=identity.country,
            type=identity.type,
            coordinates=identity.coordinates,
            feature_category=identity.feature_category,
            provenance=DataProvenance.HYBRID_VERIFIED,
            attributes=matched.attributes,
            warning=warning,
            catalog_id=matched.catalog_id,
            catalog_name=matched.name,
            catalog_identifier=matched.identifier,
            raw_attributes=identity.raw_attributes,
        )

    resolved = provenance or DataProvenance.VECTOR_ONLY
    if resolved is DataProvenance.HYBRID_VERIFIED:
        raise ValueError("hybrid_verified requires a matched catalog record")
    return MergedRecord(
        identifier=identity.identifier,
        name=identity.name,
        country=identity.country,
        type=identity.type,
        coordinates=identity.coordinates,
        feature_category=identity.feature_category,
        provenance=resolved,
        attributes=identity.attributes,
        warning=warning or WARNINGS[resolved],
        raw_attributes=identity.raw_attributes,
    )
