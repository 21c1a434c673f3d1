"""Pydantic models describing the OpenAIP catalog payloads.

Only the fields the reconciliation consumes are modelled; everything else is
ignored. Numeric enumerations are kept as the raw catalog codes and decoded in
the translator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class OpenAipBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, allow_inf_nan=False)


class GeometryPayload(OpenAipBaseModel):
    type: str
    coordinates: list[object] = Field(default_factory=list)


class MeasurePayload(OpenAipBaseModel):
    """A ``{value, unit}`` pair; the unit code depends on where it appears."""

    value: float
    unit: int = 0
    reference_datum: int | None = Field(default=None, alias="referenceDatum")


class FrequencyPayload(OpenAipBaseModel):
    value: float
    unit: int = 2
    type: int | None = None
    name: str | None = None
    primary: bool = False

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class RunwayDimensionPayload(OpenAipBaseModel):
    length: MeasurePayload | None = None
    width: MeasurePayload | None = None


class RunwaySurfacePayload(OpenAipBaseModel):
    main_composite: int | None = Field(default=None, alias="mainComposite")
    composition: list[int] = Field(default_factory=list)


class RunwayPayload(OpenAipBaseModel):
    designator: str | None = None
    true_heading: int | None = Field(default=None, alias="trueHeading")
    main_runway: bool | None = Field(default=None, alias="mainRunway")
    dimension: RunwayDimensionPayload | None = None
    surface: RunwaySurfacePayload | None = None

    _normalize_designator = field_validator("designator", mode="before")(_blank_to_none)


class OperatingPeriodPayload(OpenAipBaseModel):
    day_of_week: int | None = Field(default=None, alias="dayOfWeek")
    start_time: str | None = Field(default=None, alias="startTime")
    end_time: str | None = Field(default=None, alias="endTime")
    by_notam: bool = Field(default=False, alias="byNotam")
    sunrise: bool = False
    sunset: bool = False


class HoursOfOperationPayload(OpenAipBaseModel):
    operating_hours: list[OperatingPeriodPayload] = Field(
        default_factory=list, alias="operatingHours"
    )
    remarks: str | None = None


class CatalogItem(OpenAipBaseModel):
    """One airport, navaid or airspace as returned by the catalog."""

    catalog_id: str | None = Field(default=None, alias="_id")
    name: str | None = None
    icao_code: str | None = Field(default=None, alias="icaoCode")
    identifier: str | None = None
    country: str | None = None
    type: int | None = None
    geometry: GeometryPayload | None = None
    elevation: MeasurePayload | None = None
    frequency: FrequencyPayload | None = None
    frequencies: list[FrequencyPayload] = Field(default_factory=list)
    channel: str | None = None
    range: MeasurePayload | None = None
    magnetic_declination: float | None = Field(default=None, alias="magneticDeclination")
    aligned_true_north: bool | None = Field(default=None, alias="alignedTrueNorth")
    hours_of_operation: HoursOfOperationPayload | None = Field(
        default=None, alias="hoursOfOperation"
    )
    runways: list[RunwayPayload] = Field(default_factory=list)
    traffic_type: list[int] = Field(default_factory=list, alias="trafficType")
    icao_class: int | None = Field(default=None, alias="icaoClass")
    lower_limit: MeasurePayload | None = Field(default=None, alias="lowerLimit")
    upper_limit: MeasurePayload | None = Field(default=None, alias="upperLimit")
    ppr: bool | None = None
    private: bool | None = None
    remarks: str | None = None

    _normalize_text = field_validator(
        "name", "icao_code", "identifier", "country", "channel", "remarks", mode="before"
    )(_blank_to_none)

    @field_validator("catalog_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="before")
    @classmethod
    def _accept_id_alias(cls, value: object) -> object:
        # The proxy sometimes renames ``_id`` to ``id``.
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "id" in mapping_value and "_id" not in mapping_value:
                data: dict[str, object] = dict(mapping_value)
                data["_id"] = data.pop("id")
                return data
            return mapping_value
        return value

    @property
    def lookup_identifier(self) -> str | None:
        """Airports are keyed by ICAO code, navaids by their identifier."""

        return self.icao_code or self.identifier
