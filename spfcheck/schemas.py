from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def label(self) -> str:
        return f"Lat {self.latitude:.3f}, Lon {self.longitude:.3f}"


class LocationQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_name: str
    filter_tokens: frozenset[str] = Field(default_factory=frozenset)
    us_state_code: str | None = Field(default=None, pattern=r"^[A-Z]{2}$")
    likely_us: bool = False


class GeocodeCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    admin1: str | None = None
    admin2: str | None = None
    admin3: str | None = None
    country: str | None = None
    country_code: str | None = None
    latitude: float
    longitude: float


class ScoredCandidate(BaseModel):
    candidate: GeocodeCandidate
    score: int


class PlaceLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_label: str
    display_label: str


class ResolvedLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    primary_label: str
    display_label: str


class ForecastSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamps: tuple[str, ...] = ()
    uv_by_hour: tuple[float | None, ...] = ()
    daily_max_uv: float | None = None
    utc_offset_seconds: int | None = None


class AdvisoryState(str, Enum):
    YES = "yes"
    MAYBE = "maybe"
    NO = "no"
    UNKNOWN = "unknown"


class Advisory(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: AdvisoryState
    title: str
    subtitle: str


class UVReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    uv_now: float | None = None
    uv_max: float | None = None
    label: str
    location: ResolvedLocation


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: AdvisoryState
    headline: str
    subhead: str
    uv_now_text: str = "—"
    uv_max_text: str = "—"
    location_label: str = "—"
    coordinate_label: str | None = None
    show_manual_entry: bool = False


# Provider payloads. Only the fields the pipeline reads are declared; everything
# else a provider sends is ignored.


class OpenMeteoPlace(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    city: str | None = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    admin1: str | None = None
    admin2: str | None = None
    admin3: str | None = None
    country: str | None = None
    country_code: str | None = None

    def to_candidate(self) -> GeocodeCandidate:
        return GeocodeCandidate(
            name=self.name,
            admin1=self.admin1,
            admin2=self.admin2,
            admin3=self.admin3,
            country=self.country,
            country_code=self.country_code,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class OpenMeteoGeocodeResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[OpenMeteoPlace] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _null_results_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class BigDataCloudReverseResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    city: str | None = None
    locality: str | None = None
    principal_subdivision: str | None = Field(default=None, alias="principalSubdivision")
    country_name: str | None = Field(default=None, alias="countryName")
    country_code: str | None = Field(default=None, alias="countryCode")


class OpenMeteoHourly(BaseModel):
    model_config = ConfigDict(extra="ignore")

    time: list[str] = Field(default_factory=list)
    uv_index: list[float | None] = Field(default_factory=list)


class OpenMeteoDaily(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uv_index_max: list[float | None] = Field(default_factory=list)


class OpenMeteoForecastResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hourly: OpenMeteoHourly
    daily: OpenMeteoDaily | None = None
    utc_offset_seconds: int | None = None

    def to_series(self) -> ForecastSeries:
        daily_max = None
        if self.daily is not None and self.daily.uv_index_max:
            daily_max = self.daily.uv_index_max[0]
        return ForecastSeries(
            timestamps=tuple(self.hourly.time),
            uv_by_hour=tuple(self.hourly.uv_index),
            daily_max_uv=daily_max,
            utc_offset_seconds=self.utc_offset_seconds,
        )
