"""Shapes of the documents served by the upstream simulation service.

These models are used to check upstream payloads at the proxy boundary and to
read them when rendering pages. Extra keys are allowed everywhere so that new
upstream fields pass through untouched.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Upstream(BaseModel):
    model_config = ConfigDict(extra="allow")


class FlightTrace(_Upstream):
    time_stamps: List[float] = Field(default_factory=list)
    coords: List[Tuple[float, float, float]] = Field(default_factory=list)


class FlightData(_Upstream):
    max_velocity: float
    apogee_time: float
    apogee_altitude: float
    apogee_x: float
    apogee_y: float
    impact_x: float
    impact_y: float
    impact_velocity: float
    flight_data: FlightTrace


class WeatherData(_Upstream):
    time: str
    temperature: float
    pressure: float
    wind_speed: float
    wind_from_direction: float
    humidity: float


class Day(_Upstream):
    data: FlightData
    weather: WeatherData


# Current upstream sends one entry per forecast day; older builds sent a bare
# [flight, weather] pair.
StatusPayload = Union[List[Day], Tuple[FlightData, WeatherData]]
status_payload_adapter: TypeAdapter[StatusPayload] = TypeAdapter(StatusPayload)


def as_days(payload: StatusPayload) -> list[Day]:
    """Normalise either payload version into a list of days."""

    if isinstance(payload, tuple):
        flight, weather = payload
        return [Day(data=flight, weather=weather)]
    return list(payload)


class MonteCarloSettings(BaseModel):
    number_simulations: int = Field(..., gt=0)
    fuel_mass: float = Field(..., gt=0)
    wind_from_direction: float = Field(..., ge=0, lt=360)
    length: float = Field(..., gt=0)

    model_config = {
        "json_schema_extra": {
            "example": {
                "number_simulations": 100,
                "fuel_mass": 1.2,
                "wind_from_direction": 270,
                "length": 1.5,
            }
        }
    }


class ImpactPoint(_Upstream):
    x: float
    y: float


class MonteCarloResponse(_Upstream):
    data: List[ImpactPoint]
