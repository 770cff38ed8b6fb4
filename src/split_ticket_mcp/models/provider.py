"""Models for data returned by the journey provider.

Field names follow Python conventions; the provider's camelCase keys are
accepted through aliases so raw JSON validates directly.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LocationKind(str, Enum):
    """Kind of place the provider knows about."""

    STATION = "station"
    STOP = "stop"
    ADDRESS = "address"


class Location(BaseModel):
    """A station, stop or address understood by the provider."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str | None = None
    name: str
    kind: LocationKind = LocationKind.STATION

    @model_validator(mode="before")
    @classmethod
    def _from_provider(cls, data: Any) -> Any:
        """Map the provider's `type` to a kind and fill in a name for addresses."""
        if not isinstance(data, dict) or "kind" in data:
            return data

        data = dict(data)
        provider_type = data.get("type")
        if provider_type in (LocationKind.STATION.value, LocationKind.STOP.value):
            data["kind"] = provider_type
        elif provider_type is not None:
            # "location" (addresses) and POIs
            data["kind"] = LocationKind.ADDRESS.value

        if not data.get("name"):
            data["name"] = data.get("address") or data.get("id") or ""
        return data


class Line(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    product: str | None = None


class Stopover(BaseModel):
    """An intermediate stop within a leg."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    stop: Location
    arrival: datetime | None = None
    planned_arrival: datetime | None = Field(default=None, alias="plannedArrival")
    departure: datetime | None = None
    planned_departure: datetime | None = Field(default=None, alias="plannedDeparture")


class Leg(BaseModel):
    """One vehicle (or walking) segment of a journey."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    origin: Location
    destination: Location
    departure: datetime | None = None
    planned_departure: datetime | None = Field(default=None, alias="plannedDeparture")
    arrival: datetime | None = None
    planned_arrival: datetime | None = Field(default=None, alias="plannedArrival")
    line: Line | None = None
    walking: bool = False
    stopovers: list[Stopover] = []

    @property
    def departure_time(self) -> datetime | None:
        """Realtime departure if known, otherwise the planned one."""
        return self.departure or self.planned_departure

    @property
    def arrival_time(self) -> datetime | None:
        """Realtime arrival if known, otherwise the planned one."""
        return self.arrival or self.planned_arrival


class Price(BaseModel):
    model_config = ConfigDict(extra="ignore")

    amount: float | None = None
    currency: str | None = None


class Journey(BaseModel):
    """An itinerary between the searched origin and destination."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    legs: list[Leg] = Field(min_length=1)
    price: Price | None = None
    refresh_token: str | None = Field(default=None, alias="refreshToken")

    @property
    def transfers(self) -> int:
        return len(self.legs) - 1

    @property
    def first_departure(self) -> datetime | None:
        return self.legs[0].departure_time

    @property
    def price_amount(self) -> float | None:
        """Ticket price, or None when the provider did not return a usable one.

        Zero amounts are placeholders for unpriced journeys and count as missing.
        """
        if self.price is None or not self.price.amount:
            return None
        if self.price.amount <= 0:
            return None
        return self.price.amount
