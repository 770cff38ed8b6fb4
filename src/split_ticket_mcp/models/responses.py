from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from split_ticket_mcp.models.provider import Journey, Location


class SplitOption(BaseModel):
    """A priced split of one journey into two separate tickets."""

    split_station: Location
    is_transfer: bool = Field(description="Whether the split happens at a change of trains")
    price1: float = Field(description="Fare from origin to the split station")
    price2: float = Field(description="Fare from the split station to destination")
    total_price: float
    savings: float = Field(
        description="Direct fare minus total_price (0 when the direct fare is unknown)"
    )
    leg1: Journey
    leg2: Journey
    is_cheaper: bool


class JourneyResult(BaseModel):
    journey: Journey
    direct_price: float | None = Field(
        default=None, description="Fare of the through ticket, if the provider returned one"
    )
    split_options: list[SplitOption] = Field(
        default_factory=list, description="Priced splits sorted by savings, best first"
    )


class SearchResult(BaseModel):
    """Direct journeys with their split options for one search window."""

    origin: Location
    destination: Location
    departure: datetime = Field(description="Start of the search window")
    results: list[JourneyResult]


class ErrorCode(str, Enum):
    """Failure categories reported to tool callers."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


class SearchSplitTicketsResponse(BaseModel):
    result: SearchResult | None = None
    count: int = Field(default=0, description="Number of journeys in result")
    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None


class SearchStationsResponse(BaseModel):
    stations: list[Location]
    count: int = Field(description="Number of stations returned")
    success: bool = True
    error: str | None = None
    error_code: ErrorCode | None = None
