"""Carpool Schemas — post creation/update, responding, and the enriched feed item.

Invariants:
    - Creation passes the composite is_valid_carpool_request gate (future date,
      strict time, seats 1-7, type request|offer, destination 3-200 chars)
    - Updates validate only the fields they carry
    - Feed items expose reconciled responses, never raw stored entries
"""

from pydantic import Field, field_validator, model_validator

from campuspool.core.validate_carpool_request import (
    is_valid_carpool_request,
    is_valid_destination,
    is_valid_future_date,
    is_valid_notes,
    is_valid_passenger_count,
    is_valid_request_type,
    is_valid_time_format,
)
from campuspool.schemas.common import CamelModel, UtcDatetime


class CarpoolRequestCreate(CamelModel):
    type: str = "request"
    destination: str
    date: str
    time: str
    seats: float = 1
    notes: str = ""

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v: str) -> str:
        if not is_valid_notes(v):
            raise ValueError("notes must be at most 500 characters")
        return v.strip()

    @model_validator(mode="after")
    def check_request(self):
        if not is_valid_carpool_request(self.model_dump()):
            raise ValueError(
                "carpool request needs a 3-200 char destination, a future date, "
                "an HH:MM time, 1-7 seats and type 'request' or 'offer'",
            )
        self.destination = self.destination.strip()
        return self


class CarpoolRequestUpdate(CamelModel):
    type: str | None = None
    destination: str | None = None
    date: str | None = None
    time: str | None = None
    seats: float | None = None
    notes: str | None = None

    @field_validator("type")
    @classmethod
    def check_type(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_request_type(v):
            raise ValueError("type must be 'request' or 'offer'")
        return v

    @field_validator("destination")
    @classmethod
    def check_destination(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_destination(v):
            raise ValueError("destination must be 3-200 characters")
        return v.strip() if v else v

    @field_validator("date")
    @classmethod
    def check_date(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_future_date(v):
            raise ValueError("date must be in the future")
        return v

    @field_validator("time")
    @classmethod
    def check_time(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_time_format(v):
            raise ValueError("time must be HH:MM (24h)")
        return v

    @field_validator("seats")
    @classmethod
    def check_seats(cls, v: float | None) -> float | None:
        if v is not None and not is_valid_passenger_count(v):
            raise ValueError("seats must be between 1 and 7")
        return v

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_notes(v):
            raise ValueError("notes must be at most 500 characters")
        return v


class RespondRequest(CamelModel):
    message: str | None = Field(None, max_length=500)


class ResponseOut(CamelModel):
    user_id: str
    user_name: str
    user_college: str
    message: str | None = None
    timestamp: str | None = None
    has_car: bool = False


class CarpoolRequestOut(CamelModel):
    id: str
    user_id: str
    user_name: str
    type: str
    destination: str
    date: str
    time: str
    seats: float | None = None
    notes: str | None = None
    responses: list[ResponseOut] = []
    created_at: UtcDatetime
    updated_at: UtcDatetime | None = None
    display_date: str
    display_time: str
    day_of_week: str
    days_until: int | None = None
    is_urgent: bool = False
