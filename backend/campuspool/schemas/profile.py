"""Profile Schemas — upsert payload with per-field and cross-field validation.

Invariants:
    - Optional fields are validated only when present
    - has_car=true requires car model, color and capacity (has_required_car_details)
    - Free text is trimmed; bio is capped at 500 chars
"""

from pydantic import Field, field_validator, model_validator

from campuspool.core.validate_profile import (
    has_required_car_details,
    is_valid_bio,
    is_valid_car_capacity,
    is_valid_college_name,
    is_valid_graduation_year,
    is_valid_license_plate,
    is_valid_major,
)
from campuspool.core.validate_user import is_valid_phone_number, sanitize_input
from campuspool.schemas.common import CamelModel, UtcDatetime


class ProfileUpdate(CamelModel):
    name: str | None = Field(None, max_length=100)
    college: str | None = None
    major: str | None = None
    year: int | None = None
    phone_number: str | None = None
    has_car: bool = False
    bio: str | None = None
    car_model: str | None = None
    car_color: str | None = None
    car_year: int | None = None
    car_license: str | None = None
    car_capacity: float | None = None
    profile_picture: str | None = None

    @field_validator("name", "car_model", "car_color")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return sanitize_input(v) or None

    @field_validator("college")
    @classmethod
    def check_college(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_college_name(v):
            raise ValueError("college must be 2-100 characters")
        return v.strip() if v else v

    @field_validator("major")
    @classmethod
    def check_major(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_major(v):
            raise ValueError("major must be 2-50 characters")
        return v.strip() if v else v

    @field_validator("year")
    @classmethod
    def check_year(cls, v: int | None) -> int | None:
        if v is not None and not is_valid_graduation_year(v):
            raise ValueError("graduation year must be within the next 10 years")
        return v

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_phone_number(v):
            raise ValueError("phone number must have 10 digits (11 with +country code)")
        return v

    @field_validator("bio")
    @classmethod
    def check_bio(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_bio(v):
            raise ValueError("bio must be at most 500 characters")
        return v

    @field_validator("car_license")
    @classmethod
    def check_license(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_license_plate(v):
            raise ValueError("license plate must be 2-10 letters or digits")
        return v

    @field_validator("car_capacity")
    @classmethod
    def check_capacity(cls, v: float | None) -> float | None:
        if v is not None and not is_valid_car_capacity(v):
            raise ValueError("car capacity must be between 1 and 8")
        return v

    @model_validator(mode="after")
    def check_car_details(self):
        if not has_required_car_details(self.model_dump()):
            raise ValueError("drivers must provide car model, color and capacity")
        return self


class ProfileOut(CamelModel):
    user_id: str
    name: str | None = None
    college: str | None = None
    major: str | None = None
    year: int | None = None
    phone_number: str | None = None
    has_car: bool = False
    bio: str | None = None
    car_model: str | None = None
    car_color: str | None = None
    car_year: int | None = None
    car_license: str | None = None
    car_capacity: float | None = None
    profile_picture: str | None = None
    updated_at: UtcDatetime | None = None
    is_complete: bool = False
