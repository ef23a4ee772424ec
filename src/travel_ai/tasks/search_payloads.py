"""Validated request payloads for flight, hotel and activity searches."""
from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

CabinClass = Literal["Economy", "Business", "First", "Premium_Economy"]


def _three_letter_code(value: str, field_name: str) -> str:
    code = str(value).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValueError(f"{field_name} must be a 3-letter code")
    return code


class FlightSearchRequest(BaseModel):
    departure_airport_code: str
    arrival_airport_code: str
    departure_date: date
    return_date: date = Field(alias="arrival_date")
    adults: int = Field(default=1, ge=1, le=9, alias="number_of_adults")
    children: int = Field(default=0, ge=0, le=9, alias="number_of_children")
    infants: int = Field(default=0, ge=0, le=9, alias="number_of_infants")
    cabin_class: CabinClass = "Economy"
    currency: str = "USD"

    model_config = {"populate_by_name": True}

    @field_validator("departure_airport_code", "arrival_airport_code")
    @classmethod
    def _airport_code(cls, value: str) -> str:
        return _three_letter_code(value, "airport code")

    @field_validator("currency")
    @classmethod
    def _currency(cls, value: str) -> str:
        return _three_letter_code(value, "currency")

    @model_validator(mode="after")
    def _check_dates(self) -> "FlightSearchRequest":
        if self.return_date < self.departure_date:
            raise ValueError("return date must not be before departure date")
        return self


class HotelSearchRequest(BaseModel):
    destination: str = Field(min_length=1)
    check_in_date: date
    check_out_date: date
    adults: int = Field(default=2, ge=1, le=10)
    children: int = Field(default=0, ge=0, le=10)
    currency: str = "USD"
    preferences: str = ""

    @field_validator("destination")
    @classmethod
    def _destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("destination must not be blank")
        return value

    @field_validator("currency")
    @classmethod
    def _currency(cls, value: str) -> str:
        return _three_letter_code(value, "currency")

    @field_validator("preferences", mode="before")
    @classmethod
    def _preferences(cls, value: Optional[str]) -> str:
        return value or ""

    @model_validator(mode="after")
    def _check_dates(self) -> "HotelSearchRequest":
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days


class ActivitySearchRequest(BaseModel):
    destination: str = Field(min_length=1)
    activities: List[str]
    date: Optional[str] = None

    @field_validator("activities")
    @classmethod
    def _activities(cls, value: List[str]) -> List[str]:
        return [item.strip() for item in value]


class CityImageRequest(BaseModel):
    city: str = Field(min_length=1)
