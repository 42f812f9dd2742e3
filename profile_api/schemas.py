"""Request/response bodies for the HTTP layer."""

from __future__ import annotations

import re
import string

from pydantic import BaseModel, Field, field_validator

NAME_PATTERN = r"^[A-Za-z]+( [A-Za-z]+)*$"
PHONE_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")
PHONE_PREFIX = "+62"
SPECIAL_CHARACTERS = frozenset(string.punctuation)


def _check_phone(value: str) -> str:
    if not PHONE_PATTERN.fullmatch(value):
        raise ValueError("phone_number must be in E.164 format")
    if not value.startswith(PHONE_PREFIX):
        raise ValueError(f"phone_number must start with {PHONE_PREFIX}")
    return value


class RegisterProfileRequest(BaseModel):
    full_name: str = Field(min_length=3, max_length=60, pattern=NAME_PATTERN)
    phone_number: str
    password: str = Field(min_length=3, max_length=64)

    @field_validator("phone_number")
    @classmethod
    def phone_number_format(cls, value: str) -> str:
        return _check_phone(value)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not any(ch.isupper() for ch in value):
            raise ValueError("password must contain a capital letter")
        if not any(ch.isdigit() for ch in value):
            raise ValueError("password must contain a digit")
        if not any(ch in SPECIAL_CHARACTERS for ch in value):
            raise ValueError("password must contain a special character")
        return value


class RegisterProfileResponse(BaseModel):
    profile_id: str


class LoginRequest(BaseModel):
    phone_number: str
    # Only presence is checked on login; strength rules apply at registration.
    password: str = Field(min_length=1)

    @field_validator("phone_number")
    @classmethod
    def phone_number_format(cls, value: str) -> str:
        return _check_phone(value)


class LoginResponse(BaseModel):
    token: str


class GetProfileResponse(BaseModel):
    full_name: str
    phone_number: str


class UpdateProfileRequest(BaseModel):
    full_name: str = Field(min_length=3, max_length=60, pattern=NAME_PATTERN)
    phone_number: str

    @field_validator("phone_number")
    @classmethod
    def phone_number_format(cls, value: str) -> str:
        return _check_phone(value)


class UpdateProfileResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
