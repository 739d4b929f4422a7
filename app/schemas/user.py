from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(CamelModel):
    phone_number: str = Field(alias="phoneNumber", min_length=1)
    full_name: str = Field(alias="fullName")
    birth_date: str = Field(alias="birthDate")
    password: str = Field(min_length=1)
    user_age: int | None = Field(default=None, alias="userAge")


class ResendOtpRequest(CamelModel):
    phone_number: str = Field(alias="phoneNumber", min_length=1)


class ChangePhoneRequest(CamelModel):
    old_phone_number: str = Field(alias="oldPhoneNumber", min_length=1)
    new_phone_number: str = Field(alias="newPhoneNumber", min_length=1)


class VerifyOtpRequest(CamelModel):
    phone_number: str = Field(alias="phoneNumber", min_length=1)
    # any JSON value; non-strings never match a stored code
    otp: Any = None


class LoginRequest(CamelModel):
    phone_number: str = Field(alias="phoneNumber", min_length=1)
    password: str

