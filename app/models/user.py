from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserAccount(BaseModel):
    """One user document, keyed by phone number in the record store."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str = Field(alias="phoneNumber")
    full_name: str = Field(alias="fullName")
    birth_date: str = Field(alias="birthDate")
    user_age: int | None = Field(default=None, alias="userAge")

    # bcrypt hash, never serialized into responses
    password: str

    # OTP stored while a verification challenge is outstanding
    otp: str | None = None
    otp_expiry: datetime | None = Field(default=None, alias="otpExpiry")
    verified: bool = False

    # Store-assigned timestamps; may hold a server timestamp sentinel before write
    created_at: Any = Field(default=None, alias="createdAt")
    updated_at: Any = Field(default=None, alias="updatedAt")
    last_login: Any = Field(default=None, alias="lastLogin")

    @classmethod
    def from_document(cls, document: dict) -> "UserAccount":
        return cls.model_validate(document)

    def to_document(self) -> dict:
        """Field map as written to the store, omitting unset timestamps and OTP fields."""
        document = self.model_dump(by_alias=True)
        for key in ("otp", "otpExpiry", "createdAt", "updatedAt", "lastLogin"):
            if document.get(key) is None:
                document.pop(key, None)
        return document

    def public_projection(self) -> dict:
        return {
            "fullName": self.full_name,
            "phoneNumber": self.phone_number,
            "verified": self.verified,
        }
