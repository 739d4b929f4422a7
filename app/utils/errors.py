from fastapi import status


class AccountError(Exception):
    """Base class for expected account flow failures."""

    kind = "Internal"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self) -> dict:
        return {"error": self.message}


class NotFound(AccountError):
    kind = "NotFound"
    default_message = "User not found"


class Conflict(AccountError):
    kind = "Conflict"
    default_message = "User already exists"


class InvalidCredentials(AccountError):
    kind = "InvalidCredentials"
    default_message = "Invalid credentials"


class InvalidCode(AccountError):
    kind = "InvalidCode"
    default_message = "Invalid OTP"


class Expired(AccountError):
    kind = "Expired"
    default_message = "OTP expired"


class VerificationRequired(AccountError):
    kind = "VerificationRequired"
    default_message = "Please verify your phone number first"

    def __init__(self, phone_number: str, message: str | None = None):
        super().__init__(message)
        self.phone_number = phone_number

    def payload(self) -> dict:
        return {
            "error": self.message,
            "needsVerification": True,
            "phoneNumber": self.phone_number,
        }


ERROR_STATUS = {
    "NotFound": status.HTTP_404_NOT_FOUND,
    "Conflict": status.HTTP_409_CONFLICT,
    "InvalidCredentials": status.HTTP_401_UNAUTHORIZED,
    "InvalidCode": status.HTTP_400_BAD_REQUEST,
    "Expired": status.HTTP_400_BAD_REQUEST,
    "VerificationRequired": status.HTTP_403_FORBIDDEN,
    "Internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: AccountError) -> int:
    return ERROR_STATUS.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
