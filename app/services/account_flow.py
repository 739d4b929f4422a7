"""Registration, OTP verification and login for phone-number accounts.

Every record lives in the user store under its phone number. The flow only
decides what to write; storage, token minting and code delivery are
collaborators handed in at construction so they can be swapped in tests.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from app.config import settings
from app.database import RecordExists, UserStore, get_user_store
from app.models.user import UserAccount
from app.services.auth_service import get_token_service, hash_password, verify_password
from app.services.otp_service import LoggingCodeSender, generate_otp, otp_expiry, utcnow
from app.utils.errors import (
    Conflict,
    Expired,
    InvalidCode,
    InvalidCredentials,
    NotFound,
    VerificationRequired,
)

logger = logging.getLogger(__name__)

OTP_FIELDS = ("otp", "otpExpiry")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AccountVerificationFlow:
    def __init__(
        self,
        store: UserStore,
        token_service,
        code_sender=None,
        clock: Callable[[], datetime] = utcnow,
        otp_ttl_seconds: int | None = None,
        code_generator: Callable[[], str] = generate_otp,
    ):
        self.store = store
        self.token_service = token_service
        self.code_sender = code_sender or LoggingCodeSender()
        self.clock = clock
        self.otp_ttl_seconds = otp_ttl_seconds if otp_ttl_seconds is not None else settings.OTP_TTL_SECONDS
        self.code_generator = code_generator

    def _new_challenge(self) -> dict:
        return {
            "otp": self.code_generator(),
            "otpExpiry": otp_expiry(self.clock(), self.otp_ttl_seconds),
        }

    def register(
        self,
        phone_number: str,
        full_name: str,
        birth_date: str,
        password: str,
        user_age: int | None = None,
    ) -> None:
        logger.info("Registration request received for %s", phone_number)
        if self.store.get(phone_number) is not None:
            raise Conflict("User already exists")

        challenge = self._new_challenge()
        account = UserAccount(
            phone_number=phone_number,
            full_name=full_name,
            birth_date=birth_date,
            user_age=user_age,
            password=hash_password(password),
            otp=challenge["otp"],
            otp_expiry=challenge["otpExpiry"],
            verified=False,
        )
        document = account.to_document()
        document["createdAt"] = self.store.server_timestamp()
        try:
            self.store.create(phone_number, document)
        except RecordExists:
            raise Conflict("User already exists")

        self.code_sender.send(phone_number, challenge["otp"])

    def resend_otp(self, phone_number: str) -> None:
        logger.info("Resend OTP request for %s", phone_number)
        if self.store.get(phone_number) is None:
            raise NotFound("User not found")

        challenge = self._new_challenge()
        self.store.update(phone_number, challenge)
        self.code_sender.send(phone_number, challenge["otp"])

    def change_phone_number(self, old_phone_number: str, new_phone_number: str) -> None:
        logger.info("Change phone request %s -> %s", old_phone_number, new_phone_number)
        if self.store.get(new_phone_number) is not None:
            raise Conflict("Phone number already registered")

        document = self.store.get(old_phone_number)
        if document is None:
            raise NotFound("User not found")

        challenge = self._new_challenge()
        migrated = {
            **document,
            "phoneNumber": new_phone_number,
            **challenge,
            "verified": False,
            "updatedAt": self.store.server_timestamp(),
        }
        try:
            self.store.move(old_phone_number, new_phone_number, migrated)
        except RecordExists:
            raise Conflict("Phone number already registered")

        self.code_sender.send(new_phone_number, challenge["otp"])

    def verify_otp(self, phone_number: str, otp) -> str:
        logger.info("Verify OTP request for %s", phone_number)
        document = self.store.get(phone_number)
        if document is None:
            raise NotFound("User not found")

        account = UserAccount.from_document(document)
        if not isinstance(otp, str) or account.otp is None or account.otp != otp:
            raise InvalidCode("Invalid OTP")

        if account.otp_expiry is None or self.clock() > _as_utc(account.otp_expiry):
            raise Expired("OTP expired")

        self.store.update(
            phone_number,
            {"verified": True, "updatedAt": self.store.server_timestamp()},
            remove=OTP_FIELDS,
        )
        return self.token_service.issue(phone_number)

    def login(self, phone_number: str, password: str) -> dict:
        logger.info("Login request for %s", phone_number)
        document = self.store.get(phone_number)
        if document is None:
            raise NotFound("Account not found")

        account = UserAccount.from_document(document)
        if not verify_password(password, account.password):
            raise InvalidCredentials("Invalid credentials")

        if not account.verified:
            challenge = self._new_challenge()
            self.store.update(phone_number, challenge)
            self.code_sender.send(phone_number, challenge["otp"])
            raise VerificationRequired(phone_number)

        token = self.token_service.issue(phone_number)
        self.store.update(phone_number, {"lastLogin": self.store.server_timestamp()})
        return {"token": token, "user": account.public_projection()}


def get_account_flow() -> AccountVerificationFlow:
    return AccountVerificationFlow(store=get_user_store(), token_service=get_token_service())
