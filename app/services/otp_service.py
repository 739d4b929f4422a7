import logging
import random
from datetime import datetime, timedelta, timezone

from app.config import settings

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_otp() -> str:
    # Not cryptographically hardened; codes are only logged for now.
    return str(random.randint(100000, 999999))


def otp_expiry(now: datetime, ttl_seconds: int | None = None) -> datetime:
    seconds = ttl_seconds if ttl_seconds is not None else settings.OTP_TTL_SECONDS
    return now + timedelta(seconds=seconds)


class LoggingCodeSender:
    """Writes issued codes to the log until an SMS provider is wired in."""

    def send(self, phone_number: str, code: str) -> None:
        logger.info("OTP for %s: %s", phone_number, code)
