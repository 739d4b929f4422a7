import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import jwt
from passlib.context import CryptContext

from app.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, secret: str | None = None, expires_minutes: int | None = None) -> str:
    to_encode = data.copy()
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    to_encode.update({
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        "type": "access",
    })
    return jwt.encode(to_encode, secret or settings.JWT_SECRET, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, secret: str | None = None) -> dict:
    return jwt.decode(token, secret or settings.JWT_SECRET, algorithms=[settings.ALGORITHM])


class JwtTokenService:
    """Signed HS256 session tokens, used when Firebase custom tokens are not available."""

    def __init__(self, secret: str | None = None, expires_minutes: int | None = None):
        self.secret = secret or settings.JWT_SECRET
        if not self.secret:
            raise RuntimeError("JWT_SECRET must be set when TOKEN_BACKEND=jwt")
        self.expires_minutes = expires_minutes

    def issue(self, phone_number: str) -> str:
        return create_access_token(
            {"sub": phone_number, "jti": str(uuid.uuid4())},
            secret=self.secret,
            expires_minutes=self.expires_minutes,
        )


@lru_cache
def get_token_service():
    if settings.TOKEN_BACKEND == "jwt":
        return JwtTokenService()
    if settings.TOKEN_BACKEND == "firebase":
        from app.services.firebase_service import FirebaseTokenService

        return FirebaseTokenService()
    raise RuntimeError(f"Unknown TOKEN_BACKEND: {settings.TOKEN_BACKEND}")
