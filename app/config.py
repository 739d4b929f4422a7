import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


class Settings:
    PROJECT_NAME = "Phone Auth Backend"

    FIREBASE_CREDENTIALS_FILE = os.getenv("FIREBASE_CREDENTIALS_FILE")
    USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")

    # "firestore" or "memory"
    USER_STORE_BACKEND = os.getenv("USER_STORE_BACKEND", "firestore").lower()
    # "firebase" or "jwt"
    TOKEN_BACKEND = os.getenv("TOKEN_BACKEND", "firebase").lower()

    JWT_SECRET = os.getenv("JWT_SECRET")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

    OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", 60))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    EXPOSE_ERROR_DETAILS = os.getenv("EXPOSE_ERROR_DETAILS", "false").lower() == "true"

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]


settings = Settings()
