import os
from typing import List, Optional
from dotenv import load_dotenv
from fastapi import Request

load_dotenv()


DEFAULT_ORIGINS = [
    "http://localhost:8080",
    "http://localhost:5173",
    "https://www.slumberpanda.com",
]


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings:
    """Runtime configuration, read from the environment (and .env) on creation."""

    def __init__(self, **overrides):
        # gateway credentials
        self.RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
        self.RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")
        self.PAYMENT_GATEWAY: str = os.getenv("PAYMENT_GATEWAY", "razorpay").strip().lower()

        # CORS stuff
        self.ALLOWED_ORIGINS: List[str] = _split_origins(os.getenv("ALLOWED_ORIGINS"))

        # server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "3001"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def has_secret(self) -> bool:
        return bool(self.RAZORPAY_KEY_SECRET)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
