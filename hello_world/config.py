"""
Configuration for the hello world listener.
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Listener settings loaded from environment variables."""

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
