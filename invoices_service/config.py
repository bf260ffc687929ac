"""
Configuration module for the invoices service.

Loads environment variables and validates required settings.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Supabase Configuration (default invoice persistence backend)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # Table holding invoice rows and bucket holding their documents
    SUPABASE_INVOICES_TABLE: str = os.getenv("SUPABASE_INVOICES_TABLE", "invoice")
    SUPABASE_DOCUMENTS_BUCKET: str = os.getenv("SUPABASE_DOCUMENTS_BUCKET", "invoice-documents")

    # Vendors service
    VENDORS_SERVICE_URL: str = os.getenv("VENDORS_SERVICE_URL", "http://localhost:8081")
    VENDORS_TIMEOUT_SECONDS: float = float(os.getenv("VENDORS_TIMEOUT_SECONDS", "10"))

    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS Settings (comma separated, only used in production)
    CORS_ALLOWED_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required settings are configured.

        Raises:
            ValueError: If any required setting is missing.
        """
        required_settings = {
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_KEY": cls.SUPABASE_KEY,
        }

        missing = [key for key, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Please check your .env file."
            )

    @classmethod
    def is_production(cls) -> bool:
        """Check if running in production environment."""
        return cls.ENVIRONMENT.lower() == "production"

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development environment."""
        return cls.ENVIRONMENT.lower() == "development"


# Create a singleton instance
settings = Settings()

# Validate settings on module import (fail fast if misconfigured).
# Tests set VALIDATE_CONFIG=false before importing the app.
if os.getenv("VALIDATE_CONFIG", "true").lower() == "true":
    try:
        settings.validate()
    except ValueError as e:
        # In development, warn but don't crash
        if settings.is_development():
            print(f"Warning: {e}")
            print("   The invoices service will not reach Supabase until your .env file is configured.")
        else:
            raise
