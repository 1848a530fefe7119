"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Supabase (database, auth, storage)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    VERIFICATION_BUCKET: str = os.getenv("VERIFICATION_BUCKET", "habit_verifications")

    # AI
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_VISION_MODEL: str = os.getenv("OPENAI_VISION_MODEL", "gpt-4o-mini")
    OPENAI_TIMEOUT_SECONDS: float = float(os.getenv("OPENAI_TIMEOUT_SECONDS", "60"))

    # App
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "America/Los_Angeles")
    APP_ORIGIN: str = os.getenv("APP_ORIGIN", "http://localhost:5173")

    # Scheduler
    PENDING_VERIFICATION_TIMEOUT_MINUTES: int = int(os.getenv("PENDING_VERIFICATION_TIMEOUT_MINUTES", "15"))
    SCHEDULER_CHECK_INTERVAL_SECONDS: int = int(os.getenv("SCHEDULER_CHECK_INTERVAL_SECONDS", "300"))


# Create a global settings instance
settings = Settings()
