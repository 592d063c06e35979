# memoapp/shared/config.py
from pydantic import BaseModel
from dotenv import load_dotenv
import os

# .env.local wins over .env, real env vars win over both
load_dotenv(".env.local")
load_dotenv()

class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # memo table lives here; dev falls back to sqlite under ./storage
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    # summarization provider
    GEMINI_API_KEY: str | None = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

settings = Settings()

# FastAPI dep (override in tests)
def get_settings() -> Settings:
    return settings
