"""Configuration settings for the Motiva workout engine."""
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings."""

    # LLM
    MODEL_NAME: str = "groq/llama-3.3-70b-versatile"
    BACKUP_MODEL_NAME: str = "groq/llama-3.1-70b-versatile"
    LLM_TIMEOUT_SECONDS: int = 60

    # History
    HISTORY_LOG_LIMIT: int = 5
    PROMPT_HISTORY_LIMIT: int = 10

    # Storage
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    DATA_DIR: str = "data"

    def __init__(self):
        self.MODEL_NAME = os.getenv("MODEL_NAME", self.MODEL_NAME)
        self.BACKUP_MODEL_NAME = os.getenv("BACKUP_MODEL_NAME", self.BACKUP_MODEL_NAME)
        self.LLM_TIMEOUT_SECONDS = _int_env("LLM_TIMEOUT_SECONDS", self.LLM_TIMEOUT_SECONDS)

        self.HISTORY_LOG_LIMIT = _int_env("HISTORY_LOG_LIMIT", self.HISTORY_LOG_LIMIT)
        self.PROMPT_HISTORY_LIMIT = _int_env("PROMPT_HISTORY_LIMIT", self.PROMPT_HISTORY_LIMIT)

        self.SUPABASE_URL = os.getenv("SUPABASE_URL")
        self.SUPABASE_KEY = os.getenv("SUPABASE_KEY")
        self.DATA_DIR = os.getenv("MOTIVA_DATA_DIR", self.DATA_DIR)


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


settings = Settings()
