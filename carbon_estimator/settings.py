import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_timeout_seconds: float = Field(default=20.0, gt=0, alias="GEMINI_TIMEOUT_SECONDS")
    fallback_delay_seconds: float = Field(default=0.0, ge=0, alias="FALLBACK_DELAY_SECONDS")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_env(cls):
        data = {
            "GEMINI_API_KEY": os.getenv("GEMINI_API_KEY") or None,
            "GEMINI_MODEL": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            "GEMINI_TIMEOUT_SECONDS": os.getenv("GEMINI_TIMEOUT_SECONDS", "20"),
            "FALLBACK_DELAY_SECONDS": os.getenv("FALLBACK_DELAY_SECONDS", "0"),
        }
        return cls.model_validate(data)


settings = Settings.from_env()
