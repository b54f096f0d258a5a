from functools import lru_cache
import json
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_ORIGINS = ",".join(
    [
        "https://author-check-7ghtfiynu-shinkais-projects.vercel.app",
        "http://localhost:3000",
        "http://localhost:5173",
        "https://author-check-one.vercel.app",
    ]
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="AuthorCheck API", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    api_prefix: str = Field(default="/api", alias="API_PREFIX")

    api_key: str = Field(default="", alias="API_KEY")
    model: str = Field(default="gemini-2.0-flash", alias="MODEL")
    endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent",
        alias="ENDPOINT",
    )
    ai_timeout_ms: int = Field(default=30000, alias="AI_TIMEOUT")
    user_agent: str = Field(default="AuthorCheck/1.0.0", alias="USER_AGENT")

    gemini_temperature: float = Field(default=0.7, alias="GEMINI_TEMPERATURE")
    gemini_top_k: int = Field(default=40, alias="GEMINI_TOP_K")
    gemini_top_p: float = Field(default=0.95, alias="GEMINI_TOP_P")
    gemini_max_output_tokens: int = Field(default=2048, alias="GEMINI_MAX_OUTPUT_TOKENS")

    ai_enabled: bool = Field(default=True, alias="AI_ENABLED")
    ai_fallback_enabled: bool = Field(default=True, alias="AI_FALLBACK_ENABLED")
    ai_fallback_mode: str = Field(default="default", alias="AI_FALLBACK_MODE")
    gateway_url: str = Field(default="http://localhost:8000/api/external", alias="GATEWAY_URL")

    allowed_origins: str = Field(default=DEFAULT_ALLOWED_ORIGINS, alias="ALLOWED_ORIGINS")
    require_origin: bool = Field(default=False, alias="REQUIRE_ORIGIN")

    rate_limit_per_minute: int = Field(default=60, alias="RATE_LIMIT_PER_MINUTE")
    rate_limit_window_seconds: int = Field(default=60, alias="RATE_LIMIT_WINDOW_SECONDS")
    redis_url: str = Field(default="", alias="REDIS_URL")

    max_text_length: int = Field(default=10_000, alias="MAX_TEXT_LENGTH")
    max_upload_bytes: int = Field(default=3_145_728, alias="MAX_UPLOAD_BYTES")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")

    @field_validator("ai_fallback_mode", mode="before")
    @classmethod
    def normalize_fallback_mode(cls, value: object) -> object:
        if not isinstance(value, str):
            return "default"
        normalized = value.strip().lower()
        if normalized in {"default", "heuristic"}:
            return normalized
        return "default"

    @field_validator("api_key", mode="before")
    @classmethod
    def strip_api_key(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @staticmethod
    def _normalize_origin(origin: str) -> str:
        candidate = origin.strip().strip("'\"")
        if not candidate:
            return ""

        if "://" not in candidate:
            candidate = f"https://{candidate}"

        parsed = urlsplit(candidate)
        if not parsed.scheme or not parsed.netloc:
            return ""

        # Origins compare on scheme+host+port; paths must be removed.
        normalized = f"{parsed.scheme}://{parsed.netloc}".rstrip("/")
        return normalized

    @property
    def origins(self) -> list[str]:
        raw = self.allowed_origins.strip()
        if not raw:
            return []

        values: list[str]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    values = [str(item) for item in parsed]
                else:
                    values = [raw]
            except json.JSONDecodeError:
                values = [raw]
        else:
            values = raw.split(",")

        normalized = [self._normalize_origin(value) for value in values]
        return [origin for origin in normalized if origin]


@lru_cache
def get_settings() -> Settings:
    return Settings()
