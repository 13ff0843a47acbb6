"""
Service and CLI configuration.

Values come from environment variables (or a .env file) via Pydantic Settings;
cleaning behavior itself is configured per call through CleanOptions.
"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Runtime settings.

    Every field can be set through an environment variable of the same name,
    e.g. DEFAULT_PRESET=email or MAX_REQUEST_CHARS=200000.
    """

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False  # uvicorn auto-reload, development only

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Preset applied when a request or CLI call names none
    default_preset: str = "plain"

    # Request bodies above this many characters get 413; the cleaner itself
    # truncates anything longer than 100,000 characters
    max_request_chars: int = 1_000_000

    # Comma-separated CORS origins, "*" for any
    cors_allow_origins: str = "*"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


settings = Settings()
