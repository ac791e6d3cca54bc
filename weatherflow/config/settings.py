from typing import List, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings with environment variable support
    """
    # Project info
    PROJECT_NAME: str = "WeatherFlow API"
    PROJECT_DESCRIPTION: str = "Mock weather service returning current conditions and a 5-day forecast"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    # Environment
    ENV: str = "dev"  # dev, uat, prod
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # CORS - any origin by default
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # === LOGGING CONFIGURATION ===

    LOG_FORMAT: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'pretty' for human-readable"
    )

    LOG_PRETTY: bool = Field(
        default=False,
        description="Enable pretty/human-readable logging format"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    LOG_COLOR: bool = Field(
        default=True,
        description="Enable colored console output"
    )

    # Correlation tracking
    ENABLE_CORRELATION_ID: bool = Field(
        default=True,
        description="Enable automatic correlation ID generation and propagation"
    )

    CORRELATION_ID_HEADER: str = Field(
        default="X-Correlation-ID",
        description="Header name for correlation ID"
    )

    # === WEATHER CLIENT ===

    WEATHER_API_URL: str = Field(
        default="http://localhost:3001",
        description="Base URL of the weather API used by the client"
    )

    WEATHER_CLIENT_TIMEOUT: float = Field(
        default=10.0,
        description="Client request timeout in seconds"
    )

    DEFAULT_CITY: str = Field(
        default="London",
        description="City loaded by the client view on startup"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }

    # === VALIDATION METHODS ===

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is supported"""
        valid_formats = ["json", "pretty"]
        if v.lower() not in valid_formats:
            raise ValueError(f"LOG_FORMAT must be one of: {valid_formats}")
        return v.lower()


# Create settings instance
settings = Settings()
