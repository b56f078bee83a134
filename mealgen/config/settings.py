from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    llm_provider: str = Field(default="openai", validation_alias="LLM_PROVIDER")
    llm_model: str = Field(default="gpt-4o-mini", validation_alias="LLM_MODEL")
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    groq_api_key: str = Field(default="", validation_alias="GROQ_API_KEY")
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="LLM_TIMEOUT_SECONDS",
        description="Timeout for one model call; expiry surfaces as a TransportError",
    )
    llm_max_tokens: int = Field(
        default=2000,
        gt=0,
        validation_alias="LLM_MAX_TOKENS",
        description="Output token budget per model call",
    )
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0, validation_alias="LLM_TEMPERATURE")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    log_serialize: bool = Field(
        default=False,
        validation_alias="LOG_SERIALIZE",
        description="Write the LOG_FILE sink as JSON lines",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("llm_provider")
    @classmethod
    def validate_llm_provider(cls, value: str) -> str:
        """Normalize the provider name; unknown providers fail later in get_model."""
        normalized = value.strip().lower()
        if normalized not in {"openai", "groq"}:
            logger.warning(f"LLM_PROVIDER '{value}' is not supported. Supported providers: openai, groq.")
        return normalized

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
