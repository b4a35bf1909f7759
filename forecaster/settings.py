from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the API, read from the environment.

    Notes
    -----
    - `OPENWEATHERMAP_API_KEY` is required; everything else has a default.
    - An optional `.env` file in the working directory is also read.
    - TTLs (time-to-live) and timeouts are expressed in seconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openweather_api_key: str = Field(..., alias="OPENWEATHERMAP_API_KEY")
    openweather_base_url: str = Field("http://api.openweathermap.org/data/2.5", alias="OPENWEATHER_BASE_URL")
    geocoding_base_url: str = Field("https://nominatim.openstreetmap.org", alias="GEOCODING_BASE_URL")
    # Nominatim rejects requests without an identifying agent
    geocoding_user_agent: str = Field("weather-forecast-proxy", alias="GEOCODING_USER_AGENT")
    http_timeout: float = Field(20.0, alias="HTTP_TIMEOUT")
    cache_ttl_forecast: int = Field(30 * 60, alias="CACHE_TTL_FORECAST")  # 30 minutes
    log_level: str = Field("INFO", alias="LOG_LEVEL")


settings = Settings()
