from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./videohub.db"
    echo_sql: bool = False

    jwt_secret: str = Field(default="change-me")
    jwt_algorithm: str = "HS256"

    # Blob storage
    blob_storage_url: str = ""
    blob_storage_token: str = ""
    blob_storage_timeout: float = 30.0

    page_size_default: int = 10
    page_size_max: int = 100

    cascade_tweet_likes: bool = False

    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
