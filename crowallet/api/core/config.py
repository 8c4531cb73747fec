from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "crowallet-api"

    API_PATH: str = "/api/v1"

    BACKEND_CORS_ORIGINS: list[AnyHttpUrl] = []


settings = Settings()
