from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 11435
    log_level: str = "INFO"

    model_config = {"env_prefix": "PROXY_"}


settings = Settings()
