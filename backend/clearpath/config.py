from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "ClearPath"
    default_jurisdiction: str = "dc"
    log_level: str = "INFO"
    cors_origins: str = "*"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    model_config = {"env_file": ".env"}


settings = Settings()
