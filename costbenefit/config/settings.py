from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    perplexity_api_key: str = ""
    openai_api_key: str = ""
    perplexity_model: str = "sonar"
    openai_model: str = "gpt-4o"
    ai_timeout_seconds: float = 60.0
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
