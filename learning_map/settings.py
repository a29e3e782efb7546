from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App configuration"""

    model_config = SettingsConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        env_file='.env', env_file_encoding='utf-8', extra='ignore'
    )

    ai_gateway_api_key: str | None = None
    openai_base_url: HttpUrl = HttpUrl('https://ai.gateway.lovable.dev/v1')
    model_name: str = 'google/gemini-2.5-flash'
    request_timeout: float = 120.0

    # Empty means the UI talks to this app's own endpoint in-process
    generation_url: str = ''

    cors_origins: list[str] = ['*']
    log_level: str = 'INFO'


settings = Settings()  # pyright: ignore[reportCallIssue]
