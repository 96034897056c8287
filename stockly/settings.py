from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env', env_file_encoding='utf-8', extra='ignore'
    )

    DATABASE_URL: str = 'sqlite:///./stockly.db'
    SECRET_KEY: str = 'your-secret-key'
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    DISPLAY_LOCALE: str = 'es'
    CURRENCY_SYMBOL: str = '€'

    ENVIRONMENT: str = 'development'
    LOG_LEVEL: str = 'INFO'
    HOST: str = '127.0.0.1'
    PORT: int = 8000
    CORS_ORIGINS: list[str] = ['*']

    # Base URL the status page uses to reach this same API
    STATUS_BASE_URL: str = 'http://127.0.0.1:8000'
    STATUS_TIMEOUT_SECONDS: float = 5.0
