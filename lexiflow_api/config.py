from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    SECRET_KEY: str = "change-this-please"
    JWT_ISS: str = "lexiflow"
    JWT_AUD: str = "lexiflow-app"
    DATABASE_URL: str = "sqlite:///./lexiflow.db"
    LOG_LEVEL: str = "INFO"

    # Ödüllü reklam sonrası verilen ek kelimeler
    BONUS_WORD_COUNT: int = 5
    BONUS_COOLDOWN_HOURS: int = 24
    # Türkiye saati (UTC+3); gün anahtarı bu ofsetle hesaplanır
    DAY_UTC_OFFSET_HOURS: int = 3
    TRANSACTION_MAX_ATTEMPTS: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
