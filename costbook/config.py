from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./costbook.db"
    APP_NAME: str = "Costbook"
    LOG_LEVEL: str = "INFO"

    # Display
    CURRENCY_SYMBOL: str = "₱"

    # Margin badge bands (percent of selling price)
    MARGIN_HIGH_PCT: float = 50.0
    MARGIN_MEDIUM_PCT: float = 30.0

    class Config:
        env_file = ".env"


settings = Settings()
