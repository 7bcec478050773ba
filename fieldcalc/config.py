from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./fieldcalc.db"
    APP_NAME: str = "GlovesON FieldCalc"

    # Row key for the persisted user settings (one active profile)
    SETTINGS_KEY: str = "gloveson_fieldcalc_settings_v1"

    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
