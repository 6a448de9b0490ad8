from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "INFO"
    default_key: str = "C"
    highlight_chords: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
