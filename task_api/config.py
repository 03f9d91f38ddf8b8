from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./tasks.db"

    # Security
    # No default: the signing key must come from the environment or .env
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    # None keeps issued tokens valid indefinitely
    ACCESS_TOKEN_EXPIRE_MINUTES: int | None = None
    ENFORCE_TASK_OWNERSHIP: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app.log"

    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"

settings = Settings()
