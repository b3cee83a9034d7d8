from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 3
    TOKEN_COOKIE_NAME: str = "todosAppToken"
    BCRYPT_ROUNDS: int = 12

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
