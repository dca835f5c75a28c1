from pydantic import BaseModel
import os


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./marketplace.db")

    # Session tokens
    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # Gift orders: when true an unparseable item row degrades the item list to
    # empty (logged); when false it fails the request with a 500.
    GIFT_ITEMS_LENIENT: bool = os.getenv("GIFT_ITEMS_LENIENT", "true").lower() == "true"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL


settings = Settings()
