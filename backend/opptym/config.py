from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    PROJECT_NAME: str = "Opptym"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    API_V1_STR: str = "/api/v1"

    # postgresql:// URLs are rewritten to the asyncpg driver in database.py
    DATABASE_URL: str = "sqlite+aiosqlite:///./opptym.db"

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    CORS_ORIGINS: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    # Plan assigned to new accounts and to users whose plan is unknown
    DEFAULT_PLAN: str = "free"

    # Heuristic page scorer
    ANALYZER_TIMEOUT_SECONDS: float = 10.0
    ANALYZER_SEED: Optional[int] = None  # Seeds the simulated metrics when set
    ANALYZER_MAX_LISTED_LINKS: int = 20

    # Report export
    PDF_RENDER_TIMEOUT_SECONDS: float = 30.0

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cors_origins_list(self) -> List[str]:
        if isinstance(self.CORS_ORIGINS, str):
            return [o.strip() for o in self.CORS_ORIGINS.split(",")]
        return self.CORS_ORIGINS


settings = Settings()
