import os
import logging
from typing import List, Literal
from dotenv import load_dotenv


logger = logging.getLogger(__name__)

# Load environment variables from .env file located in the backend directory.
# Environment variables explicitly set (e.g., by Docker Compose) take precedence.
BASE_DIR = os.path.dirname(os.path.dirname(__file__))
ENV_PATH = os.path.join(BASE_DIR, '.env')
load_dotenv(ENV_PATH)


def parse_cors(value: str) -> List[str]:
    """
    Parses CORS origins. Accepts comma-separated string or list-like string.
    Example: "http://localhost,http://127.0.0.1" → ["http://localhost", "http://127.0.0.1"]
    If the value is empty, a default list of common development origins is provided.
    """
    if not value:
        return [
            "http://localhost:3000",  # Next.js dev server
            "http://127.0.0.1:3000",
        ]
    if isinstance(value, str):
        value = value.strip()
        if value.startswith("[") and value.endswith("]"):
            return [i.strip().strip('"').strip("'") for i in value[1:-1].split(",")]
        return [i.strip() for i in value.split(",")]
    raise ValueError("Invalid CORS format")


class Settings:
    # --- General Environment Settings ---
    DOMAIN: str = os.getenv('DOMAIN', 'localhost')
    # ENVIRONMENT determines application behavior (e.g., secure cookies, SQL echo).
    ENVIRONMENT: Literal["local", "staging",
                         "production"] = os.getenv('ENVIRONMENT', 'local')
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    # --- Database Configuration ---
    # A full DATABASE_URL takes precedence over the individual PostgreSQL parameters.
    DATABASE_URL: str = os.getenv('DATABASE_URL', '')
    POSTGRES_USER: str = os.getenv('POSTGRES_USER', '')
    POSTGRES_PASSWORD: str = os.getenv('POSTGRES_PASSWORD', '')
    POSTGRES_SERVER: str = os.getenv('POSTGRES_SERVER', 'localhost')
    POSTGRES_PORT: int = int(os.getenv('POSTGRES_PORT', 5432))
    POSTGRES_DB: str = os.getenv('POSTGRES_DB', 'gym_db')
    # SQLite fallback for local development when no PostgreSQL user is configured.
    SQLITE_DB_PATH: str = os.getenv('SQLITE_DB_PATH', 'gym.db')
    # SQL_ECHO logs every statement; honoured only when ENVIRONMENT is local.
    SQL_ECHO: bool = os.getenv('SQL_ECHO', 'false').lower() in ('true', '1', 'yes')

    # --- Security Settings ---
    # SECRET_KEY signs the session cookie.
    SECRET_KEY: str = os.getenv('SECRET_KEY', 'change-me-in-production')
    ALGORITHM: str = os.getenv('ALGORITHM', "HS256")
    SESSION_COOKIE_NAME: str = os.getenv('SESSION_COOKIE_NAME', 'gym_auth')
    SESSION_EXPIRE_DAYS: int = int(os.getenv('SESSION_EXPIRE_DAYS', 7))

    # --- Default administrator (created by /auth/init and at startup) ---
    DEFAULT_ADMIN_NAME: str = os.getenv('DEFAULT_ADMIN_NAME', 'Administrador')
    DEFAULT_ADMIN_EMAIL: str = os.getenv('DEFAULT_ADMIN_EMAIL', 'admin@gymstarter.com.br')
    DEFAULT_ADMIN_PASSWORD: str = os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin123')

    # --- Public site ---
    # PUBLIC_APP_URL is the base URL of the frontend, used for QR check-in links.
    PUBLIC_APP_URL: str = os.getenv('PUBLIC_APP_URL', 'http://localhost:3000')
    # GYM_TIMEZONE is used for opening hours and "today" in the check-in flow.
    GYM_TIMEZONE: str = os.getenv('GYM_TIMEZONE', 'America/Sao_Paulo')

    # --- Promotions ---
    PROMO_CODE_MAX_ATTEMPTS: int = int(os.getenv('PROMO_CODE_MAX_ATTEMPTS', 10))

    # --- CORS Configuration ---
    RAW_CORS_ORIGINS: str = os.getenv('BACKEND_CORS_ORIGINS', '')
    BACKEND_CORS_ORIGINS: List[str] = parse_cors(RAW_CORS_ORIGINS)

    @property
    def server_host(self) -> str:
        """Determines the server host URL based on the environment."""
        return f"http://{self.DOMAIN}" if self.ENVIRONMENT == "local" else f"https://{self.DOMAIN}"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        Constructs the SQLAlchemy database URI.
        Prioritizes DATABASE_URL, then PostgreSQL components, then the SQLite file.
        Ensures an async driver is specified.
        """
        if self.DATABASE_URL:
            uri = self.DATABASE_URL
            if uri.startswith("postgresql://"):
                uri = uri.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif uri.startswith("sqlite://"):
                uri = uri.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return uri

        if self.POSTGRES_USER:
            return (
                f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        return f"sqlite+aiosqlite:///{self.SQLITE_DB_PATH}"

    @property
    def secure_cookies(self) -> bool:
        return self.ENVIRONMENT != "local"


# Instantiate the settings object to be used throughout the application
settings = Settings()

if settings.SECRET_KEY == 'change-me-in-production' and settings.ENVIRONMENT == "production":
    logger.warning("SECRET_KEY is not set; session cookies are signed with the development key")
