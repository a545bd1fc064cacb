import os
import threading

from dotenv import load_dotenv

load_dotenv(os.environ.get("LEADS_ENV_FILE", ".env"))

class BackendSettings:
    _instance = None
    _lock = threading.Lock()

    def __init__(self):
        self.DEBUG_MODE = os.environ.get("DEBUG_MODE","development")

        self.POSTGRES_URL = os.environ.get("POSTGRES_URL","localhost:5432")
        self.POSTGRES_USER = os.environ.get("POSTGRES_USER","postgres")
        self.POSTGRES_PASSWORD = os.environ.get("POSTGRES_PASSWORD","postgres")
        self.POSTGRES_DB = os.environ.get("POSTGRES_DB","leadsdb")
        # Full SQLAlchemy URL, takes precedence over the POSTGRES_* parts
        self.DATABASE_URL = os.environ.get("DATABASE_URL",None)

        # Fernet key used by keycove to encrypt stored passwords
        self.PASSWORD_SECRET = os.environ.get("PASSWORD_SECRET","MDAwMDAwMDAwMDAwMDAwMDAwMDAwMDAwMDAwMDAwMDA=")

        # Bearer token settings
        self.TOKEN_SECRET = os.environ.get("TOKEN_SECRET","dev-secret-change-in-production")
        self.TOKEN_ALGORITHM = os.environ.get("TOKEN_ALGORITHM","HS256")
        self.TOKEN_EXPIRATION_SECONDS = int(os.environ.get("TOKEN_EXPIRATION_SECONDS","604800"))

        self.SEED_FILE = os.environ.get("SEED_FILE",None)
        self.ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL",None)
        self.ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD",None)
        self.ADMIN_ROLE = os.environ.get("ADMIN_ROLE","Super Admin")
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL","INFO")
        self.CORS_ORIGINS = [origin.strip() for origin in os.environ.get("CORS_ORIGINS","http://localhost:3000").split(",") if origin.strip()]

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(BackendSettings, cls).__new__(cls)
        return cls._instance

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_URL}/{self.POSTGRES_DB}"

    @property
    def is_production(self) -> bool:
        return self.DEBUG_MODE == "production"

settings = BackendSettings()
