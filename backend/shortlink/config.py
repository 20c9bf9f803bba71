# shortlink/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "shortlink"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Public base URL used to render full short links (e.g. https://s.example.org)
    base_url: str | None = os.getenv("BASE_URL")

    # Storage location
    # DATABASE_URL wins when set, otherwise a SQLite file at DB_LOCATION
    db_location: str = os.getenv("DB_LOCATION", "store.db")
    database_url: str | None = os.getenv("DATABASE_URL")

    # Session cookie signing key; a random one is generated per process when unset
    session_key: str | None = os.getenv("SESSION_KEY")
    session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session")
    # 0 disables expiry: a session stays valid as long as its user exists
    session_max_age_minutes: int = int(os.getenv("SESSION_MAX_AGE_MINUTES", "0"))
    cookie_secure: bool = os.getenv("COOKIE_SECURE", "false").lower() in ("true", "1", "yes")

    # Upload & suggestion settings
    max_upload_mb: int = int(os.getenv("MAX_UPLOAD_MB", "100"))
    suggestion_length: int = int(os.getenv("SUGGESTION_LENGTH", "6"))

    # Create missing tables on startup (disable when Aerich manages the schema)
    generate_schemas: bool = os.getenv("GENERATE_SCHEMAS", "true").lower() in ("true", "1", "yes")

    def resolved_database_url(self) -> str:
        return self.database_url or f"sqlite://{self.db_location}"

    def resolved_base_url(self) -> str:
        return (self.base_url or f"http://localhost:{self.port}").rstrip("/")

settings = Settings()  # Instantiate configuration
