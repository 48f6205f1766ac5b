from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "PetFlow CRM"
    LOG_LEVEL: str = "INFO"

    # ===============================
    # DATABASE
    # ===============================
    DATABASE_URL: str = "sqlite:///./petflow.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # ===============================
    # HTTP / LINKS
    # ===============================
    CORS_ORIGINS: list[str] = ["*"]
    FRONTEND_URL: str = "http://localhost:5173"
    WHATSAPP_COUNTRY_CODE: str = "55"

    # ===============================
    # AUTH
    # ===============================
    # "mock" resolves every request to a fixed development admin.
    AUTH_MODE: str = "mock"
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "petflow_session"
    OWNER_OPEN_ID: str | None = None

    # ===============================
    # AI BACKEND
    # ===============================
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_ASSISTANT_ID: str | None = None
    AI_HTTP_TIMEOUT: float = 30.0
    AI_POLL_INTERVAL: float = 0.5
    AI_POLL_MAX_INTERVAL: float = 4.0
    AI_POLL_MAX_ATTEMPTS: int = 60
    AI_RUN_DEADLINE: float = 30.0


settings = Settings()
