from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    redis_socket_timeout: float = 0.5

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "taskboard"
    jwt_audience: str = "taskboard"
    jwt_expires_minutes: int = 60

    # task listing
    default_page_limit: int = 10
    max_page_limit: int = 100

    # registration may request admin/manager roles when enabled
    allow_role_self_assignment: bool = True

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_auth_register_per_min: int = 20
    rate_limit_auth_login_per_min: int = 30

settings = Settings()
