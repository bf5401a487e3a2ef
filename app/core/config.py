from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Email
    app_email_sender: str = "Zanari <onboarding@resend.dev>"
    app_brand_name: str = "Zanari"

    # Resend
    resend_api_key: str = ""

    # Verification codes
    auth_code_secret: str = ""
    code_length: int = 6
    code_ttl_seconds: int = 180  # 3 minutes
    code_send_cooldown_seconds: int = 120
    code_send_window_seconds: int = 3600  # 1 hour
    code_max_sends_per_window: int = 5
    code_max_verify_attempts: int = 5

    # Sweep
    verification_sweep_enabled: bool = True
    verification_sweep_interval_seconds: int = 3600

    # Database
    database_url: str = "sqlite+aiosqlite:///./zanari.db"

    # Admin
    admin_token: str = ""

    # CORS
    cors_allow_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "dev"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
