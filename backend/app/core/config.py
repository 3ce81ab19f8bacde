from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    env: str = "dev"
    secret_key: str = "change_me_super_secret"
    jwt_algorithm: str = "HS256"
    # None keeps tokens valid until logout revokes them
    access_token_expire_minutes: Optional[int] = None
    database_url: str = "postgresql+psycopg2://crmuser:crmpass@db:5432/customer_orders"
    api_prefix: str = ""
    backend_cors_origins: str = "http://localhost:5173"
    log_level: str = "INFO"

    resend_api_key: Optional[str] = None
    mail_from: str = "Customer Orders <onboarding@resend.dev>"

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        origins = self.backend_cors_origins
        return [origin.strip() for origin in origins.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
