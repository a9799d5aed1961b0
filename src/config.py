from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Mail account used for OTP and contact notifications
    email_user: str | None = None
    email_pass: str | None = None
    admin_email: str | None = None
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587

    port: int = 3000
    public_base_url: str | None = None

    # Storage
    data_dir: Path = Path(".")
    uploads_dir: Path = Path("uploads")

    institutional_email_domain: str = "bue.edu.eg"
    max_listing_images: int = 5

    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        return (self.public_base_url or f"http://localhost:{self.port}").rstrip("/")

    @property
    def contact_recipient(self) -> str | None:
        return self.admin_email or self.email_user


settings = Settings()
