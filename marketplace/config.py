from decimal import Decimal
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings


DEFAULT_BANK_DETAILS = (
    "Omni Global Central Hub\n"
    "Bank: Apex Global Bank\n"
    "Account: 0098877665\n"
    "Sort Code: 01-02-03"
)


class Settings(BaseSettings):
    ENV: str = "local"

    postgres_user: Optional[str] = None
    postgres_password: Optional[str] = None
    postgres_db: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    sqlite_url: str = "sqlite:///./marketplace.db"

    # commerce defaults, overridden by the saved site settings row
    commission_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1, decimal_places=4)
    tax_enabled: bool = False
    tax_rate: Decimal = Field(default=Decimal("0.075"), ge=0, le=1, decimal_places=4)
    admin_bank_details: str = DEFAULT_BANK_DETAILS
    default_currency_symbol: str = "₦"

    processing_delay_seconds: float = 5.0
    processing_timeout_seconds: float = 30.0

    # unfinished checkouts older than this are dropped from memory
    checkout_ttl_seconds: float = 3600.0

    receipt_dir: str = "receipts"
    log_level: str = "INFO"

    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    @property
    def database_url(self):
        if not self.postgres_db:
            return self.sqlite_url

        encoded_password = quote_plus(self.postgres_password or "")
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
