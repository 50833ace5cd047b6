from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "development"

    DATABASE_URL: str = "sqlite:///./orders.db"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Admin routes are open when no key is configured
    ADMIN_API_KEY: str | None = None

    # Order codes
    ORDER_CODE_MAX_ATTEMPTS: int = 5
    ORDER_CREATE_DUPLICATE_RETRIES: int = 1

    # Weekly summary policy
    SUMMARY_ACCEPTED_STATUSES: list[str] = ["Completed"]
    SUMMARY_REVENUE_SOURCE: str = "buckets"   # "buckets" | "order_total"
    CATEGORY_STRATEGY: str = "auto"           # "auto" | "structured" | "heuristic"
    MEAT_KEYWORDS: list[str] = [
        "หมู", "ไก่", "เนื้อ", "กุ้ง", "ปลา", "หมึก", "เป็ด",
        "pork", "chicken", "beef", "shrimp", "fish", "squid", "duck", "meat",
    ]

    # Spreadsheet ledger webhook
    SHEETS_WEBHOOK_URL: str | None = None
    SHEETS_TIMEOUT_SECONDS: float = 5.0


settings = Settings()
