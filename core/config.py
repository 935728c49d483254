from __future__ import annotations

import os

from pydantic import BaseModel


class Settings(BaseModel):
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "CAM Intake Service")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # synthetic processing: percentage points gained per elapsed minute
    PROGRESS_RATE_PER_MIN: float = float(os.getenv("PROGRESS_RATE_PER_MIN", "20"))

    DEFAULT_CHECKER_EMAIL: str = os.getenv("DEFAULT_CHECKER_EMAIL", "checker@bank.com")
    MAKER_USER_ID: str = os.getenv("MAKER_USER_ID", "demo-user")
    CHECKER_USER_ID: str = os.getenv("CHECKER_USER_ID", "checker-user")

    AUDIT_QUERY_LIMIT: int = int(os.getenv("AUDIT_QUERY_LIMIT", "50"))

    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(
        ","
    )


settings = Settings()
