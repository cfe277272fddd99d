import os
from dataclasses import dataclass

from .errors import ConfigurationError

BASE_URL = "https://assessment.ksensetech.com/api"


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    base_url: str = BASE_URL
    timeout: float = 30.0
    page_size: int = 5
    max_pages: int = 15
    page_delay: float = 0.3
    failed_page_delay: float = 1.0
    max_retries: int = 3
    max_rate_limit_retries: int = 8
    server_error_backoff: float = 1.0
    rate_limit_backoff: float = 3.0

    @classmethod
    def from_env(cls, **overrides):
        values = {}
        api_key = (os.getenv("KSENSE_API_KEY") or "").strip()
        if api_key:
            values["api_key"] = api_key
        base_url = (os.getenv("KSENSE_BASE_URL") or "").strip()
        if base_url:
            values["base_url"] = base_url
        timeout = (os.getenv("KSENSE_TIMEOUT_S") or "").strip()
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError:
                pass
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def headers(self):
        return {
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def require_api_key(self):
        if not self.api_key:
            raise ConfigurationError(
                "No API key configured. Set KSENSE_API_KEY or pass --api-key."
            )
        return self.api_key
