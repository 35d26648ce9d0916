"""Storefront settings.

Values come from ``STOREFRONT_*`` environment variables. The environment
name falls back to ``ENV`` / ``ENVIRONMENT`` and drives the log level and
renderer (see ``storefront.utils.logging``).
"""

import os

from pydantic import BaseModel, Field

DEFAULT_API_URL = "http://localhost:3000/api/weblarek"
DEFAULT_CDN_URL = "http://localhost:3000/content/weblarek"


class Settings(BaseModel):
    api_url: str = DEFAULT_API_URL
    cdn_url: str = DEFAULT_CDN_URL
    request_timeout: float = Field(default=10.0, gt=0)
    currency_label: str = "synapses"
    environment: str = "development"
    log_dir: str = "logs"
    isolate_handler_errors: bool = True

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ

        values = {}
        for field in cls.model_fields:
            raw = environ.get(f"STOREFRONT_{field.upper()}")
            if raw is not None:
                values[field] = raw

        if "environment" not in values:
            env = environ.get("ENV") or environ.get("ENVIRONMENT")
            if env:
                values["environment"] = env

        if "environment" in values:
            values["environment"] = values["environment"].lower()

        return cls.model_validate(values)
