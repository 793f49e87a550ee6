"""
SharedPW Configuration — Store selection and validated settings.

Reads the store settings from environment variables:
    APPLICATION = <table name>          (default "sharedpw")
    REGION = <AWS region>               (default "us-east-1")
    SHAREDPW_BACKEND = dynamodb|redis|memory   (default "dynamodb")

Nothing here connects to the store; a misconfigured store is reported
as a ``StoreError`` on first use.
"""
import os
import logging

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("sharedpw.conf")

DEFAULT_TABLE = "sharedpw"
DEFAULT_REGION = "us-east-1"
DEFAULT_BACKEND = "dynamodb"

BACKENDS = ("dynamodb", "redis", "memory")

# Lifetime limits, in hours.
MAX_LIFETIME_HOURS = 72
CREATE_LIFETIME_HOURS = 72
SAVE_LIFETIME_HOURS = 24

ID_LENGTH = 16


class StoreConfig(BaseModel):
    """Validated store configuration."""

    table: str = Field(default=DEFAULT_TABLE, min_length=1)
    region: str = Field(default=DEFAULT_REGION, min_length=1)
    backend: str = Field(default=DEFAULT_BACKEND)

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Validate store backend is supported."""
        v = v.lower()
        if v not in BACKENDS:
            raise ValueError(f"Unsupported store backend: {v}")
        return v

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Create StoreConfig by loading values from environment.

        Returns:
            Populated StoreConfig instance.
        """
        config = cls(
            table=os.environ.get("APPLICATION", DEFAULT_TABLE),
            region=os.environ.get("REGION", DEFAULT_REGION),
            backend=os.environ.get("SHAREDPW_BACKEND", DEFAULT_BACKEND),
        )
        logger.debug(
            "Store config: backend=%s table=%s region=%s",
            config.backend, config.table, config.region,
        )
        return config
