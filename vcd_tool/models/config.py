"""Connection settings model."""

from typing import Optional

from pydantic import Field, field_validator

from ..utils.constants import DEFAULT_API_VERSION, DEFAULT_MAX_RETRY_TIMEOUT
from .base import VcdToolBaseModel


class VcdConfig(VcdToolBaseModel):
    """
    Settings needed to log in to a vCD organization.

    Attributes:
        url: API endpoint, e.g. https://vcd.example.com/api
        user: Login name, without the @org suffix
        password: Login password (never included in repr)
        org: Organization to log in to
        vdc: Default VDC for disk, network and vApp operations
        api_version: vCloud API version sent in the Accept header
        insecure: Skip TLS certificate verification
        max_retry_timeout: Budget in seconds for retried operations
    """

    url: str
    user: str
    password: str = Field(repr=False)
    org: str
    vdc: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    insecure: bool = False
    max_retry_timeout: float = Field(default=DEFAULT_MAX_RETRY_TIMEOUT, ge=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"vCD url must start with http:// or https://, got: {value}")
        return value.rstrip("/")


__all__ = ["VcdConfig"]
