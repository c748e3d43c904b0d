"""EAN client configuration loaded from explicit values or the environment."""

import os
from typing import Any, Self

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_CID = 55505
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class Configuration(BaseModel):
    """Credentials and options read by the URL builder on every request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    api_key: str = Field(description="EAN API key")
    cid: int | str | None = Field(default=DEFAULT_CID, description="Partner (affiliate) ID")
    shared_secret: str | None = Field(default=None, description="Shared secret for signature auth")
    use_signature_auth: bool = Field(default=False, description="Sign requests with MD5 signature")
    cache: Any = Field(default=None, description="Pluggable cache mechanism, unused by the client")

    @model_validator(mode="after")
    def validate_signature_secret(self) -> "Configuration":
        """Validate that signature auth has a shared secret to sign with."""
        if self.use_signature_auth and not self.shared_secret:
            msg = "Signature auth requires a shared secret"
            raise ValueError(msg)
        return self

    def signature_auth_enabled(self) -> bool:
        """Whether requests should carry a ``sig`` parameter."""
        return self.use_signature_auth

    def has_api_key(self) -> bool:
        """Whether an API key is configured."""
        return bool(self.api_key)

    def has_shared_secret(self) -> bool:
        """Whether a shared secret is configured."""
        return bool(self.shared_secret)

    def has_cache(self) -> bool:
        """Whether a cache mechanism is configured."""
        return self.cache is not None

    @classmethod
    def from_env(cls, **overrides: Any) -> Self:
        """Build configuration from ``EAN_*`` environment variables.

        A ``.env`` file in the working directory is loaded first.

        Args:
            **overrides: Field values taking precedence over the environment.

        Returns:
            Configuration instance.

        Raises:
            KeyError: If ``EAN_API_KEY`` is not set and not overridden.
        """
        load_dotenv()
        values: dict[str, Any] = {
            "cid": os.environ.get("EAN_CID") or DEFAULT_CID,
            "shared_secret": os.environ.get("EAN_SHARED_SECRET"),
            "use_signature_auth": (
                os.environ.get("EAN_USE_SIGNATURE_AUTH", "").strip().lower() in _TRUTHY
            ),
        }
        if "api_key" not in overrides:
            values["api_key"] = os.environ["EAN_API_KEY"]
        values.update(overrides)
        return cls(**values)


def request_timeout_from_env() -> float:
    """Read the HTTP timeout in seconds from ``EAN_REQUEST_TIMEOUT``."""
    load_dotenv()
    return float(os.environ.get("EAN_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)))
