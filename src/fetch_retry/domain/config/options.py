"""Fetch options model."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from fetch_retry.domain.config.retry import DEFAULT_RETRIES, RetryPolicy


class FetchOptions(BaseModel):
    """Options bag accepted by a retrying fetch.

    ``retries`` is the only field interpreted here; ``retries=None`` means the
    default budget, as it does in a plain mapping. Any other keyword is kept
    as a passthrough field and handed to the underlying fetch untouched.

    Example:
        FetchOptions(retries=1, method="POST", json={"x": 1})
    """

    retries: StrictInt = Field(DEFAULT_RETRIES, ge=0)

    model_config = ConfigDict(
        frozen=True,
        extra="allow",  # Passthrough fields for the underlying fetch
    )

    @field_validator("retries", mode="before")
    @classmethod
    def _default_when_none(cls, value: Any) -> Any:
        return DEFAULT_RETRIES if value is None else value

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(retries=self.retries)

    def passthrough(self) -> Dict[str, Any]:
        """Return the fields the underlying fetch should receive."""
        return dict(self.model_extra or {})
