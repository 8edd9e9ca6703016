"""Retry policy model."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt

DEFAULT_RETRIES = 3


class RetryPolicy(BaseModel):
    """Retry budget for a single logical request.

    Attributes:
        retries: Number of extra attempts allowed after the first failure
            (total attempts = retries + 1)
    """

    retries: StrictInt = Field(DEFAULT_RETRIES, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def max_attempts(self) -> int:
        return self.retries + 1
