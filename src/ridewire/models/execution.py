"""Provider call attempt records."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class ProviderErrorKind(StrEnum):
    """Classification of a failed provider call."""

    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    MALFORMED = "malformed"


class ProviderAttempt(BaseModel):
    """Record of a single provider call attempt for the audit trail."""

    provider: str
    attempt_number: int
    duration_seconds: float
    error_kind: ProviderErrorKind | None = None
    error: str | None = None
    timestamp: datetime
