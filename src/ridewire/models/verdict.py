"""Verdict and consensus result models.

A :class:`Verdict` is one provider's structured diagnostic opinion.  It is
validated strictly at the parse boundary so downstream code can rely on its
invariants: confidence in ``[0, 1]``, ``cost_range.min <= cost_range.max``,
and urgency drawn from a closed set.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class Urgency(StrEnum):
    """How soon the vehicle needs attention."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CostRange(BaseModel):
    """Estimated repair cost bounds (currency-agnostic)."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(strict=True, ge=0.0, allow_inf_nan=False)
    max: float = Field(strict=True, ge=0.0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_order(self) -> "CostRange":
        if self.min > self.max:
            msg = f"costRange.min ({self.min}) exceeds costRange.max ({self.max})"
            raise ValueError(msg)
        return self


class Verdict(BaseModel):
    """One provider's diagnostic opinion, parsed from its JSON reply."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    diagnosis: str = Field(strict=True)
    root_cause: str = Field(
        strict=True, validation_alias=AliasChoices("rootCause", "root_cause")
    )
    confidence: float = Field(strict=True, ge=0.0, le=1.0, allow_inf_nan=False)
    # The public response names (recommendedActions, estimatedCost,
    # partsNeeded) are accepted so analyze output can be fed back in.
    actions: list[str] = Field(
        strict=True, validation_alias=AliasChoices("actions", "recommendedActions")
    )
    cost_range: CostRange = Field(
        validation_alias=AliasChoices("costRange", "cost_range", "estimatedCost")
    )
    urgency: Urgency
    parts: list[str] = Field(
        strict=True, validation_alias=AliasChoices("parts", "partsNeeded")
    )

    @field_validator("urgency", mode="before")
    @classmethod
    def _normalize_urgency(cls, value: object) -> object:
        # The one lenient field: models are inconsistent about casing
        # ("High", "CRITICAL"), so case and surrounding space are ignored.
        # Any other spelling still fails.
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ConsensusResult(BaseModel):
    """The verdict chosen by consensus, stamped with when it was produced.

    Attributes:
        verdict: The verdict returned to the caller, never a blend of two.
        timestamp: UTC time the result was produced.
        provider: Provider name whose verdict was chosen.
        second_opinion: Whether a secondary verdict took part in resolution.
    """

    verdict: Verdict
    timestamp: datetime
    provider: str
    second_opinion: bool = False

    def to_response(self) -> dict:
        """Render the result in the public API's camelCase shape."""
        v = self.verdict
        return {
            "diagnosis": v.diagnosis,
            "rootCause": v.root_cause,
            "confidence": v.confidence,
            "recommendedActions": list(v.actions),
            "estimatedCost": {"min": v.cost_range.min, "max": v.cost_range.max},
            "urgency": v.urgency.value,
            "partsNeeded": list(v.parts),
            "timestamp": self.timestamp.isoformat(),
        }
