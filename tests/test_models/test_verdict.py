"""Tests for fault report and verdict model invariants."""

import pytest
from pydantic import ValidationError

from ridewire.models.report import FaultReport
from ridewire.models.verdict import CostRange, Urgency, Verdict


class TestCostRange:
    def test_equal_bounds(self) -> None:
        assert CostRange(min=150, max=150).max == 150

    def test_inverted_bounds(self) -> None:
        with pytest.raises(ValidationError, match="exceeds"):
            CostRange(min=300, max=100)

    def test_negative(self) -> None:
        with pytest.raises(ValidationError):
            CostRange(min=-1, max=100)

    @pytest.mark.parametrize("bound", [float("inf"), float("nan")])
    def test_non_finite_bound(self, bound) -> None:
        with pytest.raises(ValidationError):
            CostRange(min=0, max=bound)


class TestVerdict:
    def test_snake_case_names_accepted(self) -> None:
        verdict = Verdict(
            diagnosis="Lean condition",
            root_cause="Vacuum leak",
            confidence=1,
            actions=[],
            cost_range=CostRange(min=0, max=0),
            urgency=Urgency.LOW,
            parts=[],
        )
        assert verdict.confidence == 1.0

    def test_response_names_accepted(self, verdict_dict) -> None:
        data = verdict_dict()
        data["recommendedActions"] = data.pop("actions")
        data["estimatedCost"] = data.pop("costRange")
        data["partsNeeded"] = data.pop("parts")
        verdict = Verdict.model_validate(data)
        assert verdict.actions == ["Replace spark plug"]
        assert verdict.cost_range.max == 200

    def test_frozen(self, verdict_factory) -> None:
        verdict = verdict_factory()
        with pytest.raises(ValidationError):
            verdict.confidence = 0.1

    @pytest.mark.parametrize("confidence", [0.0, 1.0])
    def test_confidence_bounds_inclusive(self, verdict_factory, confidence) -> None:
        assert verdict_factory(confidence=confidence).confidence == confidence


class TestFaultReport:
    def test_snake_case_payload(self) -> None:
        report = FaultReport(
            trouble_codes=[{"code": "P0128"}],
            vehicle_info={"make": "Subaru", "year": "2012"},
        )
        assert report.code_count == 1
        assert report.vehicle_info.year == "2012"
