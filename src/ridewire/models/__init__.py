"""Data models for fault reports, verdicts, attempts, and simulations."""

from ridewire.models.execution import ProviderAttempt, ProviderErrorKind
from ridewire.models.report import FaultReport, TroubleCode, VehicleInfo
from ridewire.models.simulation import Simulation, SimulationStatus
from ridewire.models.verdict import ConsensusResult, CostRange, Urgency, Verdict

__all__ = [
    "ConsensusResult",
    "CostRange",
    "FaultReport",
    "ProviderAttempt",
    "ProviderErrorKind",
    "Simulation",
    "SimulationStatus",
    "TroubleCode",
    "Urgency",
    "VehicleInfo",
    "Verdict",
]
