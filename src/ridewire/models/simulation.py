"""Three-state vehicle simulation models (current / if ignored / after repair)."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from ridewire.models.report import VehicleInfo


class SimulationStatus(StrEnum):
    """Overall vehicle status in one simulation state."""

    BROKEN = "BROKEN"
    CRITICAL = "CRITICAL"
    REPAIRED = "REPAIRED"


class AffectedSystem(BaseModel):
    """A vehicle system implicated by the diagnosis."""

    name: str
    current_health: int
    symptoms: list[str]


class Visualization(BaseModel):
    """Rendering hints for one system in one state."""

    color: str
    effect: str
    highlight: bool = False


class SystemState(BaseModel):
    """Health and status of one affected system within a simulation state."""

    name: str
    health: int
    status: str
    symptoms: list[str] = []
    resolved: bool = False
    visualization: Visualization


class PerformanceMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    efficiency: int
    reliability: int
    safety: int
    cost_per_mile: str


class DrivingImpact(BaseModel):
    acceleration: str
    fuel_economy: str
    emissions: str
    handling: str
    breakdown_risk: str | None = None


class CascadingCost(BaseModel):
    """Extra repair cost expected if the fault is left alone."""

    min: float
    max: float
    explanation: str


class RepairExplanation(BaseModel):
    problem: str
    solution: str
    mechanism: str
    verification: str


class SimulationState(BaseModel):
    """Fields shared by all three simulation states."""

    status: SimulationStatus
    timeframe: str
    systems: list[SystemState]
    metrics: PerformanceMetrics
    driving_impact: DrivingImpact


class IgnoredState(SimulationState):
    """Projected state if the repair is skipped."""

    days_until_failure: int
    estimated_additional_cost: CascadingCost
    danger_level: str
    warnings: list[str]


class RepairedState(SimulationState):
    """Expected state after the recommended repair."""

    why_it_works: RepairExplanation
    warranty: str
    long_term_benefits: list[str]


class SimulationStates(BaseModel):
    current_broken: SimulationState
    future_ignored: IgnoredState
    after_repair: RepairedState


class AROverlay(BaseModel):
    """Label anchor for one affected system in the AR view.

    ``position`` is a placeholder origin until systems are mapped onto a
    per-vehicle 3D model.
    """

    system_name: str
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    highlight_color: str
    label: str
    interactable: bool = True


class CustomerExplanation(BaseModel):
    summary: str
    comparison: dict[str, str]


class Simulation(BaseModel):
    """Complete before / ignored / after simulation for one diagnosis."""

    simulation_id: str
    vehicle_info: VehicleInfo
    timestamp: datetime
    states: SimulationStates
    ar_overlay: list[AROverlay]
    customer_explanation: CustomerExplanation
