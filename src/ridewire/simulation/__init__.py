"""Before / if-ignored / after-repair vehicle simulation."""

from ridewire.simulation.simulator import (
    VehicleSimulator,
    cascading_cost,
    identify_affected_systems,
    predict_failure_days,
)

__all__ = [
    "VehicleSimulator",
    "cascading_cost",
    "identify_affected_systems",
    "predict_failure_days",
]
