"""Fault report models: the structured input to a diagnostic analysis."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TroubleCode(BaseModel):
    """A single diagnostic trouble code (DTC) with its description."""

    model_config = ConfigDict(frozen=True)

    code: str
    description: str = ""


class VehicleInfo(BaseModel):
    """Free-form vehicle metadata.

    Every field is optional: the object itself is required on a report, but
    upstream scan tools rarely fill in all five values.
    """

    model_config = ConfigDict(frozen=True)

    make: str | None = None
    model: str | None = None
    year: int | str | None = None
    mileage: int | float | str | None = None
    engine: str | None = None


class FaultReport(BaseModel):
    """Vehicle trouble codes, symptoms, and sensor state for one request.

    Accepts both the camelCase wire names (``troubleCodes``, ``vehicleInfo``,
    ``sensorData``) and snake_case.  ``dtcCodes`` is accepted as an alias
    for ``troubleCodes``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trouble_codes: list[TroubleCode] = Field(
        validation_alias=AliasChoices("troubleCodes", "dtcCodes", "trouble_codes"),
    )
    symptoms: list[str] = []
    vehicle_info: VehicleInfo = Field(
        validation_alias=AliasChoices("vehicleInfo", "vehicle_info"),
    )
    sensor_data: dict[str, object] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("sensorData", "sensor_data"),
    )

    @property
    def code_count(self) -> int:
        """Number of trouble codes on the report."""
        return len(self.trouble_codes)
