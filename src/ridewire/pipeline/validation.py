"""Request-boundary validation of fault report payloads.

Runs before the engine is invoked.  A payload missing trouble codes or
vehicle information is rejected here (a 400-class failure for any HTTP
front end) rather than inside prompt rendering or consensus.
"""

from pydantic import ValidationError

from ridewire.models.report import FaultReport

_CODE_KEYS = ("troubleCodes", "dtcCodes", "trouble_codes")
_VEHICLE_KEYS = ("vehicleInfo", "vehicle_info")


class ReportValidationError(Exception):
    """Raised when a fault report payload is unusable.

    Attributes:
        issues: Human-readable list of problems found.
    """

    def __init__(self, issues: list[str]) -> None:
        self.issues = issues
        super().__init__(f"Invalid fault report: {'; '.join(issues)}")


def validate_report(payload: object) -> FaultReport:
    """Turn a decoded JSON body into a :class:`FaultReport`.

    ``symptoms`` and ``sensorData`` default to empty when absent.

    Raises:
        ReportValidationError: If the payload is not an object, lacks trouble
            codes or vehicle info, or has mistyped fields.
    """
    if not isinstance(payload, dict):
        raise ReportValidationError(["Request body must be a JSON object"])
    payload = {key: value for key, value in payload.items() if value is not None}

    issues: list[str] = []
    if not any(payload.get(key) is not None for key in _CODE_KEYS):
        issues.append("Missing required field: troubleCodes")
    if not any(payload.get(key) is not None for key in _VEHICLE_KEYS):
        issues.append("Missing required field: vehicleInfo")
    if issues:
        raise ReportValidationError(issues)

    try:
        return FaultReport.model_validate(payload)
    except ValidationError as exc:
        raise ReportValidationError(
            [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            ]
        ) from exc
