"""Deterministic rendering of a fault report into a provider-agnostic query.

The query embeds, in fixed order, vehicle information, trouble codes,
symptoms, a JSON dump of sensor data, and the output schema instruction.
Identical reports always render to byte-identical text so recorded provider
replies can be replayed in tests.
"""

import json
from pathlib import Path

from jinja2 import Template

from ridewire.models.report import FaultReport, VehicleInfo

DEFAULT_PROMPT_DIR = Path(__file__).parent.parent / "templates" / "prompts"


def _text(value: object) -> str:
    return "" if value is None else str(value)


class PromptBuilder:
    """Renders fault reports with the packaged Jinja2 prompt templates.

    Templates are read once at construction; ``render`` itself does no I/O
    and cannot fail.

    Args:
        prompt_dir: Directory holding ``diagnostic.j2`` and ``technician.j2``.
            Defaults to the templates shipped with the package.
    """

    QUERY_TEMPLATE = "diagnostic.j2"
    SYSTEM_TEMPLATE = "technician.j2"

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self.prompt_dir = prompt_dir or DEFAULT_PROMPT_DIR
        self._query_template = self._load(self.QUERY_TEMPLATE)
        self._system_template = self._load(self.SYSTEM_TEMPLATE)

    def _load(self, name: str) -> Template:
        template_text = (self.prompt_dir / name).read_text()
        return Template(template_text, trim_blocks=True, lstrip_blocks=True)

    def system_prompt(self) -> str:
        """Return the technician persona sent as the system message."""
        return self._system_template.render()

    def render(self, report: FaultReport) -> str:
        """Render *report* into the query sent to every provider."""
        return self._query_template.render(
            vehicle=self._vehicle_vars(report.vehicle_info),
            trouble_codes=[
                {"code": tc.code, "description": tc.description}
                for tc in report.trouble_codes
            ],
            symptoms=list(report.symptoms),
            sensor_json=json.dumps(
                report.sensor_data,
                indent=2,
                sort_keys=True,
                ensure_ascii=False,
                default=str,
            ),
        )

    @staticmethod
    def _vehicle_vars(info: VehicleInfo) -> dict[str, str]:
        make_model = " ".join(p for p in (_text(info.make), _text(info.model)) if p)
        return {
            "make_model": make_model,
            "year": _text(info.year),
            "mileage": _text(info.mileage),
            "engine": _text(info.engine),
        }
