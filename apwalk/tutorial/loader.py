"""Read and write tours as JSON, and render them as markdown."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import json
import re

from .controls import ControlValue, format_value
from .steps import DEFAULT_TUTORIAL_TITLE, Department, Tour, TourStep

# Slugs double as file names when a tour is saved or exported.
SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*$")


class TourFormatError(ValueError):
    """A tour file or mapping does not match the tour schema."""


def load_tour(path: Path) -> Tour:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TourFormatError(f"{path}: cannot read tour file ({exc.strerror})") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TourFormatError(f"{path}: invalid JSON ({exc.msg}, line {exc.lineno})") from exc
    return tour_from_dict(data, source=str(path))


def dump_tour(tour: Tour, path: Path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(tour_to_dict(tour), indent=2) + "\n", encoding="utf-8")
    return path


def discover_tours(
    directories: Iterable[Path],
    on_error: Optional[Callable[[Path, TourFormatError], None]] = None,
) -> List[Tour]:
    """Load every ``*.json`` tour in ``directories``.

    Missing directories are skipped. A malformed file raises unless
    ``on_error`` is given, in which case it is reported and skipped.
    """
    tours: List[Tour] = []
    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            continue
        for path in sorted(directory.glob("*.json")):
            try:
                tours.append(load_tour(path))
            except TourFormatError as exc:
                if on_error is None:
                    raise
                on_error(path, exc)
    return tours


def tour_from_dict(data: Any, source: str = "<tour>") -> Tour:
    if not isinstance(data, dict):
        raise TourFormatError(f"{source}: expected a JSON object")

    slug = _require_str(data, "slug", source)
    if not SLUG_PATTERN.fullmatch(slug):
        raise TourFormatError(
            f"{source}: 'slug' must be lowercase letters, digits and hyphens (got {slug!r})"
        )
    title = _require_str(data, "title", source)
    tutorial_title = data.get("tutorial_title", DEFAULT_TUTORIAL_TITLE)
    if not isinstance(tutorial_title, str):
        raise TourFormatError(f"{source}: 'tutorial_title' must be a string")

    department = None
    raw_department = data.get("department")
    if raw_department is not None:
        try:
            department = Department(str(raw_department).lower())
        except ValueError:
            choices = ", ".join(d.value for d in Department)
            raise TourFormatError(
                f"{source}: unknown department {raw_department!r} (expected one of: {choices})"
            ) from None

    controls = _parse_controls(data.get("controls", {}), f"{source}: controls")

    raw_steps = data.get("steps")
    if not isinstance(raw_steps, list):
        raise TourFormatError(f"{source}: 'steps' must be a list")

    steps: List[TourStep] = []
    for index, raw_step in enumerate(raw_steps, start=1):
        where = f"{source}: step {index}"
        if not isinstance(raw_step, dict):
            raise TourFormatError(f"{where}: expected an object")
        highlight = raw_step.get("highlight")
        if highlight is not None and not isinstance(highlight, str):
            raise TourFormatError(f"{where}: 'highlight' must be a string")
        step_controls = _parse_controls(raw_step.get("controls", {}), f"{where}: controls")
        unknown = [name for name in step_controls if name not in controls]
        if unknown:
            raise TourFormatError(
                f"{where}: controls not declared by the tour: {', '.join(unknown)}"
            )
        steps.append(
            TourStep(
                title=_require_str(raw_step, "title", where),
                description=_require_text(raw_step, "description", where),
                highlight=highlight,
                controls=step_controls,
            )
        )

    return Tour(
        slug=slug,
        title=title,
        department=department,
        steps=steps,
        controls=controls,
        tutorial_title=tutorial_title,
    )


def tour_to_dict(tour: Tour) -> Dict[str, Any]:
    def step_to_dict(step: TourStep) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": step.title,
            "description": step.description,
        }
        if step.highlight:
            payload["highlight"] = step.highlight
        if step.controls:
            payload["controls"] = _controls_to_json(step.controls)
        return payload

    return {
        "slug": tour.slug,
        "title": tour.title,
        "department": tour.department.value if tour.department else None,
        "tutorial_title": tour.tutorial_title,
        "controls": _controls_to_json(tour.controls),
        "steps": [step_to_dict(step) for step in tour.steps],
    }


def tour_to_markdown(tour: Tour) -> str:
    lines = [f"# {tour.title}", ""]
    if tour.department:
        lines.append(f"Department: {tour.department.value}")
    lines.append(f"Steps: {len(tour.steps)}")
    lines.append("")
    for number, step in enumerate(tour.steps, start=1):
        lines.append(f"## Step {number}: {step.title}")
        lines.append("")
        lines.append(step.description)
        lines.append("")
        if step.highlight:
            lines.append(f"> {step.highlight}")
            lines.append("")
        if step.controls:
            lines.append("Controls:")
            for name, value in step.controls.items():
                lines.append(f"- {name}: {format_value(value)}")
            lines.append("")
    return "\n".join(lines)


def _require_str(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise TourFormatError(f"{where}: '{key}' must be a non-empty string")
    return value


def _require_text(data: Dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise TourFormatError(f"{where}: '{key}' must be a string")
    return value


def _parse_controls(raw: Any, where: str) -> Dict[str, ControlValue]:
    if not isinstance(raw, dict):
        raise TourFormatError(f"{where}: expected an object")
    controls: Dict[str, ControlValue] = {}
    for name, value in raw.items():
        if isinstance(value, list):
            if not all(isinstance(item, str) for item in value):
                raise TourFormatError(f"{where}: '{name}' list values must be strings")
            controls[name] = tuple(value)
        elif isinstance(value, (bool, int, float, str)):
            controls[name] = value
        else:
            raise TourFormatError(
                f"{where}: '{name}' must be a boolean, number, string or list of strings"
            )
    return controls


def _controls_to_json(controls: Dict[str, ControlValue]) -> Dict[str, Any]:
    return {
        name: list(value) if isinstance(value, tuple) else value
        for name, value in controls.items()
    }
