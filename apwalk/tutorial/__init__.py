"""Guided tutorial steps, control state and the stepper that walks them."""

from .controls import ControlPanel, ControlValue, format_value
from .steps import (
    DEFAULT_ACCENT,
    DEFAULT_TUTORIAL_TITLE,
    DemoStep,
    Department,
    Tour,
    TourStep,
    build_steps,
)
from .stepper import TutorialStepper
from .loader import (
    TourFormatError,
    discover_tours,
    dump_tour,
    load_tour,
    tour_from_dict,
    tour_to_dict,
    tour_to_markdown,
)

__all__ = [
    "ControlPanel",
    "ControlValue",
    "DEFAULT_ACCENT",
    "DEFAULT_TUTORIAL_TITLE",
    "DemoStep",
    "Department",
    "Tour",
    "TourFormatError",
    "TourStep",
    "TutorialStepper",
    "build_steps",
    "discover_tours",
    "dump_tour",
    "format_value",
    "load_tour",
    "tour_from_dict",
    "tour_to_dict",
    "tour_to_markdown",
]
