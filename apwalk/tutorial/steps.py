"""Step types and tour schema for guided tutorials."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .controls import ControlPanel, ControlValue

DEFAULT_ACCENT = "rgb(160,100,255)"
DEFAULT_TUTORIAL_TITLE = "AP Tutorial"


class Department(Enum):
    MATH = "math"
    CALCULUS = "calculus"
    PHYSICS = "physics"
    BIOLOGY = "biology"
    CHEMISTRY = "chemistry"
    ECONOMICS = "economics"
    CS = "cs"

    @property
    def color(self) -> str:
        return DEPARTMENT_COLORS.get(self, DEFAULT_ACCENT)


DEPARTMENT_COLORS: Dict[Department, str] = {
    Department.MATH: "rgb(100,140,255)",
    Department.CALCULUS: "rgb(180,120,255)",
    Department.PHYSICS: "rgb(160,100,255)",
    Department.BIOLOGY: "rgb(80,200,120)",
    Department.CHEMISTRY: "rgb(255,160,80)",
    Department.ECONOMICS: "rgb(220,180,80)",
    Department.CS: "rgb(80,200,220)",
}


@dataclass(frozen=True)
class DemoStep:
    """One step of a guided tutorial.

    ``setup`` configures the visualization for this step. It is called every
    time the step becomes active, so it must assign state rather than
    accumulate it.
    """

    title: str
    description: str
    setup: Optional[Callable[[], None]] = None
    highlight: Optional[str] = None


@dataclass
class TourStep:
    """Declarative step: the control values to apply when it becomes active."""

    title: str
    description: str
    highlight: Optional[str] = None
    controls: Dict[str, ControlValue] = field(default_factory=dict)


@dataclass
class Tour:
    """Guided tutorial for one visualization page."""

    slug: str
    title: str
    department: Optional[Department] = None
    steps: List[TourStep] = field(default_factory=list)
    controls: Dict[str, ControlValue] = field(default_factory=dict)
    tutorial_title: str = DEFAULT_TUTORIAL_TITLE

    @property
    def accent(self) -> str:
        if self.department is None:
            return DEFAULT_ACCENT
        return self.department.color

    def build(self) -> Tuple[ControlPanel, Tuple[DemoStep, ...]]:
        """Fresh control panel plus steps whose setups write to it."""
        panel = ControlPanel(self.controls)
        return panel, build_steps(self.steps, panel)


def build_steps(steps: Sequence[TourStep], panel: ControlPanel) -> Tuple[DemoStep, ...]:
    built: List[DemoStep] = []
    for step in steps:
        setup = panel.bind(step.controls) if step.controls else None
        built.append(
            DemoStep(
                title=step.title,
                description=step.description,
                setup=setup,
                highlight=step.highlight,
            )
        )
    return tuple(built)
