"""Sequential, non-interactive presentation of a tour."""

from __future__ import annotations

from typing import Callable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .tutorial.controls import ControlPanel, format_value
from .tutorial.steps import DemoStep, Tour
from .tutorial.stepper import TutorialStepper


class TourWalker:
    """Print a tour step by step, pausing for Enter between steps."""

    def __init__(
        self,
        tour: Tour,
        console: Optional[Console] = None,
        pause_between_steps: bool = True,
        verbose: bool = False,
        input_fn: Callable[[str], str] = input,
    ):
        self.tour = tour
        self.console = console or Console()
        self.pause_between_steps = pause_between_steps
        self.verbose = verbose
        self.input_fn = input_fn
        self.panel, steps = tour.build()
        self.stepper = TutorialStepper(steps)

    def run(self, start: Optional[int] = None) -> None:
        rule_style = self.tour.accent
        self.console.rule(Text(self.tour.title, style=f"bold {rule_style}"), style=rule_style)
        self.stepper.open()
        if self.stepper.step_count == 0:
            self.console.print("No steps in this tutorial.")
            self.stepper.close()
            return

        if start is not None:
            self.stepper.go_to_step(start - 1)
            if self.stepper.current_step != start - 1:
                self._log_warning(
                    f"Start step {start} is out of range (1-{self.stepper.step_count}); "
                    "starting at step 1"
                )

        while True:
            self._present_step(self.stepper.current)
            if self.stepper.is_last:
                break
            if self.pause_between_steps:
                self.input_fn("\n[Press Enter for next step...]\n")
            self.stepper.next()

        self.stepper.close()
        self.console.rule(style=rule_style)
        self.console.print("Tutorial complete!", style="bold")

    def _present_step(self, step: DemoStep) -> None:
        number, total = self.stepper.progress
        self._log_debug(f"presenting step {number} of {total}: {step.title}")
        self.console.print()
        self.console.print(
            Text.assemble(
                (f"Step {number}/{total}: ", "dim"),
                (step.title, f"bold {self.tour.accent}"),
            )
        )
        self.console.print()
        self.console.print(Text(step.description))
        if step.highlight:
            self.console.print()
            self.console.print(Text(step.highlight, style=f"italic {self.tour.accent}"))
        if len(self.panel):
            self.console.print()
            self.console.print(render_controls(self.panel))

    def _log_debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[debug] {message}", markup=False, style="dim")

    def _log_warning(self, message: str) -> None:
        self.console.print(f"[warn] {message}", markup=False, style="yellow")


def render_controls(panel: ControlPanel) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    for name in panel:
        table.add_row(Text(name, style="cyan"), Text(format_value(panel.get(name))))
    return table

