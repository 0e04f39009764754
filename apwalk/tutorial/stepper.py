"""Index walker behind every guided tutorial."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .steps import DemoStep


class TutorialStepper:
    """Track the open/closed state and active step of one tutorial.

    Navigation never moves ``current_step`` outside ``[0, step_count)``:
    out-of-range requests are ignored rather than raised. Every accepted
    move runs the destination step's ``setup``, including revisits and
    jumps to the step that is already active. Exceptions from ``setup``
    propagate to the caller after the index has been updated.

    ``is_open`` and ``current_step`` are independent: navigating while
    closed moves the index without opening the tutorial, and ``open()``
    always restarts from the first step.
    """

    def __init__(self, steps: Sequence[DemoStep]):
        self._steps: Tuple[DemoStep, ...] = tuple(steps)
        self._is_open = False
        self._current_step = 0

    @property
    def steps(self) -> Tuple[DemoStep, ...]:
        return self._steps

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def current(self) -> Optional[DemoStep]:
        # An empty tutorial can still be opened; there is no step to show.
        if not self._steps:
            return None
        return self._steps[self._current_step]

    @property
    def is_first(self) -> bool:
        return self._current_step == 0

    @property
    def is_last(self) -> bool:
        return self._current_step == self.step_count - 1

    @property
    def progress(self) -> Tuple[int, int]:
        return self._current_step + 1, self.step_count

    def open(self) -> None:
        self._current_step = 0
        self._is_open = True
        if self._steps:
            self._run_setup(0)

    def close(self) -> None:
        self._is_open = False

    def next(self) -> None:
        if self._current_step < self.step_count - 1:
            self._activate(self._current_step + 1)

    def prev(self) -> None:
        if self._current_step > 0:
            self._activate(self._current_step - 1)

    def go_to_step(self, index: int) -> None:
        if 0 <= index < self.step_count:
            self._activate(index)

    def _activate(self, index: int) -> None:
        self._current_step = index
        self._run_setup(index)

    def _run_setup(self, index: int) -> None:
        setup = self._steps[index].setup
        if setup is not None:
            setup()
