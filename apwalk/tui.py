"""Full-screen tutorial panel driven by single key presses."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import select
import sys
import termios
import tty

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from .tutorial.loader import dump_tour, tour_to_markdown
from .tutorial.steps import Tour
from .tutorial.stepper import TutorialStepper
from .walk import render_controls

INACTIVE_SEGMENT = "grey30"


def run_tui(
    tour: Tour,
    tutorial_title: Optional[str] = None,
    start: Optional[int] = None,
    debug: bool = False,
) -> None:
    if not sys.stdin.isatty():
        raise RuntimeError("Interactive UI requires a TTY for input. Run from a terminal.")
    tui = TutorialTUI(tour=tour, tutorial_title=tutorial_title, debug=debug)
    tui.run(start=start)


class TutorialTUI:
    def __init__(
        self,
        tour: Tour,
        console: Optional[Console] = None,
        tutorial_title: Optional[str] = None,
        debug: bool = False,
    ):
        self.tour = tour
        self.console = console or Console()
        self.tutorial_title = tutorial_title or tour.tutorial_title
        self.debug = debug
        self.panel, steps = tour.build()
        self.stepper = TutorialStepper(steps)
        self.status_message = ""
        self.overlay_title: Optional[str] = None
        self.overlay_lines: List[str] = []
        self.last_key = ""

    def begin(self, start: Optional[int] = None) -> None:
        """Open the tutorial, optionally at 1-based step ``start``."""
        self.stepper.open()
        if start is None:
            return
        total = self.stepper.step_count
        if 1 <= start <= total:
            self.stepper.go_to_step(start - 1)
        else:
            self.status_message = (
                f"Start step {start} is out of range (1-{total}); starting at step 1"
            )

    def run(self, start: Optional[int] = None) -> None:
        self.begin(start)
        with Live(self.render(), console=self.console, refresh_per_second=10, screen=True) as live:
            while self.stepper.is_open:
                key = self._get_key()
                if not key:
                    continue
                self.handle_key(key)
                live.update(self.render())

    # ===== Rendering =====

    def render(self) -> Layout:
        layout = Layout()
        sections = [
            Layout(name="header", size=3),
            Layout(name="progress", size=3),
            Layout(name="main", ratio=1),
        ]
        if len(self.panel):
            sections.append(Layout(name="controls", size=min(len(self.panel), 8) + 2))
        sections.append(Layout(name="footer", size=3))
        layout.split_column(*sections)

        layout["header"].update(self._render_header())
        layout["progress"].update(self._render_progress())
        if self.overlay_title:
            layout["main"].update(self._render_overlay())
        else:
            layout["main"].update(self._render_step())
        if len(self.panel):
            layout["controls"].update(
                Panel(render_controls(self.panel), title="Controls", border_style="cyan")
            )
        layout["footer"].update(self._render_footer())
        return layout

    def _render_header(self) -> Panel:
        accent = self.tour.accent
        number, total = self.stepper.progress
        if not total:
            number = 0
        title = Text()
        title.append(f" {self.tutorial_title} ", style=f"bold {accent} reverse")
        title.append("  ")
        title.append(self.tour.title, style="bold")
        title.append("  |  ", style="dim")
        title.append(f"{number} / {total}", style="dim")
        max_width = max(10, self.console.size.width - 4)
        title.truncate(max_width, overflow="ellipsis")
        return Panel(title, style="bold")

    def _render_progress(self) -> Panel:
        total = self.stepper.step_count
        bar = Text()
        if total:
            available = max(total, self.console.size.width - 4 - (total - 1))
            segment = max(1, available // total)
            for index in range(total):
                if index:
                    bar.append(" ")
                style = self.tour.accent if index <= self.stepper.current_step else INACTIVE_SEGMENT
                bar.append("━" * segment, style=style)
        return Panel(bar, border_style="dim")

    def _render_step(self) -> Panel:
        step = self.stepper.current
        if step is None:
            return Panel(Text("No steps in this tutorial.", style="dim"), border_style="dim")
        body: List[Text] = [
            Text(step.title, style="bold"),
            Text(""),
            Text(step.description),
        ]
        if step.highlight:
            body.append(Text(""))
            body.append(Text(step.highlight, style=f"italic {self.tour.accent}"))
        return Panel(Group(*body), border_style=self.tour.accent, padding=(1, 2))

    def _render_overlay(self) -> Panel:
        return Panel(
            Text("\n".join(self.overlay_lines)),
            title=self.overlay_title or "Info",
            border_style="bright_cyan",
        )

    def _render_footer(self) -> Panel:
        shortcuts = Text()
        if not self.stepper.is_first:
            shortcuts.append(" [<-] ", style="bold")
            shortcuts.append("Previous  ", style="dim")
        if self.stepper.is_last or not self.stepper.step_count:
            shortcuts.append("[Enter] ", style="bold")
            shortcuts.append("Finish  ", style="dim")
        else:
            shortcuts.append("[->] ", style="bold")
            shortcuts.append("Next  ", style="dim")
        shortcuts.append("[1-9] ", style="bold")
        shortcuts.append("Jump  ", style="dim")
        shortcuts.append("[?] ", style="bold")
        shortcuts.append("Help  ", style="dim")
        shortcuts.append("[q] ", style="bold")
        shortcuts.append("Close", style="dim")

        if self.status_message:
            shortcuts.append("  |  ", style="dim")
            shortcuts.append(self.status_message, style="yellow")
        if self.debug:
            shortcuts.append("  |  ", style="dim")
            shortcuts.append(
                f"step={self.stepper.current_step} open={self.stepper.is_open} key={self.last_key!r}",
                style="dim",
            )
        max_width = max(10, self.console.size.width - 4)
        shortcuts.truncate(max_width, overflow="ellipsis")
        return Panel(shortcuts, style="dim")

    # ===== Input Handling =====

    def handle_key(self, key: str) -> None:
        key = self._normalize_key(key)
        self.last_key = key
        self.status_message = ""
        if self.overlay_title:
            if key in ("ESC", "q", "?", "\r", "\n"):
                self._clear_overlay()
            return

        if key in ("h", "LEFT"):
            if self.stepper.is_first:
                self.status_message = "Already at first step"
            self.stepper.prev()
        elif key in ("l", "RIGHT"):
            if self.stepper.is_last:
                self.status_message = "Already at last step"
            self.stepper.next()
        elif key in ("\r", "\n"):
            if self.stepper.is_last or not self.stepper.step_count:
                self.stepper.close()
            else:
                self.stepper.next()
        elif key.isdigit() and key != "0":
            index = int(key) - 1
            if index >= self.stepper.step_count:
                self.status_message = f"No step {key}"
            self.stepper.go_to_step(index)
        elif key == "g":
            self.stepper.go_to_step(0)
        elif key == "G":
            self.stepper.go_to_step(self.stepper.step_count - 1)
        elif key == "r":
            self.stepper.open()
        elif key == "s":
            self._save_tour()
        elif key == "\x05":
            self._export_markdown()
        elif key == "?":
            self._show_help()
        elif key in ("q", "ESC", "\x03"):
            self.stepper.close()

    # ===== Actions =====

    def _save_tour(self) -> None:
        path = dump_tour(self.tour, Path.cwd() / f"{self.tour.slug}.json")
        self.status_message = f"Saved {path.name}"

    def _export_markdown(self) -> None:
        path = Path.cwd() / f"{self.tour.slug}.md"
        path.write_text(tour_to_markdown(self.tour), encoding="utf-8")
        self.status_message = f"Exported {path.name}"

    def _show_help(self) -> None:
        self.overlay_title = "Help"
        self.overlay_lines = [
            "Navigation:",
            "  Left/Right or h/l  - Previous/Next step",
            "  Enter              - Next step (Finish on the last step)",
            "  1-9                - Jump to step",
            "  g/G                - First/Last step",
            "  r                  - Restart from the first step",
            "",
            "General:",
            "  s                  - Save tour as JSON",
            "  Ctrl+e             - Export markdown",
            "  q/Esc              - Close the tutorial",
        ]

    def _clear_overlay(self) -> None:
        self.overlay_title = None
        self.overlay_lines = []

    # ===== Terminal =====

    def _get_key(self) -> str:
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ch = sys.stdin.read(1)
            if ch == "\x1b":
                seq = ch
                while True:
                    ready, _, _ = select.select([sys.stdin], [], [], 0.02)
                    if not ready:
                        break
                    nxt = sys.stdin.read(1)
                    seq += nxt
                    if nxt.isalpha() or nxt == "~":
                        break
                    if len(seq) >= 12:
                        break
                return seq
            return ch
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    def _normalize_key(self, key: str) -> str:
        if key.startswith("\x1b[") or key.startswith("\x1bO"):
            last = key[-1]
            if last == "C":
                return "RIGHT"
            if last == "D":
                return "LEFT"
            return ""
        if key.startswith("\x1b"):
            return "ESC"
        return key
