import io
import os
import sys
import tempfile
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from rich.console import Console

from apwalk.catalog import PENDULUM, UNIT_CIRCLE
from apwalk.tui import TutorialTUI
from apwalk.tutorial.steps import Tour
from apwalk.walk import TourWalker


def make_console(width=100):
    return Console(file=io.StringIO(), width=width, height=40, color_system=None)


def render_text(tui):
    tui.console.print(tui.render())
    return tui.console.file.getvalue()


class TestTourWalker(unittest.TestCase):
    def test_walk_presents_every_step_and_closes(self):
        console = make_console()
        prompts = []
        walker = TourWalker(UNIT_CIRCLE, console=console, input_fn=prompts.append)

        walker.run()

        output = console.file.getvalue()
        self.assertIn("Step 1/8: The Unit Circle", output)
        self.assertIn("Step 8/8: All Six Functions", output)
        self.assertIn("Tutorial complete!", output)
        self.assertEqual(len(prompts), 7)
        self.assertFalse(walker.stepper.is_open)
        self.assertTrue(walker.panel.get("show_tan"))

    def test_walk_from_start_step_without_pausing(self):
        console = make_console()
        prompts = []
        walker = TourWalker(
            PENDULUM,
            console=console,
            pause_between_steps=False,
            input_fn=prompts.append,
        )

        walker.run(start=6)

        output = console.file.getvalue()
        self.assertNotIn("Step 5/7", output)
        self.assertIn("Step 6/7: Period vs Length", output)
        self.assertIn("Try changing the length slider.", output)
        self.assertIn("Step 7/7: Physical Pendulum", output)
        self.assertEqual(prompts, [])
        self.assertEqual(walker.panel.get("mode"), "physical")

    def test_out_of_range_start_warns_and_starts_at_first_step(self):
        console = make_console()
        walker = TourWalker(PENDULUM, console=console, pause_between_steps=False)

        walker.run(start=12)

        output = console.file.getvalue()
        self.assertIn("[warn] Start step 12 is out of range", output)
        self.assertIn("Step 1/7: Pendulum Motion", output)

    def test_verbose_prints_debug_lines(self):
        console = make_console()
        walker = TourWalker(PENDULUM, console=console, pause_between_steps=False, verbose=True)

        walker.run(start=7)

        self.assertIn("[debug] presenting step 7 of 7: Physical Pendulum", console.file.getvalue())

    def test_empty_tour(self):
        console = make_console()
        walker = TourWalker(Tour(slug="empty", title="Empty"), console=console)

        walker.run()

        self.assertIn("No steps in this tutorial.", console.file.getvalue())
        self.assertFalse(walker.stepper.is_open)


class TestTutorialTUI(unittest.TestCase):
    def setUp(self):
        self.tui = TutorialTUI(UNIT_CIRCLE, console=make_console())
        self.tui.stepper.open()

    def test_arrow_keys_navigate(self):
        self.tui.handle_key("\x1b[C")
        self.tui.handle_key("l")
        self.assertEqual(self.tui.stepper.current_step, 2)
        self.assertEqual(self.tui.panel.get("angle"), 0)

        self.tui.handle_key("\x1b[D")
        self.assertEqual(self.tui.stepper.current_step, 1)
        self.assertEqual(self.tui.panel.get("angle"), 90)

    def test_up_down_and_unknown_sequences_are_ignored(self):
        self.tui.handle_key("3")
        for key in ("\x1b[A", "\x1b[B", "\x1bOA", "\x1b[5~"):
            self.tui.handle_key(key)
            self.assertTrue(self.tui.stepper.is_open, repr(key))
            self.assertEqual(self.tui.stepper.current_step, 2, repr(key))

    def test_begin_at_start_step(self):
        tui = TutorialTUI(UNIT_CIRCLE, console=make_console())

        tui.begin(start=4)

        self.assertTrue(tui.stepper.is_open)
        self.assertEqual(tui.stepper.current_step, 3)
        self.assertEqual(tui.status_message, "")

    def test_begin_out_of_range_reports_and_starts_at_first_step(self):
        tui = TutorialTUI(UNIT_CIRCLE, console=make_console(width=160))

        tui.begin(start=12)

        self.assertEqual(tui.stepper.current_step, 0)
        self.assertEqual(
            tui.status_message, "Start step 12 is out of range (1-8); starting at step 1"
        )
        self.assertIn("Start step 12 is out of range", render_text(tui))

    def test_boundaries_set_status_message(self):
        self.tui.handle_key("h")
        self.assertEqual(self.tui.stepper.current_step, 0)
        self.assertEqual(self.tui.status_message, "Already at first step")

        self.tui.handle_key("G")
        self.tui.handle_key("l")
        self.assertEqual(self.tui.stepper.current_step, 7)
        self.assertEqual(self.tui.status_message, "Already at last step")

    def test_digits_jump_and_reject_missing_steps(self):
        self.tui.handle_key("4")
        self.assertEqual(self.tui.stepper.current_step, 3)

        self.tui.handle_key("9")
        self.assertEqual(self.tui.stepper.current_step, 3)
        self.assertEqual(self.tui.status_message, "No step 9")

    def test_enter_advances_then_finishes(self):
        for _ in range(7):
            self.tui.handle_key("\r")
        self.assertTrue(self.tui.stepper.is_open)
        self.assertTrue(self.tui.stepper.is_last)

        self.tui.handle_key("\r")
        self.assertFalse(self.tui.stepper.is_open)

    def test_quit_closes_and_restart_reopens(self):
        self.tui.handle_key("3")
        self.tui.handle_key("q")
        self.assertFalse(self.tui.stepper.is_open)
        self.assertEqual(self.tui.stepper.current_step, 2)

        self.tui.handle_key("r")
        self.assertTrue(self.tui.stepper.is_open)
        self.assertEqual(self.tui.stepper.current_step, 0)

    def test_help_overlay_swallows_navigation(self):
        self.tui.handle_key("?")
        self.tui.handle_key("l")
        self.assertEqual(self.tui.overlay_title, "Help")
        self.assertEqual(self.tui.stepper.current_step, 0)

        self.tui.handle_key("\x1b")
        self.assertIsNone(self.tui.overlay_title)
        self.assertTrue(self.tui.stepper.is_open)

    def test_render_shows_progress_and_step(self):
        self.tui.handle_key("4")

        output = render_text(self.tui)

        self.assertIn("AP Tutorial", output)
        self.assertIn("4 / 8", output)
        self.assertIn("Tangent Function", output)
        self.assertIn("show_tan", output)
        self.assertIn("Next", output)

    def test_render_last_step_offers_finish(self):
        self.tui.handle_key("G")

        output = render_text(self.tui)

        self.assertIn("8 / 8", output)
        self.assertIn("Finish", output)

    def test_render_empty_tour(self):
        tui = TutorialTUI(Tour(slug="empty", title="Empty"), console=make_console())
        tui.stepper.open()

        output = render_text(tui)

        self.assertIn("No steps in this tutorial.", output)
        self.assertIn("0 / 0", output)

        tui.handle_key("\r")
        self.assertFalse(tui.stepper.is_open)

    def test_save_and_export(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cwd = os.getcwd()
            os.chdir(tmpdir)
            try:
                self.tui.handle_key("s")
                self.assertEqual(self.tui.status_message, "Saved unit-circle.json")
                self.tui.handle_key("\x05")
                self.assertEqual(self.tui.status_message, "Exported unit-circle.md")
            finally:
                os.chdir(cwd)
            self.assertTrue((Path(tmpdir) / "unit-circle.json").exists())
            self.assertTrue((Path(tmpdir) / "unit-circle.md").exists())


if __name__ == "__main__":
    unittest.main()
