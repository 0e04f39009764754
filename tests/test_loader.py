import sys
import tempfile
from pathlib import Path
import json
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from apwalk.catalog import SORTING, TITRATION
from apwalk.tutorial.loader import (
    TourFormatError,
    discover_tours,
    dump_tour,
    load_tour,
    tour_from_dict,
    tour_to_markdown,
)
from apwalk.tutorial.steps import Department, Tour, TourStep
from apwalk.tutorial.stepper import TutorialStepper

UNIT_CIRCLE_JSON = {
    "slug": "unit-circle-lite",
    "title": "Unit Circle",
    "department": "Math",
    "tutorial_title": "Quick Tour",
    "controls": {"angle": 45, "show_tan": False},
    "steps": [
        {"title": "The Unit Circle", "description": "Radius 1.", "controls": {"angle": 0}},
        {
            "title": "Tangent",
            "description": "tan = sin / cos.",
            "highlight": "Undefined at 90 degrees.",
            "controls": {"angle": 45, "show_tan": True},
        },
        {"title": "Recap", "description": "Done."},
    ],
}


class TestTourFromDict(unittest.TestCase):
    def test_parses_fields_and_builds_setups(self):
        tour = tour_from_dict(UNIT_CIRCLE_JSON)

        self.assertEqual(tour.department, Department.MATH)
        self.assertEqual(tour.tutorial_title, "Quick Tour")
        self.assertEqual(len(tour.steps), 3)

        panel, steps = tour.build()
        stepper = TutorialStepper(steps)
        stepper.open()
        self.assertEqual(panel.get("angle"), 0)
        stepper.next()
        self.assertEqual(panel.snapshot(), {"angle": 45, "show_tan": True})
        stepper.next()
        self.assertIsNone(stepper.current.setup)

    def test_defaults(self):
        tour = tour_from_dict(
            {"slug": "x", "title": "X", "steps": [{"title": "A", "description": "a"}]}
        )

        self.assertIsNone(tour.department)
        self.assertEqual(tour.tutorial_title, "AP Tutorial")
        self.assertEqual(tour.controls, {})

    def test_empty_step_list_is_allowed(self):
        tour = tour_from_dict({"slug": "x", "title": "X", "steps": []})

        self.assertEqual(tour.steps, [])

    def test_rejects_malformed_tours(self):
        cases = [
            ([], "expected a JSON object"),
            ({"title": "X", "steps": []}, "'slug'"),
            ({"slug": "../escaped", "title": "X", "steps": []}, "lowercase letters"),
            ({"slug": "a/b", "title": "X", "steps": []}, "lowercase letters"),
            ({"slug": "Unit Circle", "title": "X", "steps": []}, "lowercase letters"),
            ({"slug": "x", "title": "X"}, "'steps' must be a list"),
            ({"slug": "x", "title": "X", "department": "art", "steps": []}, "unknown department"),
            ({"slug": "x", "title": "X", "steps": ["text"]}, "step 1"),
            ({"slug": "x", "title": "X", "steps": [{"title": "A"}]}, "'description'"),
            (
                {"slug": "x", "title": "X", "steps": [{"title": "A", "description": 3}]},
                "'description' must be a string",
            ),
            (
                {
                    "slug": "x",
                    "title": "X",
                    "steps": [{"title": "A", "description": "a", "controls": {"angle": 1}}],
                },
                "not declared",
            ),
            (
                {"slug": "x", "title": "X", "controls": {"angle": None}, "steps": []},
                "'angle'",
            ),
        ]
        for data, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(TourFormatError) as ctx:
                    tour_from_dict(data, source="bad.json")
                self.assertIn(message, str(ctx.exception))
                self.assertIn("bad.json", str(ctx.exception))


class TestTourFiles(unittest.TestCase):
    def test_dump_and_load_keeps_content(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = dump_tour(SORTING, Path(tmpdir) / "sorting.json")

            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(data["steps"][1]["controls"]["algorithms"], ["bubble"])

            loaded = load_tour(path)
            self.assertEqual(loaded.slug, SORTING.slug)
            self.assertEqual(loaded.department, Department.CS)
            self.assertEqual(loaded.controls, SORTING.controls)
            self.assertEqual(
                [(s.title, s.description, s.highlight, s.controls) for s in loaded.steps],
                [(s.title, s.description, s.highlight, s.controls) for s in SORTING.steps],
            )

    def test_empty_description_survives_dump_and_load(self):
        tour = Tour(slug="blank", title="Blank", steps=[TourStep("Pause here", "")])

        with tempfile.TemporaryDirectory() as tmpdir:
            loaded = load_tour(dump_tour(tour, Path(tmpdir) / "blank.json"))

        self.assertEqual(loaded.steps[0].title, "Pause here")
        self.assertEqual(loaded.steps[0].description, "")

    def test_load_reports_invalid_json_and_missing_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            broken = Path(tmpdir) / "broken.json"
            broken.write_text("{not json")

            with self.assertRaises(TourFormatError) as ctx:
                load_tour(broken)
            self.assertIn("invalid JSON", str(ctx.exception))

            with self.assertRaises(TourFormatError):
                load_tour(Path(tmpdir) / "missing.json")

    def test_discover_skips_bad_files_when_asked(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            directory = Path(tmpdir)
            (directory / "good.json").write_text(json.dumps(UNIT_CIRCLE_JSON))
            (directory / "bad.json").write_text("[]")
            (directory / "notes.txt").write_text("ignored")

            skipped = []
            tours = discover_tours(
                [directory, directory / "absent"],
                on_error=lambda path, exc: skipped.append(path.name),
            )

            self.assertEqual([tour.slug for tour in tours], ["unit-circle-lite"])
            self.assertEqual(skipped, ["bad.json"])

            with self.assertRaises(TourFormatError):
                discover_tours([directory])


class TestMarkdown(unittest.TestCase):
    def test_markdown_lists_steps_and_controls(self):
        markdown = tour_to_markdown(TITRATION)

        self.assertTrue(markdown.startswith("# Acid-Base Titration"))
        self.assertIn("Department: chemistry", markdown)
        self.assertIn("## Step 6: Equivalence Point", markdown)
        self.assertIn("- titrant_volume: 50", markdown)
        self.assertIn("- show_indicator: on", markdown)


if __name__ == "__main__":
    unittest.main()
