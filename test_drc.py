"""
Unit tests for the DRC battery.
"""

import unittest
from unittest.mock import patch

from gerber_preview.config import DrcLimits
from gerber_preview.engine import DrcContext, check_runner, evaluate_drc, register_check, run_single_check
from gerber_preview.geometry import LayerInfo
from gerber_preview.results import DrcCheck, DrcSummary, critical_failures


def _layers(*roles):
    return [LayerInfo(name=f"f{i}", role=role, color="#888888") for i, role in enumerate(roles)]


def _by_name(checks):
    return {c.name: c for c in checks}


class TestDrcBattery(unittest.TestCase):

    def test_fixed_order(self):
        checks = evaluate_drc(100, 100, 2, 0, [])
        self.assertEqual(
            [c.name for c in checks],
            ["Board Dimensions", "Layer Count", "Gerber Files", "Drill File", "Board Outline", "Copper Layers"],
        )

    def test_criticality(self):
        checks = _by_name(evaluate_drc(100, 100, 2, 0, []))
        self.assertFalse(checks["Board Outline"].critical)
        for name in ["Board Dimensions", "Layer Count", "Gerber Files", "Drill File", "Copper Layers"]:
            self.assertTrue(checks[name].critical, name)

    def test_two_layer_job_without_outline(self):
        layers = _layers("Top Copper", "Bottom Copper", "Drill")
        checks = evaluate_drc(100, 100, 2, 3, layers)
        failed = [c.name for c in checks if not c.passed]
        self.assertEqual(failed, ["Board Outline"])
        self.assertEqual(critical_failures(checks), [])
        self.assertEqual(_by_name(checks)["Copper Layers"].message, "2 copper layers detected")

    def test_single_file_without_drill(self):
        layers = _layers("Top Copper")
        checks = _by_name(evaluate_drc(100, 100, 2, 1, layers))
        for name in ["Gerber Files", "Drill File"]:
            self.assertFalse(checks[name].passed, name)
            self.assertTrue(checks[name].critical, name)
        self.assertEqual(checks["Gerber Files"].message, "1 file uploaded (at least 2 required)")
        self.assertEqual(checks["Drill File"].message, "Missing")

    def test_board_dimensions(self):
        cases = [
            ((100, 100), True),
            ((500, 500), True),
            ((500.1, 100), False),
            ((0, 100), False),
            ((100, -1), False),
        ]
        for (w, h), expected in cases:
            with self.subTest(w=w, h=h):
                check = evaluate_drc(w, h, 2, 2, [])[0]
                self.assertEqual(check.passed, expected)
        self.assertEqual(evaluate_drc(80, 60, 2, 2, [])[0].message, "80×60mm")
        self.assertEqual(evaluate_drc(0, 60, 2, 2, [])[0].message, "Not specified")

    def test_layer_count_range(self):
        for n, expected in [(0, False), (1, True), (20, True), (21, False)]:
            with self.subTest(n=n):
                self.assertEqual(evaluate_drc(100, 100, n, 2, [])[1].passed, expected)

    def test_unknown_layers_count_as_files_only(self):
        layers = _layers("Unknown", "Unknown", "Unknown")
        checks = _by_name(evaluate_drc(100, 100, 2, 3, layers))
        self.assertTrue(checks["Gerber Files"].passed)
        self.assertFalse(checks["Drill File"].passed)
        self.assertFalse(checks["Board Outline"].passed)
        self.assertFalse(checks["Copper Layers"].passed)

    def test_inner_layer_is_copper(self):
        checks = _by_name(evaluate_drc(100, 100, 4, 1, _layers("Inner Layer")))
        self.assertTrue(checks["Copper Layers"].passed)

    def test_custom_limits(self):
        limits = DrcLimits(max_board_dimension_mm=50, max_layers=2, min_files=1)
        checks = _by_name(evaluate_drc(60, 40, 4, 1, [], limits))
        self.assertFalse(checks["Board Dimensions"].passed)
        self.assertFalse(checks["Layer Count"].passed)
        self.assertTrue(checks["Gerber Files"].passed)

    def test_run_single_check(self):
        ctx = DrcContext(100, 100, 2, 2, _layers("Drill"), DrcLimits())
        check = run_single_check("drill_file", ctx)
        self.assertEqual((check.check_id, check.passed), ("drill_file", True))
        with self.assertRaises(KeyError):
            run_single_check("no_such_check", ctx)

    def test_extra_registered_check_stays_out_of_battery(self):
        with patch.dict(check_runner._REGISTRY):
            @register_check("panel_rails")
            def _rails(ctx):
                return DrcCheck(check_id="panel_rails", name="Panel Rails", passed=True, message="ok")

            checks = evaluate_drc(100, 100, 2, 2, [])
            self.assertEqual(len(checks), 6)
            self.assertNotIn("panel_rails", [c.check_id for c in checks])

            ctx = DrcContext(100, 100, 2, 2, [], DrcLimits())
            self.assertEqual(run_single_check("panel_rails", ctx).name, "Panel Rails")

    def test_pure(self):
        layers = _layers("Top Copper", "Drill")
        self.assertEqual(evaluate_drc(100, 100, 2, 2, layers), evaluate_drc(100, 100, 2, 2, layers))


class TestDrcSummary(unittest.TestCase):

    def test_status(self):
        ok = DrcSummary.from_checks(evaluate_drc(100, 100, 2, 4, _layers("Top Copper", "Drill", "Board Outline")))
        self.assertEqual((ok.status, ok.failed), ("pass", 0))

        warn = DrcSummary.from_checks(evaluate_drc(100, 100, 2, 2, _layers("Top Copper", "Drill")))
        self.assertEqual((warn.status, warn.failed, warn.critical_failures), ("warning", 1, 0))

        fail = DrcSummary.from_checks(evaluate_drc(0, 0, 2, 0, []))
        self.assertEqual(fail.status, "fail")
        self.assertEqual(fail.critical_failures, 4)

    def test_json_roundtrip(self):
        summary = DrcSummary.from_checks(evaluate_drc(100, 100, 2, 1, _layers("Top Copper")))
        self.assertEqual(DrcSummary.from_json(summary.to_json()), summary)


if __name__ == "__main__":
    unittest.main()
