"""
Tests for the contact analysis facade.
"""

import math

import pytest

from terramech.analysis.analyzer import ASSUMPTIONS, ContactAnalyzer
from terramech.models.config import EntryAnglePolicy, IntegrationConfig, SolverConfig
from terramech.models.inputs import WheelSoilInputs
from terramech.models.soil import UnknownPresetError
from terramech.physics.line_search import MAX_TRIAL_ANGLE, EquilibriumSolver


class TestAnalyze:
    """Tests for single-point analysis."""

    def test_scenario_a(self, scenario_a_inputs):
        result = ContactAnalyzer(scenario_a_inputs).analyze()

        assert result.soil_name == "SandyBrendan"
        assert result.classification == "sandy"
        assert result.entry_angle_mode == "fixed"
        assert result.entry_angle_deg == pytest.approx(45.0)
        assert result.exit_angle_deg == pytest.approx(-5.0)
        assert result.peak_stress_angle_deg == 0.0
        assert result.vertical_step_count == 5
        assert result.arc_step_count == 6
        assert result.reactions.vertical_load_N > 0
        assert result.warnings == []
        assert result.assumptions == ASSUMPTIONS

    def test_matches_integrator(self, scenario_a_inputs, sandy_integrator, scenario_a):
        result = ContactAnalyzer(scenario_a_inputs).analyze()
        expected = sandy_integrator.evaluate(scenario_a)

        assert result.reactions.vertical_load_N == expected.vertical_load
        assert result.reactions.motion_resistance_N == expected.motion_resistance
        assert result.reactions.thrust_N == expected.thrust
        assert result.reactions.torque_Nm == expected.torque

    def test_repeatable(self, scenario_a_inputs):
        analyzer = ContactAnalyzer(scenario_a_inputs)
        assert analyzer.analyze() == analyzer.analyze()

    def test_unknown_preset(self):
        inputs = WheelSoilInputs(soil="clay", tire_width_m=0.2, tire_radius_m=0.3, contact_length_m=0.1)
        with pytest.raises(UnknownPresetError):
            ContactAnalyzer(inputs)

    def test_degeneracies_become_warnings(self, scenario_a_inputs):
        inputs = scenario_a_inputs.model_copy(update={"integration": IntegrationConfig(angular_step_deg=60.0)})
        result = ContactAnalyzer(inputs).analyze()

        assert result.reactions.vertical_load_N == 0.0
        assert result.warnings
        assert all(w.startswith("zero_divisor") for w in result.warnings)

    def test_zero_contact_length_finite(self, scenario_a_inputs):
        inputs = scenario_a_inputs.model_copy(update={"contact_length_m": 0.0})
        result = ContactAnalyzer(inputs).analyze()

        assert math.isfinite(result.reactions.vertical_load_N)
        assert any("reece_coefficient" in w for w in result.warnings)

    def test_solved_entry_angle(self, scenario_a_inputs):
        inputs = scenario_a_inputs.model_copy(update={"entry_angle": EntryAnglePolicy(mode="solved")})
        result = ContactAnalyzer(inputs).analyze()

        assert result.entry_angle_mode == "solved"
        assert 0.0 <= result.entry_angle_deg <= math.degrees(MAX_TRIAL_ANGLE) + 1e-9
        assert math.isfinite(result.reactions.vertical_load_N)
        assert result.warnings == []

    def test_solved_entry_angle_balances_target(self, scenario_a_inputs, sandy_soil, scenario_a):
        target = EquilibriumSolver(sandy_soil).vertical_load(math.radians(40), scenario_a)
        policy = EntryAnglePolicy(mode="solved", target_load_N=target)
        inputs = scenario_a_inputs.model_copy(update={"entry_angle": policy})
        result = ContactAnalyzer(inputs).analyze()

        assert 35.0 < result.entry_angle_deg < 45.0
        assert result.reactions.vertical_load_N == pytest.approx(target, rel=0.1)
        assert result.reactions.thrust_N > 0
        assert result.warnings == []

    def test_solved_warnings_repeat(self, scenario_a_inputs):
        """A memoised solved angle reports the same warnings on every analysis."""
        inputs = scenario_a_inputs.model_copy(update={
            "entry_angle": EntryAnglePolicy(mode="solved"),
            "solver": SolverConfig(max_iterations=1),
        })
        analyzer = ContactAnalyzer(inputs)
        first = analyzer.analyze()
        second = analyzer.analyze()

        assert "No bracket found in line search" in first.warnings
        assert second.warnings == first.warnings
        assert second == first


class TestSweep:
    """Tests for slip sweeps."""

    def test_default_slips(self, scenario_a_inputs):
        result = ContactAnalyzer(scenario_a_inputs).run_sweep()

        assert result.slip_ratios_swept == ContactAnalyzer.SLIP_SAMPLES
        assert len(result.points) == len(ContactAnalyzer.SLIP_SAMPLES)
        assert result.peak_drawbar_pull_slip in ContactAnalyzer.SLIP_SAMPLES

    def test_custom_slips(self, scenario_a_inputs):
        result = ContactAnalyzer(scenario_a_inputs).run_sweep([0.1, 0.5])

        assert [p.slip_ratio for p in result.points] == [0.1, 0.5]
        assert result.points[1].reactions.thrust_N > result.points[0].reactions.thrust_N

    def test_sweep_point_matches_analysis(self, scenario_a_inputs):
        analyzer = ContactAnalyzer(scenario_a_inputs)
        sweep = analyzer.run_sweep([0.2])
        single = analyzer.analyze()

        assert sweep.points[0].reactions == single.reactions


class TestProfileAndSolve:
    """Tests for stress profiles and line search reports."""

    def test_profile(self, scenario_a_inputs):
        result = ContactAnalyzer(scenario_a_inputs).stress_profile(samples=26)

        assert len(result.points) == 26
        assert result.points[0].angle_deg == pytest.approx(-5.0)
        assert result.points[-1].angle_deg == pytest.approx(45.0)
        assert result.peak_radial_stress_Pa > 0

    def test_profile_rejects_single_sample(self, scenario_a_inputs):
        with pytest.raises(ValueError):
            ContactAnalyzer(scenario_a_inputs).stress_profile(samples=1)

    def test_solve_report(self, scenario_a_inputs):
        report = ContactAnalyzer(scenario_a_inputs).solve()

        assert report.target_load_N is None
        assert report.reference_angle_deg == 20.0
        assert report.states[0] == "bracketing"
        assert report.states[1] == "refining"
        assert report.state == report.states[-1]
        assert math.isfinite(report.bracket.lower_deg) and math.isfinite(report.bracket.upper_deg)
        assert report.bracketing_iterations >= 1
        assert report.refinement_iterations >= 1

    def test_solve_uses_policy_target(self, scenario_a_inputs):
        policy = EntryAnglePolicy(mode="solved", target_load_N=400.0)
        inputs = scenario_a_inputs.model_copy(update={"entry_angle": policy})
        report = ContactAnalyzer(inputs).solve()

        assert report.target_load_N == 400.0

    def test_solve_explicit_target_wins(self, scenario_a_inputs):
        report = ContactAnalyzer(scenario_a_inputs).solve(target_load=250.0)
        assert report.target_load_N == 250.0
