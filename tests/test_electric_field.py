"""
Tests for the superposed field and potential of point charges.
"""

import numpy as np
import pytest

from chargefield.fieldlines import COULOMB_K, Charge, ElectricField


def coulomb_field(charges, p, k=COULOMB_K):
    """Straight k q d / |d|^3 sum, written independently of ElectricField."""
    p = np.asarray(p, dtype=float)
    total = np.zeros(2)
    for c in charges:
        d = p - np.asarray(c.position)
        total += k * c.magnitude * d / np.linalg.norm(d) ** 3
    return total


class TestCharges:
    def test_quadrupole_layout(self, charges):
        assert [c.magnitude for c in charges] == [1.0, -1.0, 1.0, -1.0]
        assert [c.position for c in charges] == [
            (-100.0, -100.0), (100.0, -100.0), (100.0, 100.0), (-100.0, 100.0)
        ]

    def test_labels(self, charges):
        assert [c.label for c in charges] == ["+q", "-q", "+q", "-q"]

    def test_charge_is_immutable(self):
        c = Charge(1, (2, 3))
        with pytest.raises(AttributeError):
            c.magnitude = 2.0


class TestElectricField:
    def test_field_is_sum_of_single_charge_fields(self, charges, field):
        p = (37.0, -12.5)
        expected = sum(ElectricField([c]).field(p) for c in charges)
        np.testing.assert_allclose(field.field(p), expected, rtol=1e-12)

    def test_potential_is_sum_of_single_charge_potentials(self, charges, field):
        p = (-63.0, 141.0)
        expected = sum(ElectricField([c]).potential(p) for c in charges)
        assert field.potential(p) == pytest.approx(expected, rel=1e-12)

    def test_potential_vanishes_at_center(self, field):
        assert field.potential((0.0, 0.0)) == pytest.approx(0.0, abs=1e-6)

    def test_field_at_center_matches_superposition(self, charges, field):
        expected = coulomb_field(charges, (0.0, 0.0))
        np.testing.assert_allclose(field.field((0.0, 0.0)), expected, rtol=1e-6, atol=1e-6)

    def test_field_off_center_matches_superposition(self, charges, field):
        p = (30.0, -70.0)
        np.testing.assert_allclose(field.field(p), coulomb_field(charges, p), rtol=1e-6)

    def test_single_positive_charge_points_outward(self):
        f = ElectricField([Charge(2.0, (0.0, 0.0))], k=1.0)
        np.testing.assert_allclose(f.field((0.0, 2.0)), [0.0, 0.5])
        assert f.potential((0.0, 2.0)) == pytest.approx(1.0)

    def test_charge_at_query_point_is_skipped(self, charges, field):
        at = charges[0].position
        others = charges[1:]
        np.testing.assert_allclose(field.field(at), coulomb_field(others, at), rtol=1e-12)
        assert np.all(np.isfinite(field.field(at)))
        assert field.potential(at) == pytest.approx(ElectricField(others).potential(at), rel=1e-12)

    def test_singular_radius(self):
        f = ElectricField([Charge(1.0, (0.0, 0.0))], k=1.0)
        assert f.potential((0.05, 0.0)) == 0.0
        assert f.potential((0.1, 0.0)) == pytest.approx(10.0)

    def test_grid_matches_point_evaluation(self, field):
        X, Y = np.meshgrid([-100.0, -20.0, 55.0, 100.0], [-100.0, 0.0, 100.0], indexing="ij")
        ex, ey = field.field_on_grid(X, Y)
        V = field.potential_on_grid(X, Y)
        for i in range(X.shape[0]):
            for j in range(X.shape[1]):
                p = (X[i, j], Y[i, j])
                assert V[i, j] == field.potential(p)
                np.testing.assert_allclose([ex[i, j], ey[i, j]], field.field(p), rtol=1e-12)

    def test_positive_charges(self, field):
        assert [c.position for c in field.positive_charges] == [(-100.0, -100.0), (100.0, 100.0)]
