# tests/test_utils.py
"""Tests for the helper functions in radx.utils."""

import warnings

import pytest
import numpy as np
import pandas as pd
from numpy.testing import assert_allclose

from radx import constants
from radx.utils import calc_beta, from_dataframe, orbital_elements, semi_major_axis, to_dataframe
from tests import helpers

# === calc_beta ===

@pytest.mark.core
def test_calc_beta_unit_values():
    """With L = 16 pi / 3 and all other inputs 1, beta is exactly 1."""
    beta = calc_beta(G=1.0, c=1.0, source_mass=1.0, source_luminosity=16.0 * np.pi / 3.0, radius=1.0, density=1.0)
    assert beta == pytest.approx(1.0)


@pytest.mark.core
def test_calc_beta_scaling():
    base = calc_beta(1.0, 1.0, 1.0, 16.0 * np.pi, 1.0, 3.0)
    assert base == pytest.approx(1.0)
    # Smaller grains feel relatively more radiation pressure.
    assert calc_beta(1.0, 1.0, 1.0, 16.0 * np.pi, 0.5, 3.0) == pytest.approx(2.0)
    assert calc_beta(1.0, 1.0, 1.0, 16.0 * np.pi, 1.0, 3.0, Q_pr=0.5) == pytest.approx(0.5)


@pytest.mark.core
def test_calc_beta_micron_grain_around_the_sun():
    """A 1 micron silicate grain (rho = 3 g/cm^3) has beta of order 0.2 around the Sun."""
    msun_kg = 1.989e30
    lsun_w = 3.828e26
    beta = calc_beta(
        G=6.674e-11, c=constants.C_SI, source_mass=msun_kg, source_luminosity=lsun_w,
        radius=1e-6, density=3000.0,
    )
    assert 0.15 < beta < 0.25


@pytest.mark.validation
@pytest.mark.parametrize("kwargs, label", [
    ({"G": 0.0}, "G"),
    ({"c": -1.0}, "c"),
    ({"source_mass": 0.0}, "source_mass"),
    ({"radius": 0.0}, "radius"),
    ({"density": -2.0}, "density"),
])
def test_calc_beta_rejects_non_positive_inputs(kwargs, label):
    args = dict(G=1.0, c=1.0, source_mass=1.0, source_luminosity=1.0, radius=1.0, density=1.0)
    args.update(kwargs)
    with pytest.raises(ValueError, match=f"{label} must be positive"):
        calc_beta(**args)

# === orbital_elements ===

@pytest.mark.core
def test_circular_orbit_elements():
    sim = helpers.create_source_and_grain(d=1.0, beta=None, grain_v=(0.0, 1.0, 0.0))
    a, e = orbital_elements(sim, 1)
    assert a == pytest.approx(1.0)
    assert e == pytest.approx(0.0, abs=1e-12)
    assert semi_major_axis(sim, 1) == pytest.approx(1.0)


@pytest.mark.core
def test_eccentric_orbit_at_pericentre():
    """r = 1 and v^2 = 1.5 give a = 2 and e = 0.5."""
    sim = helpers.create_source_and_grain(d=1.0, beta=None, grain_v=(0.0, np.sqrt(1.5), 0.0))
    a, e = orbital_elements(sim, 1)
    assert a == pytest.approx(2.0)
    assert e == pytest.approx(0.5)


@pytest.mark.core
def test_unbound_orbit_has_negative_semi_major_axis():
    sim = helpers.create_source_and_grain(d=1.0, beta=None, grain_v=(0.0, 2.0, 0.0))
    a, e = orbital_elements(sim, 1)
    assert a < 0
    assert e >= 1.0


@pytest.mark.core
def test_elements_are_relative_to_primary():
    sim = helpers.create_source_and_grain(d=1.0, beta=None, grain_v=(0.0, 1.0, 0.0))
    sim.x[:] += [5.0, -3.0, 2.0]
    sim.v[:] += [0.4, 0.1, -0.2]
    a, e = orbital_elements(sim, 1, primary=0)
    assert a == pytest.approx(1.0)
    assert e == pytest.approx(0.0, abs=1e-12)


@pytest.mark.validation
def test_particle_cannot_orbit_itself():
    sim = helpers.create_source_and_grain()
    with pytest.raises(ValueError, match="cannot orbit itself"):
        orbital_elements(sim, 0, primary=0)

# === DataFrame conversion ===

@pytest.mark.core
def test_to_dataframe_columns_and_beta():
    # Arrange
    sim = helpers.create_source_and_grain(d=2.0, beta=0.5)
    sim.add(x=3.0, variational=True)

    # Act
    df = to_dataframe(sim)

    # Assert
    assert list(df.columns) == ["hash", "m", "x", "y", "z", "vx", "vy", "vz", "variational", "beta"]
    assert len(df) == 3
    assert np.isnan(df["beta"].iloc[0])
    assert df["beta"].iloc[1] == 0.5
    assert df["variational"].tolist() == [False, False, True]


@pytest.mark.core
def test_from_dataframe_restores_state_and_parameters():
    # Arrange
    sim = helpers.create_random_cloud(5, seed=2)
    sim.add(x=0.1, variational=True)
    df = to_dataframe(sim)

    # Act
    restored = from_dataframe(df, G=sim.G)

    # Assert
    assert (restored.N, restored.N_var) == (sim.N, sim.N_var)
    assert_allclose(restored.x, sim.x)
    assert_allclose(restored.v, sim.v)
    assert restored.hashes.tolist() == sim.hashes.tolist()
    for h in sim.hashes:
        assert restored.params.search(h, "beta") == sim.params.search(h, "beta")


@pytest.mark.core
def test_from_dataframe_with_extra_parameter_columns():
    df = pd.DataFrame({"m": [1.0, 0.0], "x": [0.0, 1.0], "vy": [0.0, 1.0], "Q_pr": [np.nan, 0.8]})

    sim = from_dataframe(df)

    assert sim.N == 2
    assert sim.particles[1].vy == 1.0
    assert sim.particles[1].params["Q_pr"] == 0.8
    assert "Q_pr" not in sim.particles[0].params


@pytest.mark.validation
def test_from_dataframe_without_mass_column_warns():
    df = pd.DataFrame({"x": [1.0, 2.0]})
    with pytest.warns(UserWarning, match="No mass column"):
        sim = from_dataframe(df)
    assert np.all(sim.m == 0.0)


@pytest.mark.core
def test_from_dataframe_with_mass_column_does_not_warn():
    df = pd.DataFrame({"m": [1.0], "x": [0.0]})
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        from_dataframe(df)
