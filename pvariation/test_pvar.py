import random

import numpy as np
import pytest

from pvariation import pvar, p_var_points, p_var_ref, p_var_brute_force, p_var_points_check
from pvariation.tools import random_walk, brownian


EXPONENTS = [1., 1.5, 2., 3.]


def test_short_sequences():
    """Sequences of length <= 2 bypass the elimination."""
    for p in EXPONENTS:
        assert pvar([], p) == 0
        assert pvar([3.], p) == 0
        assert pvar([2., 5.], p) == abs(2. - 5.) ** p
    assert pvar([2, 5], 3) == 27.
    assert p_var_points([], 2.).points == []
    assert p_var_points([3.], 2.).points == [0]
    assert p_var_points([2., 5.], 2.).points == [0, 1]


def test_concrete_cases():
    """Hand-computed p-variations."""
    assert pvar([0, 1, 0], 1) == pytest.approx(2.)
    assert pvar([1, 2, 3, 4, 5], 2) == pytest.approx(16.)
    assert pvar([0, 1, 0, 1, 0], 1) == pytest.approx(4.)
    # the long jump 0 -> 5 beats the detour through 3 and 2
    assert pvar([0, 3, 2, 5], 2) == pytest.approx(25.)
    assert p_var_points([0, 3, 2, 5], 2).points == [0, 3]


def test_monotone_sequences():
    """Monotone sequences collapse to their endpoints."""
    rng = np.random.default_rng(0)
    for n in [3, 4, 10, 57]:
        x = np.cumsum(rng.uniform(0.1, 1., n))
        for p in EXPONENTS:
            ret = p_var_points(x, p)
            assert ret.points == [0, n - 1]
            assert ret.value == pytest.approx(abs(x[-1] - x[0]) ** p)
            assert pvar(x[::-1], p) == pytest.approx(abs(x[-1] - x[0]) ** p)


def test_constant_sequence():
    """A flat sequence has zero p-variation."""
    assert pvar([2.] * 7, 2.) == 0.
    assert p_var_points([2.] * 7, 2.).points == [0, 6]


def test_brute_force_random_reals():
    """Exhaustive enumeration agrees on short random sequences."""
    r = random.Random(1)
    for n in range(3, 9):
        for _ in range(40):
            x = [r.gauss(0., 1.) for _ in range(n)]
            for p in EXPONENTS:
                assert pvar(x, p) == pytest.approx(p_var_brute_force(x, p), rel=1e-9, abs=1e-12)


def test_brute_force_with_ties():
    """Exhaustive enumeration agrees on short integer sequences, where ties are frequent."""
    r = random.Random(2)
    for n in range(3, 9):
        for _ in range(60):
            x = [r.randint(0, 3) for _ in range(n)]
            for p in EXPONENTS:
                assert pvar(x, p) == pytest.approx(p_var_brute_force(x, p), rel=1e-9, abs=1e-12)


def test_boundary_backtracking():
    """Joints created next to either end of the sequence."""
    cases = [
        [0., 3., 2., 5.],
        [0., 3., 2., 5., 4.],
        [5., 2., 3., 0.],
        [1., 0., 3., 2., 5.],
        [0., 3., 2., 5., 4., 7.],
        [0., 1., 0.5, 4., 3.5, 4.2, 0.],
        [4., 0., 0.5, 0.25, 1., -3.],
    ]
    for x in cases:
        for p in EXPONENTS:
            assert pvar(x, p) == pytest.approx(p_var_brute_force(x, p))
            assert pvar(x[::-1], p) == pytest.approx(p_var_brute_force(x, p))


def test_dynamic_program_random_walks():
    """The O(n^2) dynamic program agrees on longer random walks."""
    rng = np.random.default_rng(3)
    for n in [10, 50, 200]:
        x = random_walk(n, scale=1. / np.sqrt(n), rng=rng)
        for p in EXPONENTS:
            ret = p_var_points(x, p)
            assert ret.value == pytest.approx(p_var_ref(x, p).value, rel=1e-9)
            assert p_var_points_check(ret, x, p) < 1e-9


def test_gaussian_paths():
    """The dynamic program agrees on Brownian increments."""
    np.random.seed(4)
    for _ in range(5):
        x = brownian(150)[:, 0]
        for p in [1., 2.5]:
            assert pvar(x, p) == pytest.approx(p_var_ref(x, p).value, rel=1e-9)


def test_lower_bounds():
    """Trivial subsequences never exceed the p-variation."""
    rng = np.random.default_rng(5)
    for _ in range(20):
        x = rng.normal(size=rng.integers(3, 40))
        for p in EXPONENTS:
            value = pvar(x, p)
            assert value >= abs(x[0] - x[-1]) ** p - 1e-12
            assert value >= np.max(np.abs(np.diff(x)) ** p) - 1e-12


def test_reversal_invariance():
    """Reading the sequence backwards does not change the p-variation."""
    rng = np.random.default_rng(6)
    for _ in range(20):
        x = rng.normal(size=rng.integers(3, 100))
        for p in EXPONENTS:
            assert pvar(x, p) == pytest.approx(pvar(x[::-1], p), rel=1e-9)


def test_scaling():
    """pvar(c x, p) == |c|^p pvar(x, p)."""
    rng = np.random.default_rng(7)
    x = rng.normal(size=80)
    for c in [2., -0.5, -3.]:
        for p in EXPONENTS:
            assert pvar(c * x, p) == pytest.approx(abs(c) ** p * pvar(x, p), rel=1e-9)


def test_optimal_points():
    """The reported points are increasing, contain both endpoints and realise the value."""
    rng = np.random.default_rng(8)
    for _ in range(10):
        x = rng.normal(size=60)
        ret = p_var_points(x, 2.)
        assert ret.points[0] == 0 and ret.points[-1] == len(x) - 1
        assert all(b > a for a, b in zip(ret.points[:-1], ret.points[1:]))
        assert p_var_points_check(ret, x, 2.) < 1e-9


def test_interval_length():
    """The initial merge interval length does not change the result."""
    rng = np.random.default_rng(9)
    x = rng.normal(size=120)
    expected = pvar(x, 2.)
    for LSI in [1, 2, 3, 4]:
        assert pvar(x, 2., LSI=LSI) == pytest.approx(expected, rel=1e-9)
        assert pvar(x, 2., backend='numba', LSI=LSI) == pytest.approx(expected, rel=1e-9)
    # longer initial intervals are not optimal after the short interval check
    for LSI in [0, 5, 8]:
        for backend in ['python', 'numba']:
            with pytest.raises(ValueError):
                pvar([1., 7., 8., 6., 8., 7., 8., 9., 2.], 2., backend=backend, LSI=LSI)


def test_paths_are_one_dimensional():
    """A multi-channel path is refused instead of being flattened."""
    x = np.zeros((10, 2))
    for backend in ['python', 'numba']:
        with pytest.raises(AssertionError):
            pvar(x, 2., backend=backend)
        with pytest.raises(AssertionError):
            pvar([[0., 1.], [1., 0.], [2., 2.]], 2., backend=backend)


def test_non_finite_values_propagate():
    """NaN input yields NaN rather than an error."""
    assert np.isnan(pvar([0., 1., np.nan], 2.))


def run_all_tests():
    tests = [value for name, value in sorted(globals().items()) if name.startswith('test_')]
    passed = 0
    for test in tests:
        test()
        print(f"✓ {test.__name__}")
        passed += 1
    print(f"Results: {passed} passed")


if __name__ == "__main__":
    run_all_tests()
