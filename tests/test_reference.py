import mpmath
import numpy as np
import pytest

from deepzoom.reference import (
    ORBIT_BAILOUT,
    ReferenceOrbit,
    compute_reference_orbit,
    to_mpf,
)


def test_origin_never_escapes():
    orbit = compute_reference_orbit("0", "0", 1000)
    assert len(orbit) == 1000
    assert not orbit.escaped
    assert np.all(orbit.re == 0) and np.all(orbit.im == 0)


def test_far_point_truncates():
    orbit = compute_reference_orbit("2", "2", 1000)
    # 2X: (4, 4), (4, 20), (-188, 84), (14148, -15788)
    assert len(orbit) == 4
    assert orbit.escaped
    np.testing.assert_array_equal(orbit.re, [4, 4, -188, 14148])
    np.testing.assert_array_equal(orbit.im, [4, 20, 84, -15788])
    assert abs(orbit.re[-1]) > ORBIT_BAILOUT or abs(orbit.im[-1]) > ORBIT_BAILOUT
    assert np.all(np.abs(orbit.re[:-1]) <= ORBIT_BAILOUT)
    assert np.all(np.abs(orbit.im[:-1]) <= ORBIT_BAILOUT)


def test_samples_are_doubled_iterates():
    # c = -1 is a period 2 cycle: -1, 0, -1, 0, ...
    orbit = compute_reference_orbit("-1", "0", 6)
    np.testing.assert_array_equal(orbit.re, [-2, 0, -2, 0, -2, 0])
    np.testing.assert_array_equal(orbit.im, np.zeros(6))


def test_accepts_mpf_center():
    orbit = compute_reference_orbit(to_mpf("-0.75"), to_mpf("0.1"), 50)
    assert orbit.re[0] == -1.5
    assert orbit.im[0] == pytest.approx(0.2)


def test_center_keeps_more_digits_than_a_double():
    a = to_mpf("0.1000000000000000000000000000001", 100)
    b = to_mpf("0.1", 100)
    assert float(a) == float(b)
    with mpmath.workdps(100):
        assert abs((a - b) - mpmath.mpf("1e-31")) < mpmath.mpf("1e-90")


def test_orbit_is_immutable():
    orbit = compute_reference_orbit("0", "0", 10)
    assert isinstance(orbit, ReferenceOrbit)
    with pytest.raises(ValueError):
        orbit.re[0] = 1.0
    with pytest.raises(AttributeError):
        orbit.escaped = True


@pytest.mark.parametrize("depth", [0, -5])
def test_rejects_non_positive_depth(depth):
    with pytest.raises(ValueError):
        compute_reference_orbit("0", "0", depth)
