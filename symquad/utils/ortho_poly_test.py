import numpy as np
import pytest
from pytest import approx
from scipy.special import eval_jacobi, eval_legendre

from .ortho_poly import EvenLegendreP, JacobiP, LegendreP


def test_jacobi_against_scipy():
    x = np.linspace(-1, 1, 17)
    for alpha, beta in [(0, 0), (1, 0), (3, 0), (5, 0), (2, 1)]:
        jp = JacobiP(alpha, beta, x)
        for n in range(9):
            assert np.allclose(jp(n), eval_jacobi(n, alpha, beta, x))


def test_jacobi_out_of_order():
    x = np.linspace(-1, 1, 5)
    jp = JacobiP(3, 0, x)
    p6 = jp(6).copy()
    assert np.allclose(jp(2), eval_jacobi(2, 3, 0, x))
    assert np.all(jp(6) == p6)


def test_jacobi_scalar():
    jp = JacobiP(1, 0, 0.3)
    assert jp(0) == 1.0
    assert jp(4) == approx(eval_jacobi(4, 1, 0, 0.3))


def test_legendre():
    x = np.linspace(-1, 1, 11)
    lp = LegendreP(x)
    for n in range(10):
        assert np.allclose(lp(n), eval_legendre(n, x))
    assert np.allclose(lp(7)[-1], 1)


def test_even_legendre():
    x = np.linspace(-1, 1, 9)
    elp = EvenLegendreP(x)
    for n in range(0, 12, 2):
        assert np.allclose(elp(n), eval_legendre(n, x))
        # Even polynomials are symmetric.
        assert np.allclose(elp(n), elp(n)[::-1])


def test_even_legendre_rejects_odd():
    elp = EvenLegendreP(np.zeros(3))
    with pytest.raises(AssertionError):
        elp(3)
    with pytest.raises(AssertionError):
        JacobiP(0, 0, 0.0)(-1)
