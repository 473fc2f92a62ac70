import numpy as np


class JacobiP:
    """ Jacobi polynomials P_n^(alpha, beta) evaluated at a fixed `x`.

    The values are generated by the three-term recurrence and cached, so
    calling `jp(n)` for n = 0, 1, 2, ... costs a single step per index.

    Args:
        alpha, beta: the parameters of the Jacobi weight (1-x)^a (1+x)^b.
        x: a scalar or a numpy array of evaluation points.
    """
    def __init__(self, alpha, beta, x):
        self.alpha = alpha
        self.beta = beta
        self.x = np.asarray(x, dtype=float)
        self.vals = [np.ones_like(self.x)]

    def _next(self):
        """ Appends P_{n+1}, where n is the highest index known so far. """
        a, b, x = self.alpha, self.beta, self.x
        n = len(self.vals) - 1
        if n == 0:
            self.vals.append(((a + b + 2) * x + (a - b)) / 2)
            return

        ab = 2 * n + a + b
        c0 = 2 * (n + 1) * (n + a + b + 1) * ab
        c1 = (ab + 1) * (ab * (ab + 2) * x + a * a - b * b)
        c2 = 2 * (n + a) * (n + b) * (ab + 2)
        self.vals.append((c1 * self.vals[n] - c2 * self.vals[n - 1]) / c0)

    def __call__(self, n):
        assert n >= 0
        while len(self.vals) <= n:
            self._next()
        return self.vals[n]


class LegendreP(JacobiP):
    """ Legendre polynomials P_n, i.e. Jacobi polynomials with a = b = 0. """
    def __init__(self, x):
        super().__init__(0, 0, x)


class EvenLegendreP(LegendreP):
    """ Legendre polynomials that may only be requested at even degrees.

    These are the only Legendre polynomials that survive a reflection x -> -x.
    """
    def __call__(self, n):
        assert n % 2 == 0, 'EvenLegendreP requires an even degree'
        return super().__call__(n)
