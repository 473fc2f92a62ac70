from functools import lru_cache

import numpy as np

from ..utils.ortho_poly import EvenLegendreP, JacobiP
from .base import BaseDomain, clamp


def _s3(a):
    """ The three distinct permutations of the barycentric triple (a, a, 1-2a). """
    return [(a, a, 1 - 2 * a), (a, 1 - 2 * a, a), (1 - 2 * a, a, a)]


def _s111(a, b):
    """ The six permutations of the barycentric triple (a, b, 1-a-b). """
    c = 1 - a - b
    return [(a, b, c), (a, c, b), (b, a, c), (b, c, a), (c, a, b), (c, b, a)]


class PriDomain(BaseDomain):
    """ The reference prism: a triangle times the interval [-1, 1].

    The triangle has vertices (-1, -1), (1, -1), (-1, 1) and the prism has
    volume 4. Points are given in (p, q, r) coordinates, where (p, q) lies in
    the triangle and r is the axial coordinate.

    The symmetry group is that of the triangle combined with the reflection
    r -> -r. Orbits:
        0: the centroid;
        1: the centroid line at r = -b, b;
        2: the three points (a, a, 1-2a) in the midplane;
        3: orbit 2 at r = -b, b;
        4: the six points (a, b, 1-a-b) in the midplane;
        5: orbit 4 at r = -c, c.
    """
    name = 'pri'
    ndim = 3
    npts_for_orbit = (1, 2, 3, 6, 6, 12)
    narg_for_orbit = (0, 1, 1, 2, 2, 3)

    def __init__(self):
        super().__init__(2)

    @staticmethod
    def validate_orbit(orbits):
        # There is only a single centroid.
        return orbits[0] <= 1

    @staticmethod
    @lru_cache(maxsize=None)
    def nbfn_for_qdeg(qdeg):
        n = 0
        for i in range(0, qdeg + 1, 2):
            for j in range(i, qdeg - i + 1):
                n += len(range(0, qdeg - i - j + 1, 2))
        return n

    @staticmethod
    def bary_to_cart(p1, p2, p3, z):
        return (-p1 + p2 - p3, -p1 - p2 + p3, z)

    @staticmethod
    def cart_to_bary(x, y):
        """ Inverse of `bary_to_cart` restricted to the triangle. """
        return (-(x + y) / 2, (1 + x) / 2, (1 + y) / 2)

    def expand_orbit(self, i, aoff, poff, args, pts):
        self.check_orbit(i)
        if i == 0:
            a = 1 / 3
            rows = [self.bary_to_cart(a, a, a, 0)]
        elif i == 1:
            a, b = 1 / 3, args[aoff]
            rows = [self.bary_to_cart(a, a, a, z) for z in (-b, b)]
        elif i == 2:
            a = args[aoff]
            rows = [self.bary_to_cart(*p, 0) for p in _s3(a)]
        elif i == 3:
            a, b = args[aoff:aoff + 2]
            rows = [self.bary_to_cart(*p, z) for z in (-b, b) for p in _s3(a)]
        elif i == 4:
            a, b = args[aoff:aoff + 2]
            rows = [self.bary_to_cart(*p, 0) for p in _s111(a, b)]
        elif i == 5:
            a, b, c = args[aoff:aoff + 3]
            rows = [
                self.bary_to_cart(*p, z) for z in (-c, c) for p in _s111(a, b)
            ]
        pts[poff:poff + len(rows)] = rows

    def seed_orbit(self, i, aoff, args, rng):
        self.check_orbit(i)
        seeda = lambda: rng.uniform(0, 0.5)
        seedb = lambda: rng.uniform(0, 1 / 3)
        # Biased towards 1, but always inside [0, 1].
        seedc = lambda: np.sqrt(1 - rng.random()**2)

        if i == 1:
            args[aoff] = seedc()
        elif i == 2:
            args[aoff] = seeda()
        elif i == 3:
            args[aoff + 0] = seeda()
            args[aoff + 1] = seedc()
        elif i == 4:
            args[aoff + 0] = seedb()
            args[aoff + 1] = seedb()
        elif i == 5:
            args[aoff + 0] = seedb()
            args[aoff + 1] = seedb()
            args[aoff + 2] = seedc()

    def clamp_orbit(self, i, aoff, args):
        self.check_orbit(i)
        if i == 1:
            args[aoff] = clamp(0, args[aoff], 1)
        elif i in (2, 3):
            args[aoff] = clamp(0, args[aoff], 0.5)
            if i == 3:
                args[aoff + 1] = clamp(0, args[aoff + 1], 1)
        elif i in (4, 5):
            args[aoff + 0] = clamp(0, args[aoff + 0], 1)
            args[aoff + 1] = clamp(0, args[aoff + 1], 1 - args[aoff + 0])
            if i == 5:
                args[aoff + 2] = clamp(0, args[aoff + 2], 1)

    def sort_orbit(self, i, aoff, args):
        """ Keeps the two smallest barycentric coordinates, in ascending order.

        Any permutation of (a, b, 1-a-b) describes the same orbit; only
        orbits 4 and 5 are affected.
        """
        self.check_orbit(i)
        if i in (4, 5):
            a, b = args[aoff], args[aoff + 1]
            baryc = sorted([a, b, 1 - a - b])
            args[aoff:aoff + 2] = baryc[:2]

    def eval_orthob_block(self, pqr, qdeg, out):
        pqr = np.asarray(pqr, dtype=float)
        p, q, r = pqr[:, 0], pqr[:, 1], pqr[:, 2]

        # Collapse the triangle onto a square; the edge q = 1 maps to a = 0.
        with np.errstate(divide='ignore', invalid='ignore'):
            a = np.where(q != 1, 2 * (1 + p) / (1 - q) - 1, 0)
        b, c = q, r

        pow2ip1 = 0.5
        pow1mqi = np.ones(len(pqr))

        jpa = EvenLegendreP(a)
        jpc = EvenLegendreP(c)

        off = 0
        for i in range(0, qdeg + 1, 2):
            jpb = JacobiP(2 * i + 1, 0, b)

            for j in range(i, qdeg - i + 1):
                for k in range(0, qdeg - i - j + 1, 2):
                    cijk = pow2ip1 * np.sqrt((2 * i + 1) * (2 * k + 1) *
                                             (i + j + 1))
                    out[off] = cijk * pow1mqi * jpa(i) * jpb(j) * jpc(k)
                    off += 1

            pow1mqi = pow1mqi * (1 - b) * (1 - b)
            pow2ip1 /= 4
