import logging
from abc import ABC, abstractmethod

import numpy as np
from scipy.linalg import lstsq

logger = logging.getLogger(__name__)

# Registry of all concrete shapes, keyed by `BaseDomain.name`.
DOMAINS = {}


def clamp(lo, x, hi):
    """ Returns `x` projected onto the interval [lo, hi]. """
    return max(lo, min(x, hi))


def as_counts(orbits):
    """ Returns `orbits` as an integer array, or None if a count is fractional. """
    orbits = np.asarray(orbits)
    counts = orbits.astype(int)
    if np.any(counts != orbits):
        return None
    return counts


class BaseDomain(ABC):
    """ A reference domain on which fully symmetric rules are constructed.

    A rule is a union of orbits: sets of points that are mapped onto each
    other by the symmetry group of the domain. Each orbit kind `i` contributes
    `npts_for_orbit[i]` points, all sharing one weight, and is described by
    `narg_for_orbit[i]` free parameters.

    The parameter vector `args` and the point batch `pts` belong to the caller.
    The per-orbit primitives (`seed_orbit`, `expand_orbit`, `clamp_orbit`,
    `sort_orbit`) only touch the slice starting at the offsets they are given.

    Subclasses provide the tables below together with the primitives.
    """
    name = None
    ndim = None
    npts_for_orbit = ()
    narg_for_orbit = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        assert len(cls.npts_for_orbit) == len(cls.narg_for_orbit)
        assert all(n > 0 for n in cls.npts_for_orbit)
        assert all(n >= 0 for n in cls.narg_for_orbit)
        if cls.name is not None:
            assert cls.name not in DOMAINS
            DOMAINS[cls.name] = cls

    def __init__(self, moment0):
        """ Instantiates the domain.

        Arguments:
            moment0: the integral of the constant orthonormal basis function
                over the domain. All other basis functions integrate to zero.
        """
        self.moment0 = moment0
        self.qdeg = None
        self.orbits = None

    @property
    def norbits(self):
        return len(self.npts_for_orbit)

    def check_orbit(self, i):
        assert 0 <= i < self.norbits, 'Bad orbit {}'.format(i)

    def points_for_orbit(self, i):
        self.check_orbit(i)
        return self.npts_for_orbit[i]

    def params_for_orbit(self, i):
        self.check_orbit(i)
        return self.narg_for_orbit[i]

    @staticmethod
    @abstractmethod
    def nbfn_for_qdeg(qdeg):
        """ Number of orthonormal basis functions up to degree `qdeg`. """

    @staticmethod
    def validate_orbit(orbits):
        """ Returns whether the orbit usage vector `orbits` is admissible. """
        return True

    @abstractmethod
    def seed_orbit(self, i, aoff, args, rng):
        """ Draws feasible random parameters for orbit `i` into `args[aoff:]`.

        Arguments:
            rng: a `np.random.Generator`; the only source of randomness.
        """

    @abstractmethod
    def expand_orbit(self, i, aoff, poff, args, pts):
        """ Writes the points of orbit `i` into the rows `pts[poff:]`. """

    @abstractmethod
    def clamp_orbit(self, i, aoff, args):
        """ Projects the parameters `args[aoff:]` onto their feasible set. """

    @abstractmethod
    def sort_orbit(self, i, aoff, args):
        """ Rewrites the parameters `args[aoff:]` into canonical form. """

    @abstractmethod
    def eval_orthob_block(self, pqr, qdeg, out):
        """ Evaluates the orthonormal basis up to `qdeg` at the points `pqr`.

        The result is written to `out`, of shape (nbfn_for_qdeg(qdeg), len(pqr)).
        """

    def configure(self, qdeg, orbits):
        """ Fixes the target degree and the number of instances per orbit. """
        orbits = as_counts(orbits)
        assert orbits is not None, 'Orbit counts must be integers'
        assert qdeg >= 0
        assert orbits.shape == (self.norbits, )
        assert np.all(orbits >= 0) and orbits.sum() > 0
        assert self.validate_orbit(orbits), 'Invalid orbits {}'.format(orbits)

        self.qdeg = qdeg
        self.orbits = orbits
        logger.debug('Configured %s domain: qdeg=%d orbits=%s npts=%d nbfn=%d',
                     self.name, qdeg, orbits.tolist(), self.npts, self.nbfn)

    def is_valid_combination(self, orbits):
        """ Checks a candidate orbit usage vector before any solve is tried. """
        counts = as_counts(orbits)
        valid = (counts is not None and counts.shape == (self.norbits, )
                 and np.all(counts >= 0) and self.validate_orbit(counts))
        if not valid:
            logger.debug('Rejected orbit combination %s',
                         np.asarray(orbits).tolist())
        return bool(valid)

    @property
    def npts(self):
        return int(np.dot(self.orbits, self.npts_for_orbit))

    @property
    def nparams(self):
        return int(np.dot(self.orbits, self.narg_for_orbit))

    @property
    def ninst(self):
        return int(self.orbits.sum())

    @property
    def nbfn(self):
        return self.nbfn_for_qdeg(self.qdeg)

    def orbit_offsets(self):
        """ Yields (i, aoff, poff) for every configured orbit instance. """
        assert self.orbits is not None, 'Domain is not configured'
        aoff, poff = 0, 0
        for i, count in enumerate(self.orbits):
            for _ in range(count):
                yield i, aoff, poff
                aoff += self.narg_for_orbit[i]
                poff += self.npts_for_orbit[i]

    def seed(self, rng):
        args = np.zeros(self.nparams)
        for i, aoff, _ in self.orbit_offsets():
            self.seed_orbit(i, aoff, args, rng)
        return args

    def expand(self, args):
        assert len(args) == self.nparams
        pts = np.zeros((self.npts, self.ndim))
        for i, aoff, poff in self.orbit_offsets():
            self.expand_orbit(i, aoff, poff, args, pts)
        return pts

    def clamp_args(self, args):
        for i, aoff, _ in self.orbit_offsets():
            self.clamp_orbit(i, aoff, args)

    def sort_args(self, args):
        for i, aoff, _ in self.orbit_offsets():
            self.sort_orbit(i, aoff, args)

    def ortho_basis(self, pts):
        out = np.empty((self.nbfn, len(pts)))
        self.eval_orthob_block(pts, self.qdeg, out)
        return out

    def moments(self):
        """ Exact integrals over the domain of the orthonormal basis. """
        b = np.zeros(self.nbfn)
        b[0] = self.moment0
        return b

    def orbit_basis(self, args):
        """ Basis matrix with the columns of each orbit instance summed. """
        B = self.ortho_basis(self.expand(args))
        A = np.empty((self.nbfn, self.ninst))
        for m, (i, _, poff) in enumerate(self.orbit_offsets()):
            A[:, m] = B[:, poff:poff + self.npts_for_orbit[i]].sum(axis=1)
        return A

    def fit_weights(self, args):
        """ Least squares orbit weights for the points described by `args`. """
        w, _, _, _ = lstsq(self.orbit_basis(args), self.moments())
        return w

    def wts(self, args):
        """ Per-point weights, i.e. the orbit weights repeated per point. """
        w = self.fit_weights(args)
        return np.concatenate([
            np.full(self.npts_for_orbit[i], w[m])
            for m, (i, _, _) in enumerate(self.orbit_offsets())
        ])

    def residual(self, args):
        """ Norm of the moment mismatch at the least squares weights. """
        A = self.orbit_basis(args)
        w, _, _, _ = lstsq(A, self.moments())
        return np.linalg.norm(A @ w - self.moments())
