import itertools

import matplotlib.pyplot as plt
import numpy as np


class RulePlotter:
    """ Draws the points of a candidate rule inside its reference domain.

    Args:
        domain: a configured domain, see `BaseDomain.configure`.
        args: the parameter vector describing the orbits of the rule.
    """
    def __init__(self, domain, args):
        self.domain = domain
        self.args = np.asarray(args, dtype=float)
        self.pts = domain.expand(self.args)

    def plot_reference_domain(self, axis):
        # Vertices of the reference prism, bottom triangle first.
        tri = [(-1, -1), (1, -1), (-1, 1)]
        verts = [(x, y, z) for z in (-1, 1) for x, y in tri]
        edges = [(i, j) for i, j in itertools.combinations(range(6), 2)
                 if i // 3 == j // 3 or j - i == 3]
        for i, j in edges:
            xs, ys, zs = zip(verts[i], verts[j])
            axis.plot(xs, ys, zs, color='k', linewidth=0.5)
        return axis

    def plot_points(self, axis=None, scale=200):
        """ Scatters the points, with one colour per orbit instance.

        The marker area is proportional to the magnitude of the weight.
        """
        if axis is None:
            fig = plt.figure()
            axis = fig.add_subplot(projection='3d')
        self.plot_reference_domain(axis)

        wts = np.abs(self.domain.wts(self.args))
        wts = wts / wts.max() if wts.max() > 0 else np.ones_like(wts)
        for m, (i, _, poff) in enumerate(self.domain.orbit_offsets()):
            sl = slice(poff, poff + self.domain.npts_for_orbit[i])
            axis.scatter(self.pts[sl, 0],
                         self.pts[sl, 1],
                         self.pts[sl, 2],
                         s=scale * wts[sl],
                         color='C%d' % (m % 10),
                         label='orbit %d' % i)
        axis.set_xlabel('p')
        axis.set_ylabel('q')
        axis.set_zlabel('r')
        return axis
