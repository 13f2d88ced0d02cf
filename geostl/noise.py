"""Seeded 2D gradient noise.

The permutation table is shuffled with a 32-bit linear congruential
generator so that a given integer seed always produces the same field.
``sample2D`` is a z=0 slice of classic improved Perlin noise and accepts
either scalars or numpy arrays.
"""

import numpy as np

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2 ** 32


def _fade(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t, a, b):
    return a + t * (b - a)


def _grad(hash_, x, y):
    """Dot product of (x, y, 0) with one of the gradient directions."""
    h = hash_ & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, 0.0))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


def build_permutation(seed: int) -> np.ndarray:
    """Return the doubled (512-entry) permutation table for *seed*."""
    permutation = list(range(256))
    state = int(seed)

    for i in range(255, 0, -1):
        state = (state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        j = int(state / _LCG_MODULUS * (i + 1))
        permutation[i], permutation[j] = permutation[j], permutation[i]

    table = np.array(permutation + permutation, dtype=np.int64)
    table.flags.writeable = False
    return table


class SeededNoise:
    def __init__(self, seed: int):
        self.seed = int(seed)
        self._perm = build_permutation(self.seed)

    @property
    def permutation(self) -> np.ndarray:
        return self._perm

    def sample2D(self, x, y):
        """Sample the noise field at (x, y); result lies in [-1, 1]."""
        x, y = np.broadcast_arrays(np.asarray(x, dtype=np.float64),
                                   np.asarray(y, dtype=np.float64))
        fx = np.floor(x)
        fy = np.floor(y)
        X = fx.astype(np.int64) & 255
        Y = fy.astype(np.int64) & 255
        x = x - fx
        y = y - fy
        u = _fade(x)
        v = _fade(y)

        p = self._perm
        A = p[X] + Y
        AA, AB = p[A], p[A + 1]
        B = p[X + 1] + Y
        BA, BB = p[B], p[B + 1]

        result = _lerp(v,
                       _lerp(u, _grad(p[AA], x, y), _grad(p[BA], x - 1, y)),
                       _lerp(u, _grad(p[AB], x, y - 1), _grad(p[BB], x - 1, y - 1)))
        if result.ndim == 0:
            return float(result)
        return result
