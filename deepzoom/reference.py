"""
Arbitrary-precision reference orbit for perturbation rendering.

The reference orbit X_n is iterated once per view at the view center using
mpmath. Every pixel is then rendered as a small double-precision delta
from that orbit (see compute.perturb_pixel), so only this module ever
touches arbitrary-precision numbers.

Samples are stored pre-doubled (2 * X_n) because that is the form the
perturbation recurrence consumes: d_{n+1} = d_n * (2X_n + d_n) + d_0.
"""

import numpy as np
import mpmath


DEFAULT_PRECISION_DIGITS = 100
ORBIT_BAILOUT = 1024.0  # Per-component bound on the doubled samples


class ReferenceOrbit:
    """
    Immutable, pre-doubled reference orbit.

    Attributes:
        re, im: Read-only float64 arrays of the doubled iterates
        depth: Requested iteration depth
        escaped: True if the reference point left the bailout box
            before reaching depth (the orbit is then shorter)
    """

    __slots__ = ('re', 'im', 'depth', 'escaped')

    def __init__(self, re, im, depth, escaped):
        re = np.array(re, dtype=np.float64)
        im = np.array(im, dtype=np.float64)
        re.flags.writeable = False
        im.flags.writeable = False
        object.__setattr__(self, 're', re)
        object.__setattr__(self, 'im', im)
        object.__setattr__(self, 'depth', depth)
        object.__setattr__(self, 'escaped', escaped)

    def __setattr__(self, name, value):
        raise AttributeError("ReferenceOrbit is immutable")

    def __len__(self):
        return len(self.re)

    def __repr__(self):
        return (f"ReferenceOrbit(length={len(self)}, depth={self.depth}, "
                f"escaped={self.escaped})")


def to_mpf(value, precision_digits=DEFAULT_PRECISION_DIGITS):
    """Convert a decimal string, number or mpf into an mpf at full precision."""
    with mpmath.workdps(precision_digits):
        return mpmath.mpf(value)


def compute_reference_orbit(center_re, center_im, depth,
                            precision_digits=DEFAULT_PRECISION_DIGITS):
    """
    Iterate the Mandelbrot recurrence at the view center.

    Starts from X = c and records 2*X before each step, stopping early
    once either doubled component exceeds ORBIT_BAILOUT. An early stop
    is not an error: the shorter orbit simply caps every pixel's
    iteration count for this view.

    Args:
        center_re, center_im: Center as mpf values or decimal strings
        depth: Maximum number of samples (> 0)
        precision_digits: Decimal digits used for the iteration

    Returns:
        ReferenceOrbit with at most depth samples

    Raises:
        ValueError if depth is not positive
    """
    depth = int(depth)
    if depth <= 0:
        raise ValueError(f"depth must be positive, got {depth}")

    orbit_re = []
    orbit_im = []
    escaped = False

    # Private context: this runs on the render thread while the UI thread
    # may be changing the global mpmath precision
    ctx = mpmath.MPContext()
    ctx.dps = precision_digits
    cr = ctx.mpf(center_re)
    ci = ctx.mpf(center_im)
    xr, xi = cr, ci

    for _ in range(depth):
        re = xr + xr
        im = xi + xi
        orbit_re.append(float(re))
        orbit_im.append(float(im))

        if abs(re) > ORBIT_BAILOUT or abs(im) > ORBIT_BAILOUT:
            escaped = True
            break

        # re already holds 2*xr
        xr, xi = xr * xr - xi * xi + cr, re * xi + ci

    return ReferenceOrbit(orbit_re, orbit_im, depth, escaped)
