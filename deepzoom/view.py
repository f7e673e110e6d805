"""
View state and user actions.

A ViewState is never modified in place: every user action produces a new
one through apply_action(). The renderer snapshots the state it was
given, so a frame always matches exactly one ViewState.
"""

import math
from dataclasses import dataclass, field, replace

import mpmath

from .compute import pixel_offset
from .reference import DEFAULT_PRECISION_DIGITS, to_mpf


@dataclass(frozen=True)
class ViewState:
    """
    Everything needed to render a frame.

    Attributes:
        center_re, center_im: View center as mpf (precision_digits digits)
        radius: Half-width of the shorter viewport side in the complex plane
        depth: Maximum reference orbit length / iteration count
        precision_digits: Decimal digits kept for the center
    """
    center_re: mpmath.mpf = field(default_factory=lambda: to_mpf(0))
    center_im: mpmath.mpf = field(default_factory=lambda: to_mpf(0))
    radius: float = 2.0
    depth: int = 1000
    precision_digits: int = DEFAULT_PRECISION_DIGITS

    def __post_init__(self):
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError(f"radius must be finite and positive, got {self.radius}")
        if self.depth <= 0:
            raise ValueError(f"depth must be positive, got {self.depth}")

    @classmethod
    def from_strings(cls, center_re, center_im, radius=2.0, depth=1000,
                     precision_digits=DEFAULT_PRECISION_DIGITS):
        """Build a view from decimal center strings."""
        return cls(
            center_re=to_mpf(center_re, precision_digits),
            center_im=to_mpf(center_im, precision_digits),
            radius=float(radius),
            depth=int(depth),
            precision_digits=precision_digits,
        )

    def orbit_key(self):
        """Key identifying the reference orbit this view needs."""
        return (self.center_re, self.center_im, self.depth, self.precision_digits)

    def describe(self):
        """One-line summary for the console and window caption."""
        digits = min(self.precision_digits, 30)
        re = mpmath.nstr(self.center_re, digits)
        im = mpmath.nstr(self.center_im, digits)
        return f"center: {re} + i {im}. zoom: {self.radius:g}. depth: {self.depth}"


# ============================================================================
# Actions
# ============================================================================

@dataclass(frozen=True)
class SetRadius:
    radius: float


@dataclass(frozen=True)
class SetDepth:
    depth: int


@dataclass(frozen=True)
class SetCenter:
    """New center as decimal strings or mpf values."""
    re: object
    im: object


@dataclass(frozen=True)
class ZoomAt:
    """Re-center on a screen pixel and halve the radius."""
    x: int
    y: int


@dataclass(frozen=True)
class ZoomIn:
    pass


@dataclass(frozen=True)
class ZoomOut:
    pass


ACTIONS = (SetRadius, SetDepth, SetCenter, ZoomAt, ZoomIn, ZoomOut)

ZOOM_FACTOR = 2.0


def apply_action(view, action, width, height):
    """
    Return the ViewState that results from an action.

    Args:
        view: Current ViewState
        action: One of the ACTIONS types
        width, height: Current viewport size (used by ZoomAt)

    Raises:
        TypeError for anything that is not a known action
        ValueError if the resulting view is invalid
    """
    if isinstance(action, SetRadius):
        return replace(view, radius=float(action.radius))

    elif isinstance(action, SetDepth):
        return replace(view, depth=int(action.depth))

    elif isinstance(action, SetCenter):
        return replace(
            view,
            center_re=to_mpf(action.re, view.precision_digits),
            center_im=to_mpf(action.im, view.precision_digits),
        )

    elif isinstance(action, ZoomAt):
        if width <= 0 or height <= 0:
            return view
        d0r, d0i = pixel_offset(action.x, action.y, width, height, view.radius)
        with mpmath.workdps(view.precision_digits):
            center_re = view.center_re + mpmath.mpf(d0r)
            center_im = view.center_im + mpmath.mpf(d0i)
        return replace(view, center_re=center_re, center_im=center_im,
                       radius=view.radius / ZOOM_FACTOR)

    elif isinstance(action, ZoomIn):
        return replace(view, radius=view.radius / ZOOM_FACTOR)

    elif isinstance(action, ZoomOut):
        return replace(view, radius=view.radius * ZOOM_FACTOR)

    raise TypeError(f"Unknown action: {action!r}")
