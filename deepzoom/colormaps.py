"""
Palette definitions for deep zoom rendering.

A palette is built from a short list of anchor colors by linear
interpolation between each pair of neighbours, wrapping from the last
anchor back to the first. The result is a numpy array of shape
(STEPS_PER_SEGMENT * len(anchors), 3) with uint8 RGB values that the
color mapper indexes cyclically.

To add a new gradient:
1. Add a list of RGB anchors below
2. Register it in the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


STEPS_PER_SEGMENT = 100  # Colors emitted between two consecutive anchors


def interpolate(color1, color2, t):
    """
    Linearly interpolate between two RGB colors.

    Each channel is computed as c1 + (c2 - c1) * t and truncated
    toward zero, so t = 0 returns color1 exactly.
    """
    return tuple(int(c1 + (c2 - c1) * t) for c1, c2 in zip(color1, color2))


def build_palette(anchors, steps=STEPS_PER_SEGMENT):
    """
    Expand anchor colors into a dense, cyclic lookup table.

    Args:
        anchors: Sequence of at least two (r, g, b) tuples, 0-255 each
        steps: Number of colors per anchor pair (default 100)

    Returns:
        Read-only numpy array of shape (steps * len(anchors), 3), uint8

    Raises:
        ValueError if fewer than two anchors are given or a channel
        is outside 0-255
    """
    anchors = [tuple(int(c) for c in color) for color in anchors]
    if len(anchors) < 2:
        raise ValueError("A palette needs at least two anchor colors")
    for color in anchors:
        if len(color) != 3 or not all(0 <= c <= 255 for c in color):
            raise ValueError(f"Invalid RGB anchor: {color}")

    colors = np.zeros((steps * len(anchors), 3), dtype=np.uint8)
    idx = 0
    for i, color in enumerate(anchors):
        # The last anchor blends back into the first one
        nxt = anchors[(i + 1) % len(anchors)]
        for k in range(steps):
            colors[idx] = interpolate(color, nxt, k / steps)
            idx += 1

    colors.flags.writeable = False
    return colors


# Anchor lists. CLASSIC is the default gradient.
CLASSIC = [
    (0, 0, 0),        # Black
    (0, 0, 255),      # Blue
    (128, 0, 255),    # Purple
    (255, 255, 255),  # White
    (255, 255, 0),    # Yellow
    (255, 0, 0),      # Red
]

HOT = [
    (0, 0, 0),
    (200, 0, 0),
    (255, 140, 0),
    (255, 255, 80),
    (255, 255, 255),
]

OCEAN = [
    (0, 10, 50),
    (0, 90, 170),
    (0, 200, 220),
    (230, 255, 255),
]

GRAYSCALE = [
    (0, 0, 0),
    (255, 255, 255),
]


# Registry of all available gradients.
# Keys are display names, values are anchor lists.
COLORMAPS = {
    'Classic': CLASSIC,
    'Hot': HOT,
    'Ocean': OCEAN,
    'Grayscale': GRAYSCALE,
}

DEFAULT_COLORMAP = 'Classic'


def get_colormap(name):
    """
    Build a palette by name.

    Raises:
        KeyError if name not found
    """
    return build_palette(COLORMAPS[name])


def get_default_colormap():
    """Get the default palette (Classic)."""
    return build_palette(CLASSIC)


def list_colormap_names():
    """Get list of available gradient names."""
    return list(COLORMAPS.keys())
