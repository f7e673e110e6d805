"""
Perturbation and coloring kernels using Numba JIT compilation.

This module contains the performance-critical per-pixel functions. Each
pixel is iterated as a double-precision delta from a shared reference
orbit (see reference.py) instead of being iterated on its own in
arbitrary precision:

    d_{n+1} = d_n * (2X_n + d_n) + d_0

where 2X_n comes straight from the pre-doubled reference samples. The
true iterate X_n + d_n is only reconstructed for the escape test.

Functions:
- pixel_offset: screen pixel -> complex offset from the view center
- perturb_pixel: perturbation iteration and escape test for one pixel
- palette_index / map_color: smooth (logarithmic) coloring
- compute_perturbation / apply_palette: whole-frame passes, parallel by row
- render_frame: convenience wrapper returning a fresh RGB buffer
"""

import math

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS_SQ = 256.0  # Pixel bailout, squared magnitude
SMOOTHING_SCALE = 10.0    # Palette entries per unit of smooth iteration
MIN_MAG_SQ = 2.0          # log2(log2(x)) is only defined for x > 1


@jit(nopython=True, cache=True)
def pixel_offset(i, j, width, height, radius):
    """
    Complex offset of pixel (i, j) from the view center.

    The shorter window side spans [-radius, radius]; the imaginary axis
    points up, so row 0 is the top of the image.

    Returns:
        (d0r, d0i)
    """
    window_radius = min(width, height)
    d0r = radius * (2 * i - width) / window_radius
    d0i = -radius * (2 * j - height) / window_radius
    return d0r, d0i


@jit(nopython=True, cache=True)
def perturb_pixel(d0r, d0i, orbit_re, orbit_im, escape_r2=ESCAPE_RADIUS_SQ):
    """
    Iterate one pixel's delta against the reference orbit.

    Args:
        d0r, d0i: Offset of the pixel from the reference center
        orbit_re, orbit_im: Pre-doubled reference samples
        escape_r2: Squared escape magnitude (default 256)

    Returns:
        (iteration, mag_sq). iteration == len(orbit) means the pixel
        never escaped within the orbit and is treated as inside the set.
    """
    n = orbit_re.shape[0]
    if n == 0:
        return 0, 0.0

    dr = d0r
    di = d0i
    zr = orbit_re[0] * 0.5 + dr
    zi = orbit_im[0] * 0.5 + di
    mag_sq = zr * zr + zi * zi

    iteration = 0
    while iteration < n:
        # d <- d * (2X + d) + d0
        ar = orbit_re[iteration] + dr
        ai = orbit_im[iteration] + di
        new_dr = dr * ar - di * ai + d0r
        di = dr * ai + di * ar + d0i
        dr = new_dr
        iteration += 1

        # No sample past the end of the orbit to rebuild the iterate from
        if iteration == n:
            break

        zr = orbit_re[iteration] * 0.5 + dr
        zi = orbit_im[iteration] * 0.5 + di
        mag_sq = zr * zr + zi * zi
        # NaN from an overflowed delta counts as escaped
        if not mag_sq < escape_r2:
            break

    return iteration, mag_sq


@jit(nopython=True, cache=True)
def palette_index(iteration, mag_sq, num_colors):
    """
    Smooth palette index for an escaped pixel.

    nu = iteration - log2(log2(|z|^2)), scaled by SMOOTHING_SCALE and
    wrapped into the palette. Magnitudes below MIN_MAG_SQ are clamped and
    a non-finite magnitude falls back to the plain iteration count, so
    the index is always a valid integer.
    """
    if math.isfinite(mag_sq):
        if mag_sq < MIN_MAG_SQ:
            mag_sq = MIN_MAG_SQ
        nu = iteration - math.log2(math.log2(mag_sq))
    else:
        nu = float(iteration)
    nu *= SMOOTHING_SCALE
    return int(math.floor(nu)) % num_colors


@jit(nopython=True, cache=True)
def map_color(iteration, mag_sq, orbit_length, palette):
    """
    Color for one pixel result.

    Returns:
        (r, g, b); black when iteration == orbit_length
    """
    if iteration >= orbit_length:
        return 0, 0, 0
    idx = palette_index(iteration, mag_sq, palette.shape[0])
    return np.int64(palette[idx, 0]), np.int64(palette[idx, 1]), np.int64(palette[idx, 2])


@jit(nopython=True, parallel=True, cache=True)
def compute_perturbation(width, height, radius, orbit_re, orbit_im,
                         escape_r2=ESCAPE_RADIUS_SQ):
    """
    Run the perturbation iteration for every pixel of the viewport.

    Rows are independent and computed in parallel; the orbit is only
    read.

    Returns:
        (iterations, mag_sq): int64 and float64 arrays of shape (height, width)
    """
    iterations = np.zeros((height, width), dtype=np.int64)
    mag_sq = np.zeros((height, width), dtype=np.float64)

    for j in prange(height):
        for i in range(width):
            d0r, d0i = pixel_offset(i, j, width, height, radius)
            it, m = perturb_pixel(d0r, d0i, orbit_re, orbit_im, escape_r2)
            iterations[j, i] = it
            mag_sq[j, i] = m

    return iterations, mag_sq


@jit(nopython=True, parallel=True, cache=True)
def apply_palette(iterations, mag_sq, orbit_length, palette, out):
    """
    Map iteration data to colors.

    Args:
        iterations, mag_sq: Output of compute_perturbation
        orbit_length: Length of the reference orbit used
        palette: Nx3 array of RGB colors (uint8)
        out: Output RGB image array (modified in place)
    """
    height, width = iterations.shape

    for j in prange(height):
        for i in range(width):
            r, g, b = map_color(iterations[j, i], mag_sq[j, i], orbit_length, palette)
            out[j, i, 0] = r
            out[j, i, 1] = g
            out[j, i, 2] = b


def render_frame(width, height, radius, orbit, palette):
    """
    Render one frame for a view.

    Args:
        width, height: Viewport size in pixels
        radius: Half-width of the shorter viewport side in the complex plane
        orbit: ReferenceOrbit for the view center
        palette: Nx3 uint8 palette

    Returns:
        New (height, width, 3) uint8 array. A zero-area viewport yields an
        empty array.
    """
    out = np.zeros((max(height, 0), max(width, 0), 3), dtype=np.uint8)
    if width <= 0 or height <= 0:
        return out

    iterations, mag_sq = compute_perturbation(
        width, height, float(radius), orbit.re, orbit.im
    )
    apply_palette(iterations, mag_sq, len(orbit), palette, out)
    return out


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on first actual use.
    """
    orbit_re = np.zeros(4, dtype=np.float64)
    orbit_im = np.zeros(4, dtype=np.float64)
    iterations, mag_sq = compute_perturbation(10, 10, 2.0, orbit_re, orbit_im)
    dummy = np.zeros((10, 10, 3), dtype=np.uint8)
    apply_palette(iterations, mag_sq, 4, palette, dummy)
    map_color(1, 300.0, 4, palette)
