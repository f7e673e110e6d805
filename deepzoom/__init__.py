"""
Deep Zoom Mandelbrot Package

An interactive Mandelbrot explorer that zooms far past double precision
using perturbation theory: one arbitrary-precision reference orbit
(mpmath) per view, and a cheap double-precision delta iteration per
pixel (Numba JIT), displayed with Pygame.

Quick Start:
    from deepzoom import run
    run()

Or from command line:
    python -m deepzoom --center -0.75 0.1 --radius 1e-3 --depth 2000

Package Structure:
    - colormaps.py: Palette builder and named anchor gradients
    - reference.py: Arbitrary-precision reference orbit
    - compute.py: JIT-compiled perturbation, coloring and frame kernels
    - view.py: Immutable view state and user actions
    - parsing.py: Parsing of typed numbers
    - renderer.py: Async rendering with orbit caching
    - prompt.py: In-window text prompt
    - app.py: Main application and event loop

Controls:
    - Left click: Zoom in 2x centered on the clicked point
    - Z / X: Zoom in / out without re-centering
    - R: Enter a new radius
    - D: Enter a new iteration depth
    - I: Enter a new center
    - ESC: Cancel prompt / quit
"""

from .app import run, DeepZoomApp
from .renderer import FrameRenderer
from .colormaps import COLORMAPS, build_palette, get_colormap, list_colormap_names
from .reference import ReferenceOrbit, compute_reference_orbit
from .compute import render_frame
from .view import ViewState, apply_action

__version__ = "1.0.0"
__all__ = [
    "run",
    "DeepZoomApp",
    "FrameRenderer",
    "COLORMAPS",
    "build_palette",
    "get_colormap",
    "list_colormap_names",
    "ReferenceOrbit",
    "compute_reference_orbit",
    "render_frame",
    "ViewState",
    "apply_action",
]
