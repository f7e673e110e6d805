"""
Asynchronous deep zoom renderer.

The FrameRenderer class handles:
- Background (async) computation so the UI stays responsive
- Caching of the reference orbit while center and depth are unchanged
- Dropping frames that were superseded while they were being computed

Only the most recent request is ever computed next: a new request
overwrites the pending one instead of queuing behind it.
"""

import threading

from .colormaps import get_default_colormap
from .compute import render_frame
from .reference import compute_reference_orbit


class FrameRenderer:
    """
    Renders frames for ViewStates on a background thread.

    Usage:
        renderer = FrameRenderer()
        renderer.request(view, 800, 600)

        # In your game loop:
        rgb, view = renderer.get_result()
        if rgb is not None:
            display(rgb)

    Each request gets a generation number. A finished frame is published
    only if no newer request arrived meanwhile; otherwise it is discarded.
    """

    def __init__(self, palette=None):
        """
        Initialize the renderer.

        Args:
            palette: Nx3 uint8 palette (default: the Classic gradient)
        """
        self.palette = palette if palette is not None else get_default_colormap()

        # Reference orbit cache, keyed by ViewState.orbit_key()
        self._orbit_key = None
        self._orbit = None

        # Async computation state
        self.generation = 0
        self.computing = False
        self.result_ready = False
        self.pending = None  # (generation, view, width, height, palette)
        self.result = None   # (rgb, view)
        self.lock = threading.Lock()
        self._thread = None

    def request(self, view, width, height):
        """
        Ask for a frame of view at the given size.

        Supersedes any earlier request that has not been published yet.

        Returns:
            The generation number assigned to this request
        """
        with self.lock:
            self.generation += 1
            self.pending = (self.generation, view, width, height, self.palette)
            if not self.computing:
                self.computing = True
                thread = threading.Thread(target=self._compute_thread)
                thread.daemon = True
                self._thread = thread
                thread.start()
            return self.generation

    def _compute_thread(self):
        """Background thread for frame computation."""
        while True:
            with self.lock:
                job = self.pending
                self.pending = None
                if job is None:
                    self.computing = False
                    break

            generation, view, width, height, palette = job
            try:
                rgb = self.render(view, width, height, palette)
            except Exception as e:
                print(f"Error: Could not render frame: {e}")
                continue

            with self.lock:
                if generation == self.generation:
                    self.result = (rgb, view)
                    self.result_ready = True

    def orbit_for(self, view):
        """Reference orbit for view, reusing the last one when possible."""
        key = view.orbit_key()
        if key != self._orbit_key:
            self._orbit = compute_reference_orbit(
                view.center_re, view.center_im, view.depth, view.precision_digits
            )
            self._orbit_key = key
        return self._orbit

    def render(self, view, width, height, palette=None):
        """
        Render a frame synchronously.

        Returns:
            (height, width, 3) uint8 array
        """
        palette = self.palette if palette is None else palette
        orbit = self.orbit_for(view)
        return render_frame(width, height, view.radius, orbit, palette)

    def get_result(self):
        """
        Get the latest render result if ready.

        Returns:
            Tuple of (rgb, view) if a new frame is ready, (None, None) otherwise.
        """
        with self.lock:
            if self.result_ready:
                self.result_ready = False
                return self.result
        return None, None

    def wait(self, timeout=None):
        """
        Block until the worker thread is idle.

        Returns:
            True if idle, False on timeout
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def update_settings(self, palette=None):
        """
        Update rendering settings.

        Returns:
            True if any setting changed, False otherwise
        """
        if palette is not None:
            self.palette = palette
            return True
        return False
