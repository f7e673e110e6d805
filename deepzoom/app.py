"""
Main application module for the deep zoom viewer.

Contains the DeepZoomApp class which handles:
- Window setup and main loop
- Translating keyboard/mouse input into view actions
- Collecting typed numbers through an in-window prompt
- Displaying frames from the background renderer
"""

import pygame

from .colormaps import DEFAULT_COLORMAP, get_colormap
from .compute import warmup_jit
from .parsing import parse_center, parse_depth, parse_radius
from .prompt import Prompt
from .renderer import FrameRenderer
from .settings import load_settings
from .view import (
    SetCenter,
    SetDepth,
    SetRadius,
    ViewState,
    ZoomAt,
    ZoomIn,
    ZoomOut,
    apply_action,
)


CAPTION = "Deep Zoom - Click to zoom, Z/X zoom in/out, R radius, D depth, I center"


class DeepZoomApp:
    """
    Main application class for the deep zoom viewer.

    Handles the pygame window, event loop, and coordinates
    between the view state, the renderer and the display.
    """

    def __init__(self, view=None, width=None, height=None, colormap=None, settings=None):
        """
        Initialize the application.

        Args:
            view: Initial ViewState (default from settings)
            width, height: Window size in pixels (default from settings)
            colormap: Gradient name (default from settings)
            settings: Settings dict (default: load_settings())
        """
        settings = settings or load_settings()
        self.width = width or settings['window']['width']
        self.height = height or settings['window']['height']

        if view is None:
            v = settings['view']
            view = ViewState.from_strings(
                v['center_re'], v['center_im'], v['radius'], v['depth'],
                v['precision_digits'],
            )
        self.view = view
        self.colormap_name = colormap or settings.get('colormap', DEFAULT_COLORMAP)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None

        self.renderer = None
        self.prompt = None
        self.pending_render = False
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self.renderer = FrameRenderer(get_colormap(self.colormap_name))

        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.renderer.palette)
        self._request_render()

        self.running = True
        while self.running:
            self._handle_events()
            self._check_render_result()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create a resizable window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        pygame.display.set_caption(CAPTION)
        self.clock = pygame.time.Clock()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            if event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)
                continue

            # Prompt gets first crack at events
            if self.prompt is not None:
                if self.prompt.handle_event(event):
                    self._finish_prompt()
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dispatch(ZoomAt(*event.pos))
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_resize(self, width, height):
        """Recompute the same view for the new window size."""
        self.width, self.height = width, height
        # set_mode treats a zero size as "desktop size"
        if width > 0 and height > 0:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self._request_render()

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_z:
            self.dispatch(ZoomIn())
        elif event.key == pygame.K_x:
            self.dispatch(ZoomOut())
        elif event.key == pygame.K_r:
            self._open_prompt('radius', "Enter the new zoom radius",
                              ["Radius"], [f"{self.view.radius:g}"])
        elif event.key == pygame.K_d:
            self._open_prompt('depth', "Enter the new iteration depth",
                              ["Depth"], [str(self.view.depth)])
        elif event.key == pygame.K_i:
            self._open_prompt('center', "Enter the new center coordinates",
                              ["Real", "Imaginary"])

    def _open_prompt(self, kind, title, labels, initial=None):
        self.prompt = Prompt(kind, title, labels, initial,
                             screen_size=(self.width, self.height))

    def _finish_prompt(self):
        """Parse a submitted prompt into an action, or report the error."""
        prompt = self.prompt
        if prompt.cancelled:
            self.prompt = None
            return
        if prompt.submitted is None:
            return

        if prompt.kind == 'radius':
            radius, error = parse_radius(prompt.submitted[0])
            action = SetRadius(radius) if error is None else None
        elif prompt.kind == 'depth':
            depth, error = parse_depth(prompt.submitted[0])
            action = SetDepth(depth) if error is None else None
        else:
            center, error = parse_center(*prompt.submitted, self.view.precision_digits)
            if error is None:
                action = SetCenter(*center)
            else:
                part, kind = error
                error = f"{part} part: {kind}"

        if error is not None:
            # Keep the previous view and let the user fix the input
            prompt.set_error(f"Invalid input: {error}")
            return

        self.prompt = None
        self.dispatch(action)

    def dispatch(self, action):
        """Apply an action to the view and start rendering the result."""
        try:
            view = apply_action(self.view, action, self.width, self.height)
        except ValueError as e:
            # Keep the last valid view
            print(f"Warning: Could not apply {type(action).__name__}: {e}")
            pygame.display.set_caption(f"Cannot go further: {e}")
            return
        self.view = view
        print(self.view.describe())
        self._request_render()

    def _request_render(self):
        self.renderer.request(self.view, self.width, self.height)
        self.pending_render = True
        pygame.display.set_caption("Computing...")

    def _check_render_result(self):
        """Check if async render has completed."""
        rgb, view = self.renderer.get_result()
        if rgb is None:
            return
        if rgb.shape[0] == 0 or rgb.shape[1] == 0:
            self.current_surface = None
        else:
            self.current_surface = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))
        self.pending_render = False
        pygame.display.set_caption(CAPTION)

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        if self.prompt is not None:
            self.prompt.draw(self.screen)
        pygame.display.flip()


def run(view=None, width=None, height=None, colormap=None):
    """
    Run the deep zoom viewer.

    Args:
        view: Initial ViewState (default from settings.json)
        width, height: Window size (default from settings.json)
        colormap: Gradient name (default from settings.json)
    """
    app = DeepZoomApp(view, width, height, colormap)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
