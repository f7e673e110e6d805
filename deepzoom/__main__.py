"""
Allow running the package directly: python -m deepzoom
"""
import argparse
import sys

from .app import run
from .colormaps import list_colormap_names
from .parsing import parse_center, parse_depth, parse_radius
from .settings import load_settings
from .view import ViewState


def build_parser(settings):
    view = settings['view']
    parser = argparse.ArgumentParser(
        prog="deepzoom",
        description="Deep zoom Mandelbrot viewer using perturbation theory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--center",
        nargs=2,
        metavar=("RE", "IM"),
        default=[view['center_re'], view['center_im']],
        help="center of the view as decimal strings",
    )
    parser.add_argument(
        "--radius",
        default=str(view['radius']),
        help="half-width of the shorter window side in the complex plane",
    )
    parser.add_argument(
        "--depth",
        default=str(view['depth']),
        help="maximum reference orbit length / iteration count",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=view['precision_digits'],
        help="decimal digits of precision for the reference orbit",
    )
    parser.add_argument(
        "--dims",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=[settings['window']['width'], settings['window']['height']],
        help="initial window size in pixels",
    )
    parser.add_argument(
        "--colormap",
        choices=list_colormap_names(),
        default=settings['colormap'],
        help="color gradient",
    )
    return parser


def parse_view_args(args):
    """
    Validate the numeric arguments.

    Returns:
        (center, radius, depth), exiting with a message on bad input
    """
    center, error = parse_center(args.center[0], args.center[1], args.precision)
    if error:
        part, kind = error
        sys.exit(f"deepzoom: invalid {part} part of --center: {kind}")
    radius, error = parse_radius(args.radius)
    if error:
        sys.exit(f"deepzoom: invalid --radius: {error}")
    depth, error = parse_depth(args.depth)
    if error:
        sys.exit(f"deepzoom: invalid --depth: {error}")
    return center, radius, depth


def main(argv=None):
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)
    (center_re, center_im), radius, depth = parse_view_args(args)

    view = ViewState(
        center_re=center_re,
        center_im=center_im,
        radius=radius,
        depth=depth,
        precision_digits=args.precision,
    )
    print(view.describe())
    run(view, args.dims[0], args.dims[1], args.colormap)


if __name__ == "__main__":
    main()
