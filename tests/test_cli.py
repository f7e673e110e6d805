import pytest

import deepzoom.__main__ as cli
from deepzoom.__main__ import build_parser, parse_view_args
from deepzoom.reference import to_mpf
from deepzoom.settings import DEFAULTS


def parse(argv):
    return build_parser(DEFAULTS).parse_args(argv)


def test_defaults():
    (re, im), radius, depth = parse_view_args(parse([]))
    assert re == 0 and im == 0
    assert radius == 2.0
    assert depth == 1000


def test_overrides():
    args = parse(["--center", "-0.75", "0.1", "--radius", "1e-12",
                  "--depth", "5000", "--dims", "640", "480", "--colormap", "Hot"])
    (re, im), radius, depth = parse_view_args(args)
    assert re == to_mpf("-0.75")
    assert im == to_mpf("0.1")
    assert radius == 1e-12
    assert depth == 5000
    assert args.dims == [640, 480]
    assert args.colormap == "Hot"


@pytest.mark.parametrize("argv", [
    ["--radius", "0"],
    ["--depth", "1.5"],
    ["--center", "1,5", "0"],
])
def test_bad_values_exit(argv):
    with pytest.raises(SystemExit) as exc:
        parse_view_args(parse(argv))
    assert "deepzoom: invalid" in str(exc.value)


def test_unknown_colormap_rejected():
    with pytest.raises(SystemExit):
        parse(["--colormap", "Nope"])


def test_main_starts_viewer_with_parsed_view(monkeypatch):
    started = []
    monkeypatch.setattr(cli, "load_settings", lambda: DEFAULTS)
    monkeypatch.setattr(cli, "run", lambda *args: started.append(args))

    cli.main(["--center", "-1.25", "0", "--radius", "0.5", "--dims", "320", "200"])

    (view, width, height, colormap), = started
    assert view.center_re == to_mpf("-1.25")
    assert view.radius == 0.5
    assert (width, height) == (320, 200)
    assert colormap == DEFAULTS['colormap']


def test_help_exits_before_starting_viewer(monkeypatch):
    started = []
    monkeypatch.setattr(cli, "run", lambda *args: started.append(args))
    with pytest.raises(SystemExit):
        cli.main(["--help"])
    assert started == []
