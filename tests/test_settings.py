import json

from deepzoom.settings import DEFAULTS, SETTINGS_PATH, load_settings


def test_packaged_settings_load():
    with open(SETTINGS_PATH) as f:
        json.load(f)
    settings = load_settings()
    assert settings['colormap'] == 'Classic'
    assert settings['view']['depth'] == 1000
    assert settings['view']['precision_digits'] == 100


def test_missing_file_falls_back(tmp_path, capsys):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_invalid_json_falls_back(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_partial_file_is_merged(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"view": {"depth": 5000}, "colormap": "Hot", "bogus": 1}))
    settings = load_settings(str(path))
    assert settings['view']['depth'] == 5000
    assert settings['view']['radius'] == DEFAULTS['view']['radius']
    assert settings['colormap'] == 'Hot'
    assert 'bogus' not in settings
    # Defaults are not mutated
    assert DEFAULTS['view']['depth'] == 1000
