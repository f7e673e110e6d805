"""
Default settings, optionally overridden by settings.json next to this file.
"""

import copy
import json
import os


SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')

DEFAULTS = {
    'window': {
        'width': 800,
        'height': 800,
    },
    'view': {
        'center_re': '0',
        'center_im': '0',
        'radius': 2.0,
        'depth': 1000,
        'precision_digits': 100,
    },
    'colormap': 'Classic',
}


def load_settings(path=None):
    """
    Load settings from a JSON file, falling back to DEFAULTS.

    Sections present in the file replace the matching keys of the
    defaults; anything missing keeps its default value.
    """
    settings = copy.deepcopy(DEFAULTS)
    path = path or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"Warning: Could not load {os.path.basename(path)}: {e}")
        return settings

    if not isinstance(loaded, dict):
        print(f"Warning: Ignoring {os.path.basename(path)}: expected an object")
        return settings

    for key, value in loaded.items():
        if isinstance(settings.get(key), dict) and isinstance(value, dict):
            settings[key].update(value)
        elif key in settings:
            settings[key] = value
    return settings
