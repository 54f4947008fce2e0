import json
import logging
import math
from collections import OrderedDict
from pathlib import Path

from .menuNode import PieMenuError

logger = logging.getLogger(__name__)

SCRIPT_DIR = Path(__file__).resolve().parent
settings_filePath = SCRIPT_DIR / "pieMenu_settings.json"


class SettingsError(PieMenuError):
    pass


def _default_settings():
    # keep in sync with the sizes the drawing code expects
    return OrderedDict([
        ("global_scale", 1.0),
        ("wedge_inner_radius", 50.0),
        ("center_size", 100.0),
        ("center_size_hover", 100.0),
        ("child_size", 60.0),
        ("child_size_hover", 70.0),
        ("child_offset", 100.0),
        ("child_offset_hover", 110.0),
        ("grandchild_size", 15.0),
        ("grandchild_size_hover", 20.0),
        ("grandchild_offset", 25.0),
        ("grandchild_offset_hover", 30.0),
        ("center_icon_scale", 0.8),
        ("center_icon_scale_hover", 0.8),
        ("child_icon_scale", 0.7),
        ("child_icon_scale_hover", 0.7),
        ("center_icon_opacity", 1.0),
        ("center_icon_opacity_hover", 1.0),
        ("child_icon_opacity", 1.0),
        ("child_icon_opacity_hover", 1.0),
        ("easing_duration", 0.25),
        ("angle_collision_threshold", 1.0),
        ("clamp_margin", 10.0),
        ("child_draw_above", False),
        ("grandchild_draw_above", False),
    ])


def _load_data(path):
    path = Path(path)
    if not path.exists():
        data = _default_settings()
        _save_data(path, data)
        return data

    try:
        with open(path, 'r') as f:
            data = json.load(f, object_pairs_hook=OrderedDict)
    except (OSError, ValueError) as e:
        raise SettingsError(f"could not read settings file '{path}': {e}")

    if not isinstance(data, dict):
        raise SettingsError(f"settings file '{path}' does not hold an object")

    # BACKFILL: keys added after the file was written
    changed = False
    for key, value in _default_settings().items():
        if key not in data:
            data[key] = value
            changed = True
    if changed:
        _save_data(path, data)
    return data


def _save_data(path, data):
    with open(path, 'w') as f:
        json.dump(data, f, indent=4)


class PieSettings(object):
    """Numeric appearance settings of the menu, optionally backed by a JSON file."""

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else settings_filePath
        self._data = _load_data(self.path)

    @classmethod
    def from_dict(cls, values=None):
        inst = cls.__new__(cls)
        inst.path = None
        inst._data = _default_settings()
        for key, value in (values or {}).items():
            if key not in inst._data:
                raise KeyError(key)
            inst._data[key] = value
        return inst

    def get(self, key):
        value = self._data[key]
        if isinstance(value, bool):
            return value
        return float(value)

    def set(self, key, value):
        if key not in self._data:
            raise KeyError(key)
        self._data[key] = value
        if self.path is not None:
            _save_data(self.path, self._data)

    def keys(self):
        return list(self._data.keys())


def max_menu_radius(settings) -> float:
    """Diameter of the largest area the center, children and grandchildren can cover."""
    g = settings.get
    wedge_radius = g("wedge_inner_radius")
    center_radius = max(g("center_size") / 2, g("center_size_hover") / 2)
    child_radius = max(
        g("child_size") / 2 + g("child_offset"),
        g("child_size_hover") / 2 + g("child_offset_hover"))
    grandchild_radius = max(
        g("child_offset") + g("grandchild_size") / 2 + g("grandchild_offset"),
        g("child_offset_hover") + g("grandchild_size_hover") / 2 + g("grandchild_offset_hover"))

    max_size = max(wedge_radius, center_radius, child_radius, grandchild_radius)
    return max_size * 2 * g("global_scale")


def clamp_to_monitor(x, y, bounds, settings, margin=None):
    """Move (x, y) so a full menu centered there fits into ``bounds`` minus ``margin``.

    ``bounds`` is (left, top, width, height).
    """
    if margin is None:
        margin = settings.get("clamp_margin")
    left, top, width, height = bounds

    reach = margin + max_menu_radius(settings) / 2
    min_x, max_x = left + reach, left + width - reach
    min_y, max_y = top + reach, top + height - reach

    # monitor smaller than the menu: keep it centered
    if min_x > max_x:
        min_x = max_x = left + width / 2
    if min_y > max_y:
        min_y = max_y = top + height / 2

    pos_x = min(max(x, min_x), max_x)
    pos_y = min(max(y, min_y), max_y)
    return int(math.floor(pos_x)), int(math.floor(pos_y))
