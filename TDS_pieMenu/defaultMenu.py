from collections import OrderedDict


def default_menu():
    """Example menu shown when nothing else is configured.

    Some items carry fixed angles (media keys left/right, workspace up/down),
    the rest is spread around them.
    """
    return OrderedDict([
        ("name", "Example Menu"),
        ("icon", "\U0001F31F"),
        ("type", "Menu"),
        ("id", "example"),
        ("children", [
            {
                "name": "Sound",
                "icon": "multimedia-audio-player",
                "type": "Submenu",
                "children": [
                    {"name": "Play / Pause", "icon": "⏯", "type": "Shortcut", "data": "AudioPlay"},
                    {"name": "Mute", "icon": "\U0001F508", "type": "Shortcut", "data": "AudioMute"},
                    {"name": "Next Title", "icon": "⏩", "type": "Shortcut", "data": "AudioNext",
                     "angle": 90},
                    {"name": "Previous Title", "icon": "⏪", "type": "Shortcut", "data": "AudioPrev",
                     "angle": 270},
                ],
            },
            {
                "name": "Window Management",
                "icon": "preferences-system-windows",
                "type": "Submenu",
                "children": [
                    {"name": "Maximize Window", "icon": "view-fullscreen", "type": "Shortcut",
                     "data": "<Alt>F10"},
                    {"name": "Open Windows", "icon": "preferences-system-windows", "type": "RunningApps"},
                    {
                        "name": "Workspaces",
                        "icon": "workspace-switcher",
                        "type": "Submenu",
                        "children": [
                            {"name": "Up", "icon": "\U0001F53C", "type": "Shortcut",
                             "data": "<Primary><Alt>Up", "angle": 0},
                            {"name": "Overview", "icon": "\U0001F4A0", "type": "Shortcut", "data": "<Super>s"},
                            {"name": "Down", "icon": "\U0001F53D", "type": "Shortcut",
                             "data": "<Primary><Alt>Down", "angle": 180},
                            {"name": "Show Apps", "icon": "view-grid", "type": "Shortcut", "data": "<Super>a"},
                        ],
                    },
                    {"name": "Close Window", "icon": "window-close", "type": "Shortcut", "data": "<Alt>F4"},
                ],
            },
            {"name": "Bookmarks", "icon": "folder", "type": "Bookmarks"},
            {
                "name": "Default Apps",
                "icon": "emblem-favorite",
                "type": "Submenu",
                "children": [
                    {"name": "Terminal", "icon": "utilities-terminal", "type": "Command",
                     "data": "x-terminal-emulator"},
                    {"name": "Files", "icon": "system-file-manager", "type": "Command",
                     "data": "xdg-open ~"},
                    {"name": "System Monitor", "icon": "utilities-system-monitor", "type": "Command",
                     "data": "gnome-system-monitor"},
                ],
            },
        ]),
    ])
