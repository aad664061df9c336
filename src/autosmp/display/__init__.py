from .backlight import BACKLIGHT_ROOT, BacklightDisplayNotifier, find_backlight

__all__ = ["BACKLIGHT_ROOT", "BacklightDisplayNotifier", "find_backlight"]
