from .stats import HotplugObserver, HotplugStats

__all__ = ["HotplugObserver", "HotplugStats"]
