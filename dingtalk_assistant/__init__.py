"""DingTalk Open Platform developer assistant tools."""

__version__ = "0.1.0"
