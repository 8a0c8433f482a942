"""blink: keyboard-driven application launcher core."""

__version__ = "0.1.0"
