"""Social Timer: a shared timer counting the time since anyone last reset it."""

__version__ = "0.1.0"
