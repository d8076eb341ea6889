"""botforge: slot assignment and assembly validation for modular bots."""

__version__ = "0.1.0"
