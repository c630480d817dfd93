"""Employee directory API: user signup/login and employee record management."""

__version__ = "0.1.0"
