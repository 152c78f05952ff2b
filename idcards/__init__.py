"""Student ID-card registration and administration site."""

__version__ = "1.0.0"
