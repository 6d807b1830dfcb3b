"""Read and change display backlight brightness from the command line."""

__version__ = "0.1.0"
