"""kitlocate — find developer binaries inside Windows Kits installations."""

__version__ = "0.1.0"
