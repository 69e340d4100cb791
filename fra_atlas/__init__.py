"""FRA Atlas backend: Forest Rights Act claim digitization and review service."""

__version__ = "1.0.0"
