"""Price resolution service: picks the best-matching money amount for a price set."""

__version__ = "0.1.0"
