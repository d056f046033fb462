"""Shopping-cart pricing and reconciliation engine for the shop widget."""

__version__ = "1.0.0"
