"""HTTP boundary for the cart widget."""
