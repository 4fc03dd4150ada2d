"""Track It project package."""
