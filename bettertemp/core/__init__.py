"""Core components of bettertemp."""
