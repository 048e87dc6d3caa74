"""Render output: shape assembly and the display adapters built on it."""
