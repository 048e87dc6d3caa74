"""Geometry pipeline: coordinate walking, envelope and projection."""
