"""Voxel-count difference and overlap between two labelmaps."""

__version__ = "0.1.0"
