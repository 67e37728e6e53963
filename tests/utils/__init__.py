"""Test utilities"""

from .model_builders import ModelBuilder

__all__ = ["ModelBuilder"]
