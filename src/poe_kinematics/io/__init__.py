"""I/O utilities for loading robot models from description files.

This module parses XML robot descriptions and converts them to
RobotModel PyTrees.
"""

from .model_parser import load_model, parse_model

__all__ = ["load_model", "parse_model"]
