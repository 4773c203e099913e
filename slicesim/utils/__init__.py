"""
Utility modules for slice admission simulations.

This module provides configuration management and visualization utilities.
"""

from .config import ConfigManager

__all__ = ['ConfigManager']
