"""
remote-resources command line package.
"""

from .main import main

__all__ = ["main"]
