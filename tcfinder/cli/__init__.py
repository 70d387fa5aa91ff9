"""
Command-line interface for tcfinder.
"""

from .main import main, setup_argument_parser

__all__ = ["main", "setup_argument_parser"]
