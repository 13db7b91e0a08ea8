"""CLI module for cookielens.

This package provides the command-line interface for scanning cookie
exports, computing risk scores and inspecting the knowledge base.
"""

from .main import app, cli_main, ExitCode
from .summary import ReportFormatter

__all__ = [
    'app',
    'cli_main',
    'ExitCode',
    'ReportFormatter',
]
