"""
Command Line Interface for FarmScope

This package provides command line argument parsing and validation
for snapshot generation, the HTTP service and config bootstrapping.

Classes:
    CLIManager: Command line interface manager
"""

from farmscope.cli.arguments import CLIManager

__all__ = ['CLIManager']
