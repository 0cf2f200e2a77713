"""Reporters: query results -> str.

Output is str, not print(). Caller decides destination.
"""

from lineheat.application.reporters.console import ConsoleConfig, ConsoleReporter
from lineheat.application.reporters.json import JsonReporter

__all__ = ["ConsoleConfig", "ConsoleReporter", "JsonReporter"]
