"""
Consoles package: view-models behind the driver and hospital admin panels.

Public API:
- DriverConsole, DriverAction
- AdminConsole, AdminStats
- ConsolePolicy, default_console_policy
"""
from .policy import ConsolePolicy, default_console_policy
from .driver import DriverConsole, DriverAction
from .admin import AdminConsole, AdminStats

__all__ = [
    "ConsolePolicy",
    "default_console_policy",
    "DriverConsole",
    "DriverAction",
    "AdminConsole",
    "AdminStats",
]
