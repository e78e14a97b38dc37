"""Themed message box models, colours and helpers for desktop applications:
validation, scheduling, PIN hashing, remote config sync, tab bars, sessions
and settings bundles."""

__version__ = "0.1.1"

__all__ = [
    "color",
    "messagebox",
    "validation",
    "scheduler",
    "pin_crypto",
    "remote_config",
    "tab_bar",
    "session",
    "settings_export",
]