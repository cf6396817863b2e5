"""
User-friendly display utilities for measureonce.
"""

import sys
from typing import Any, Dict, List, Optional, TextIO
from datetime import datetime


class StatusDisplay:
    """Handles status display for different operations."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print configuration in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            if isinstance(value, dict):
                print(f"  {key}:")
                for sub_key, sub_value in value.items():
                    print(f"    {sub_key:<22} : {sub_value}")
            else:
                print(f"  {key:<24} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info", stream: Optional[TextIO] = None):
        """Print a status message with appropriate emoji."""
        icons = {
            "info": "ℹ️",
            "success": "✅",
            "warning": "⚠️",
            "error": "❌",
            "debug": "🔎",
            "processing": "🔄"
        }
        icon = icons.get(status, "ℹ️")
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}", file=stream or sys.stdout)

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print results in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            elif isinstance(value, float):
                print(f"  {key:<20} : {value:.3f}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_table(rows: List[Dict[str, Any]], columns: List[str]):
        """Print rows as a fixed-width table."""
        widths = {
            col: max([len(col)] + [len(_fmt(row.get(col))) for row in rows])
            for col in columns
        }
        print("  " + "  ".join(f"{col:>{widths[col]}}" for col in columns))
        print("  " + "  ".join("-" * widths[col] for col in columns))
        for row in rows:
            print("  " + "  ".join(f"{_fmt(row.get(col)):>{widths[col]}}" for col in columns))


def _fmt(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


class LiveLogger:
    """Live logging with real-time updates."""

    def __init__(self, verbose: bool = True, debug: bool = False):
        self.verbose = verbose
        self.debug = debug

    def log_action(self, action_name: str, details: str = ""):
        """Log an action being performed."""
        if self.verbose:
            message = f"Executing: {action_name}"
            if details:
                message += f" - {details}"
            StatusDisplay.print_status(message, "processing")

    def log_result(self, message: str, success: bool = True):
        """Log a result."""
        if self.verbose:
            status = "success" if success else "error"
            StatusDisplay.print_status(message, status)

    def log_info(self, message: str):
        """Log an info message."""
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_debug(self, message: str):
        """Log a debug message; only shown when debug output is on."""
        if self.debug:
            StatusDisplay.print_status(message, "debug")

    def log_warning(self, message: str):
        """Log a warning message."""
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        """Log an error message."""
        if self.verbose:
            StatusDisplay.print_status(message, "error", stream=sys.stderr)
