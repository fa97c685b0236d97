#!/usr/bin/env python3
"""
Shared utilities for the airnet library.

This module provides the constants, logging and small helpers used across
all airnet modules. Can be used standalone or imported by other modules.

Standalone usage:
    python -m airnet.lib.core.utils --defaults
    python -m airnet.lib.core.utils --regions
"""

import sys
import json
from pathlib import Path
from typing import Dict, Optional, Any
from datetime import datetime

# =============================================================================
# Path Constants
# =============================================================================

LIB_DIR = Path(__file__).parent.parent.resolve()
PROJECT_ROOT = LIB_DIR.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_NODES_CSV = DATA_DIR / "nodes.csv"
DEFAULT_EDGES_CSV = DATA_DIR / "edges.csv"

# =============================================================================
# Analysis Defaults (sampling caps bound the O(V^2) passes on large networks)
# =============================================================================

BETWEENNESS_MAX_SOURCES = 100
CLOSENESS_MAX_SOURCES = 200
DIAMETER_MAX_SOURCES = 100
EFFICIENCY_MAX_SOURCES = 200
REDUNDANCY_MAX_SOURCES = 100

PAGERANK_ITERATIONS = 20
PAGERANK_DAMPING = 0.85

COMMUNITY_MAX_ROUNDS = 10

# Hub score = degree * W_DEGREE + 100 * norm_degree * W_CENTRALITY + 100 * norm_pr * W_PAGERANK
HUB_WEIGHT_DEGREE = 0.4
HUB_WEIGHT_CENTRALITY = 0.3
HUB_WEIGHT_PAGERANK = 0.3
HUB_TOP_SMALL = 10
HUB_TOP_LARGE = 50

# =============================================================================
# Region Table (country -> region, closed set)
# =============================================================================

REGION_OTHER = "Other"

COUNTRY_REGIONS = {
    "United States": "North America",
    "Canada": "North America",
    "Mexico": "North America",
    "United Kingdom": "Europe",
    "Germany": "Europe",
    "France": "Europe",
    "Spain": "Europe",
    "Italy": "Europe",
    "China": "Asia",
    "Japan": "Asia",
    "India": "Asia",
    "South Korea": "Asia",
    "Brazil": "South America",
    "Argentina": "South America",
    "Chile": "South America",
    "Australia": "Oceania",
    "New Zealand": "Oceania",
}


# =============================================================================
# Logging
# =============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RESET = '\033[0m'


class Logger:
    """
    Simple logger with levels, colors, and optional file output.

    Provides consistent output formatting across all airnet modules: phase
    messages from the analysis runner, warnings from graph construction and
    the summary report printed by the CLI. Color output is only used when
    running in a terminal.
    """

    LEVELS = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3}

    # Process-wide minimum applied on top of each instance level (--quiet)
    floor = 0

    SYMBOLS = {
        "success": "✓",
        "error": "✗",
        "warning": "⚠",
        "info": "→",
        "debug": "·",
        "phase": "▸",
    }

    def __init__(self, level: str = "INFO", log_file: Optional[Path] = None,
                 use_colors: bool = True, compact: bool = False):
        """
        Initialize logger.

        Args:
            level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional file to append log lines to
            use_colors: Enable colored output (auto-disabled if not TTY)
            compact: Use compact output format (no timestamps)
        """
        self.level = self.LEVELS.get(level.upper(), 1)
        self.log_file = log_file
        self.use_colors = use_colors and sys.stdout.isatty()
        self.compact = compact

    def set_level(self, level: str) -> None:
        """Change the minimum level of this logger."""
        self.level = self.LEVELS.get(level.upper(), self.level)

    @classmethod
    def set_floor(cls, level: str) -> None:
        """Raise the minimum level of every logger (e.g. WARNING for --quiet)."""
        cls.floor = cls.LEVELS.get(level.upper(), 0)

    def enabled(self, level: str) -> bool:
        return self.LEVELS.get(level, 0) >= max(self.level, Logger.floor)

    def _log(self, level: str, message: str, color: str = "",
             symbol: str = "") -> None:
        if not self.enabled(level):
            return

        if self.compact:
            formatted = f"  {symbol} {message}" if symbol else f"  {message}"
        else:
            timestamp = datetime.now().strftime("%H:%M:%S")
            if symbol:
                formatted = f"[{timestamp}] {symbol} {message}"
            else:
                formatted = f"[{timestamp}] [{level}] {message}"

        if color and self.use_colors:
            print(f"{color}{formatted}{Colors.RESET}")
        else:
            print(formatted)

        if self.log_file:
            with open(self.log_file, "a") as f:
                f.write(formatted + "\n")

    def debug(self, message: str) -> None:
        """Log debug message (dimmed)."""
        self._log("DEBUG", message, Colors.DIM, self.SYMBOLS["debug"])

    def info(self, message: str) -> None:
        """Log info message."""
        self._log("INFO", message)

    def phase(self, message: str) -> None:
        """Log the start of an analysis phase."""
        self._log("INFO", message, Colors.CYAN, self.SYMBOLS["phase"])

    def success(self, message: str) -> None:
        """Log success message (green with checkmark)."""
        self._log("INFO", message, Colors.GREEN, self.SYMBOLS["success"])

    def warning(self, message: str) -> None:
        """Log warning message (yellow with warning symbol)."""
        self._log("WARNING", message, Colors.YELLOW, self.SYMBOLS["warning"])

    def error(self, message: str) -> None:
        """Log error message (red with X)."""
        self._log("ERROR", message, Colors.RED, self.SYMBOLS["error"])

    def header(self, text: str, char: str = "═", width: int = 60) -> None:
        """Print a section header."""
        if not self.enabled("INFO"):
            return
        print()
        print(char * width)
        if self.use_colors:
            print(f"  {Colors.BOLD}{text}{Colors.RESET}")
        else:
            print(f"  {text}")
        print(char * width)

    def section(self, text: str) -> None:
        """Print a subsection header."""
        if not self.enabled("INFO"):
            return
        print()
        if self.use_colors:
            print(f"  {Colors.CYAN}▸ {text}{Colors.RESET}")
        else:
            print(f"  ▸ {text}")

    def item(self, key: str, value: Any = None, indent: int = 0) -> None:
        """Print a key-value item."""
        if not self.enabled("INFO"):
            return
        prefix = "  " * (indent + 1) + "• "
        if value is not None:
            print(f"{prefix}{key}: {value}")
        else:
            print(f"{prefix}{key}")


# Global logger instance
log = Logger()


# =============================================================================
# JSON Utilities
# =============================================================================

def load_json(path: Path) -> Dict:
    """Load JSON file with error handling."""
    try:
        with open(path, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        log.warning(f"JSON file not found: {path}")
        return {}
    except json.JSONDecodeError as e:
        log.error(f"Invalid JSON in {path}: {e}")
        return {}


# =============================================================================
# Output Formatting Utilities
# =============================================================================

def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 0:
        return "0s"

    mins, secs = divmod(int(seconds), 60)
    hours, mins = divmod(mins, 60)

    if hours > 0:
        return f"{hours}h {mins}m {secs}s"
    elif mins > 0:
        return f"{mins}m {secs}s"
    elif seconds >= 1:
        return f"{seconds:.2f}s"
    else:
        return f"{seconds*1000:.0f}ms"


def format_count(value: int) -> str:
    """Format an integer with thousands separators."""
    return f"{value:,}"


def format_percent(fraction: float, digits: int = 4) -> str:
    """Format a fraction in [0, 1] as a percentage string."""
    return f"{fraction * 100:.{digits}f}%"


# =============================================================================
# Main (for standalone usage)
# =============================================================================

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="airnet utilities")
    parser.add_argument("--defaults", action="store_true", help="Show analysis defaults")
    parser.add_argument("--regions", action="store_true", help="Show country -> region table")
    args = parser.parse_args()

    if args.defaults:
        print(f"Betweenness sources: {BETWEENNESS_MAX_SOURCES}")
        print(f"Closeness sources:   {CLOSENESS_MAX_SOURCES}")
        print(f"Diameter sources:    {DIAMETER_MAX_SOURCES}")
        print(f"Efficiency sources:  {EFFICIENCY_MAX_SOURCES}")
        print(f"Redundancy sources:  {REDUNDANCY_MAX_SOURCES}")
        print(f"PageRank:            {PAGERANK_ITERATIONS} iterations, damping {PAGERANK_DAMPING}")
        print(f"Community rounds:    {COMMUNITY_MAX_ROUNDS}")

    if args.regions:
        for country, region in sorted(COUNTRY_REGIONS.items()):
            print(f"  {country:<20} {region}")
        print(f"  {'(anything else)':<20} {REGION_OTHER}")
