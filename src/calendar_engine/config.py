#!/usr/bin/env python3
"""
Agricultural Calendar Engine - Parser Options
Type-safe tuning knobs for the header scan and diagnostics
"""

from dataclasses import dataclass

from .exceptions import ConfigError


@dataclass(frozen=True)
class ParserOptions:
    """Processing options for calendar parsing"""
    header_scan_rows: int = 10
    min_header_matches: int = 3
    title_scan_rows: int = 5
    max_cell_logs: int = 5
    force_fallback: bool = True

    def __post_init__(self):
        """Validate numeric options on initialization"""
        for name in ('header_scan_rows', 'min_header_matches', 'title_scan_rows'):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.max_cell_logs, int) or self.max_cell_logs < 0:
            raise ConfigError(f"max_cell_logs must be a non-negative integer, got {self.max_cell_logs!r}")


DEFAULT_OPTIONS = ParserOptions()
