#!/usr/bin/env python3
"""
Agricultural Calendar Engine - Diagnostics
Call-scoped diagnostic context passed explicitly into one parse call
"""

import logging
from dataclasses import dataclass, field
from typing import List


@dataclass
class DiagnosticContext:
    """
    Collects notes for a single parse call and bounds verbose per-cell logging.

    One instance belongs to one assemble call; nothing here is shared between calls.
    """
    max_cell_logs: int = 5
    cell_logs_emitted: int = 0
    skipped_rows: List[int] = field(default_factory=list)
    forced_activities: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)

    def log_cell(self, logger: logging.Logger, message: str) -> None:
        """Emit a DEBUG cell message until the per-call budget is used up."""
        if self.cell_logs_emitted >= self.max_cell_logs:
            return
        self.cell_logs_emitted += 1
        logger.debug(message)

    def record_skipped_row(self, row: int) -> None:
        self.skipped_rows.append(row)

    def record_forced_activity(self, activity_name: str) -> None:
        self.forced_activities.append(activity_name)

    def add_note(self, message: str) -> None:
        self.notes.append(message)

    def to_dict(self) -> dict:
        """Convert to dictionary representation"""
        return {
            'cell_logs_emitted': self.cell_logs_emitted,
            'skipped_rows': list(self.skipped_rows),
            'forced_activities': list(self.forced_activities),
            'notes': list(self.notes),
        }
