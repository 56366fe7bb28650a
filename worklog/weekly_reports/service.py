"""Weekly report service — full-width conversion and fixed-column wrapping.

Report text is pasted into a form that renders 36 display columns, where
full-width characters take two columns and half-width ones take one.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import Optional

from worklog.config import settings
from worklog.weekly_reports.schemas import WeeklyReportFormatResponse

logger = logging.getLogger(__name__)

_PRINTABLE_ASCII = re.compile(r"[!-~]")
_FULL_WIDTH_OFFSET = 0xFEE0
_IDEOGRAPHIC_SPACE = "　"

# Reports run Saturday → Friday (Monday is 0)
_WEEK_START_WEEKDAY = 5


def char_width(char: str) -> int:
    return 2 if ord(char) > 0xFF else 1


class WeeklyReportService:
    """Pure text transforms for weekly report submission."""

    @staticmethod
    def to_full_width(text: str) -> str:
        """``"AB 12"`` → ``"ＡＢ　１２"``; anything else passes through."""
        shifted = _PRINTABLE_ASCII.sub(
            lambda m: chr(ord(m.group()) + _FULL_WIDTH_OFFSET), text
        )
        return shifted.replace(" ", _IDEOGRAPHIC_SPACE)

    @staticmethod
    def wrap_text(text: str, width: Optional[int] = None) -> list[str]:
        """Greedy wrap at ``width`` display columns.

        A newline always ends the current line, so blank lines survive.
        A trailing partial line is kept only if it is non-empty.
        """
        width = width or settings.WEEKLY_REPORT_COLUMNS
        lines: list[str] = []
        current: list[str] = []
        current_width = 0

        for char in text:
            if char == "\n":
                lines.append("".join(current))
                current, current_width = [], 0
                continue

            w = char_width(char)
            if current_width + w > width:
                lines.append("".join(current))
                current, current_width = [char], w
            else:
                current.append(char)
                current_width += w

        if current:
            lines.append("".join(current))
        return lines

    @staticmethod
    def format_weekly_report(
        text: str, width: Optional[int] = None
    ) -> WeeklyReportFormatResponse:
        """Full-width conversion followed by wrapping, ready to paste."""
        lines = WeeklyReportService.wrap_text(
            WeeklyReportService.to_full_width(text), width
        )
        logger.debug("Formatted weekly report: %d chars → %d lines", len(text), len(lines))
        return WeeklyReportFormatResponse(
            text="\n".join(lines), lines=lines, line_count=len(lines),
        )

    @staticmethod
    def week_range(day: date) -> tuple[date, date]:
        """Saturday..Friday week containing ``day``."""
        offset = (day.weekday() - _WEEK_START_WEEKDAY) % 7
        start = day - timedelta(days=offset)
        return start, start + timedelta(days=6)
