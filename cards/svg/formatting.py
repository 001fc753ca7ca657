"""
Text and number formatting shared by the card builders.
"""
import math
from datetime import date
from typing import List, Optional

QUOTE_LINE_CHARS = 38
QUOTE_MAX_LINES = 4
ELLIPSIS = '...'


def format_number(num) -> str:
    """
    Compact large counts: 999 -> "999", 1500 -> "1.5K", 2300000 -> "2.3M".

    The decimal is truncated, never rounded up, so 999999 stays "999.9K".
    """
    num = int(num or 0)
    if num >= 1000000:
        tenths = num * 10 // 1000000
        return f"{tenths // 10}.{tenths % 10}M"
    if num >= 1000:
        tenths = num * 10 // 1000
        return f"{tenths // 10}.{tenths % 10}K"
    return str(num)


def format_value(value) -> str:
    """Render a number for an SVG attribute without float noise."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return '0'
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip('0').rstrip('.')


def format_seconds(value: float) -> str:
    return f"{format_value(round(value, 3))}s"


def wrap_text(text: str, width: int = QUOTE_LINE_CHARS, max_lines: int = QUOTE_MAX_LINES) -> List[str]:
    """
    Greedy word wrap. When the text needs more than max_lines lines, the
    last kept line is cut to fit an ellipsis within width.
    """
    lines: List[str] = []
    current = ''
    for word in text.split():
        while len(word) > width:
            if current:
                lines.append(current)
                current = ''
            lines.append(word[:width])
            word = word[width:]
        if not current:
            current = word
        elif len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}"
    if current:
        lines.append(current)

    if len(lines) > max_lines:
        lines = lines[:max_lines]
        last = lines[-1]
        if len(last) + len(ELLIPSIS) > width:
            last = last[:width - len(ELLIPSIS)].rstrip()
        lines[-1] = last + ELLIPSIS
    return lines


def parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_short_date(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


def format_date_range(start: Optional[str], end: Optional[str]) -> str:
    """Format as "Mon D - Mon D"; an absent end reads "Present"."""
    start_day = parse_date(start)
    end_day = parse_date(end)
    end_text = format_short_date(end_day) if end_day else 'Present'
    if start_day is None:
        return end_text
    return f"{format_short_date(start_day)} - {end_text}"
