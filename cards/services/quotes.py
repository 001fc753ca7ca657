"""
Developer quotes for the quote card.
"""
import logging
import random
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from django.core.cache import cache

logger = logging.getLogger(__name__)

QUOTES: List[Dict[str, str]] = [
    {"quote": "First, solve the problem. Then, write the code.", "author": "John Johnson"},
    {"quote": "Code is like humor. When you have to explain it, it's bad.", "author": "Cory House"},
    {"quote": "Make it work, make it right, make it fast.", "author": "Kent Beck"},
    {"quote": "Clean code always looks like it was written by someone who cares.", "author": "Robert C. Martin"},
    {"quote": "Programming isn't about what you know; it's about what you can figure out.", "author": "Chris Pine"},
    {"quote": "Any fool can write code that a computer can understand.", "author": "Martin Fowler"},
    {"quote": "Talk is cheap. Show me the code.", "author": "Linus Torvalds"},
    {"quote": "Simplicity is prerequisite for reliability.", "author": "Edsger W. Dijkstra"},
    {"quote": "The best error message is the one that never shows up.", "author": "Thomas Fuchs"},
    {"quote": "Deleted code is debugged code.", "author": "Jeff Sickel"},
    {"quote": "Every day is a new opportunity to code something amazing.", "author": "Daily Dev"},
]


class QuoteService:
    """Serves a stable quote of the day and random quotes."""

    def __init__(self, quotes: Optional[List[Dict[str, str]]] = None, cache_backend=None):
        self.quotes = quotes or QUOTES
        self.cache = cache_backend or cache

    def quote_of_the_day(self, day: Optional[date] = None) -> Dict[str, str]:
        """Same quote for every request on a given date."""
        day = day or date.today()
        cache_key = f"quote_of_the_day_{day.isoformat()}"
        cached = self.cache.get(cache_key)
        if cached:
            return cached

        quote = dict(self.quotes[day.toordinal() % len(self.quotes)])
        self.cache.set(cache_key, quote, self._seconds_until_tomorrow(day))
        logger.info("Selected quote of the day for %s", day.isoformat())
        return quote

    def random_quote(self) -> Dict[str, str]:
        return dict(random.choice(self.quotes))

    @staticmethod
    def _seconds_until_tomorrow(day: date) -> int:
        midnight = datetime.combine(day + timedelta(days=1), time.min)
        remaining = int((midnight - datetime.now()).total_seconds())
        return max(remaining, 60)
