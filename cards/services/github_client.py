"""
GitHub API client supplying the data payloads of the cards.
"""
import logging
import requests
from dataclasses import dataclass, asdict, field
from typing import List, Dict, Optional
from datetime import date, datetime, timedelta, timezone
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

LANGUAGE_COLORS = {
    'TypeScript': '#3178C6',
    'JavaScript': '#F7DF1E',
    'Python': '#3776AB',
    'Rust': '#DEA584',
    'Go': '#00ADD8',
    'Java': '#B07219',
    'C++': '#F34B7D',
    'C': '#555555',
    'C#': '#239120',
    'Ruby': '#CC342D',
    'PHP': '#4F5D95',
    'Swift': '#FA7343',
    'Kotlin': '#A97BFF',
    'Dart': '#00B4AB',
    'Vue': '#41B883',
    'CSS': '#563D7C',
    'HTML': '#E34C26',
    'Shell': '#89E051',
    'Scala': '#C22D40',
}
DEFAULT_LANGUAGE_COLOR = '#8B8B8B'

ACTIVITY_DAYS = 30
CALENDAR_DAYS = 53 * 7
MAX_REPO_PAGES = 3
TOP_LANGUAGES = 6


def get_language_color(language: str) -> str:
    return LANGUAGE_COLORS.get(language, DEFAULT_LANGUAGE_COLOR)


@dataclass
class GitHubCardData:
    """Data transfer object for the card payloads, in the renderer's wire shape."""
    username: str
    name: str
    avatar_url: str
    created_at: str
    stats: Dict[str, int]  # {"totalStars": 10, "totalForks": 2, ...}
    languages: List[Dict]  # [{"name": "Python", "percentage": 44, "color": "#3776AB"}, ...]
    streak: Dict  # {"current": 3, "longest": 12, "total": 420, "startDate": "2024-01-15", ...}
    activity: List[int] = field(default_factory=list)  # last 30 days, oldest first

    def payloads(self) -> Dict:
        return {
            'stats': self.stats,
            'languages': self.languages,
            'streak': self.streak,
            'activity': self.activity,
        }


class GitHubClient:
    """Client for interacting with GitHub API."""

    BASE_URL = "https://api.github.com"
    CONTRIBUTIONS_URL = "https://github-contributions-api.deno.dev"

    def __init__(self, token: Optional[str] = None, cache_backend=None):
        self.token = token or getattr(settings, 'GITHUB_TOKEN', None)
        self.cache = cache_backend or cache
        self.headers = {
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'Readme-Stat-Cards',
        }
        if self.token:
            self.headers['Authorization'] = f'token {self.token}'

    def _get(self, endpoint: str, params: Optional[Dict] = None):
        """Make a GET request to GitHub API."""
        url = f"{self.BASE_URL}{endpoint}"
        response = requests.get(url, headers=self.headers, params=params, timeout=10)
        response.raise_for_status()
        return response.json()

    def get_card_data(self, username: str) -> GitHubCardData:
        """
        Fetch every card payload for a user.
        Uses caching to avoid excessive API calls.
        """
        cache_key = f"github_card_data_{username.lower()}"
        cached = self.cache.get(cache_key)
        if cached:
            return GitHubCardData(**cached)

        try:
            user_data = self._get(f"/users/{username}")
            repos = self._get_all_pages(f"/users/{username}/repos", {"type": "owner", "sort": "updated"})

            own_repos = [repo for repo in repos if not repo.get('fork')]
            total_stars = sum(repo.get('stargazers_count', 0) for repo in own_repos)
            total_forks = sum(repo.get('forks_count', 0) for repo in own_repos)

            daily = self._get_daily_contributions(username)
            streaks = self._calculate_streaks(daily)

            data = GitHubCardData(
                username=user_data.get('login') or username,
                name=user_data.get('name') or username,
                avatar_url=user_data.get('avatar_url', ''),
                created_at=user_data.get('created_at', ''),
                stats={
                    'totalStars': total_stars,
                    'totalForks': total_forks,
                    'publicRepos': user_data.get('public_repos', 0),
                    'followers': user_data.get('followers', 0),
                    'following': user_data.get('following', 0),
                },
                languages=self._aggregate_languages(own_repos),
                streak={
                    'current': streaks['current'],
                    'longest': streaks['longest'],
                    'total': sum(item['count'] for item in daily),
                    'startDate': streaks['current_start'],
                    'longestStreakStart': streaks['longest_start'],
                    'longestStreakEnd': streaks['longest_end'],
                    'days': [item['count'] for item in daily[-CALENDAR_DAYS:]],
                },
                activity=[item['count'] for item in daily[-ACTIVITY_DAYS:]],
            )

            cache_timeout = getattr(settings, 'GITHUB_CACHE_TIMEOUT', 3600)
            self.cache.set(cache_key, asdict(data), cache_timeout)
            logger.info("Fetched card data for %s (%d repos)", username, len(repos))
            return data

        except requests.exceptions.HTTPError as e:
            if e.response is not None:
                if e.response.status_code == 404:
                    raise ValueError(f"User '{username}' not found on GitHub")
                elif e.response.status_code == 403:
                    error_msg = "GitHub API rate limit exceeded."
                    error_msg += " RATE_LIMIT_WITH_TOKEN" if self.token else " RATE_LIMIT_NO_TOKEN"
                    reset = e.response.headers.get('X-RateLimit-Reset') if e.response.headers else None
                    if reset:
                        reset_time = datetime.fromtimestamp(int(reset), tz=timezone.utc)
                        error_msg += f" Resets at {reset_time.strftime('%H:%M:%S UTC')}"
                    raise ValueError(error_msg)
                else:
                    raise ValueError(f"GitHub API error: {e.response.status_code}")
            raise ValueError(f"GitHub API error: {str(e)}")
        except requests.exceptions.RequestException as e:
            raise ValueError(f"Network error: {str(e)}")

    def _get_all_pages(self, endpoint: str, params: Optional[Dict] = None) -> List[Dict]:
        """Fetch up to MAX_REPO_PAGES pages of results."""
        params = dict(params or {})
        params['per_page'] = 100
        params['page'] = 1

        all_items = []
        while params['page'] <= MAX_REPO_PAGES:
            data = self._get(endpoint, params)
            if not data:
                break
            all_items.extend(data)
            if len(data) < params['per_page']:
                break
            params['page'] += 1

        return all_items

    def _aggregate_languages(self, repos: List[Dict]) -> List[Dict]:
        """Share of repositories per primary language."""
        language_counts = {}
        for repo in repos:
            if repo.get('language'):
                lang = repo['language']
                language_counts[lang] = language_counts.get(lang, 0) + 1

        total = sum(language_counts.values())
        if total == 0:
            return []

        languages = [
            {"name": lang, "percentage": round(count / total * 100), "color": get_language_color(lang)}
            for lang, count in sorted(language_counts.items(), key=lambda x: x[1], reverse=True)
        ]
        return languages[:TOP_LANGUAGES]

    def _get_daily_contributions(self, username: str) -> List[Dict]:
        """
        Daily contribution counts, oldest first, from the public contributions feed.
        An unavailable feed yields an empty series; the cards then show zeros.
        """
        try:
            response = requests.get(f"{self.CONTRIBUTIONS_URL}/{username}.json", timeout=10)
            response.raise_for_status()
            payload = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning("Could not fetch contributions for %s: %s", username, e)
            return []

        days = []
        for week in payload.get('contributions', []):
            entries = week if isinstance(week, list) else [week]
            for day in entries:
                if not isinstance(day, dict) or 'date' not in day:
                    continue
                count = day.get('contributionCount', day.get('count', 0)) or 0
                days.append({'date': day['date'][:10], 'count': int(count)})

        today = date.today().isoformat()
        days = [day for day in days if day['date'] <= today]
        days.sort(key=lambda day: day['date'])
        return days

    def _calculate_streaks(self, daily_contributions: List[Dict]) -> Dict:
        """Calculate current and longest contribution streaks."""
        empty = {
            'current': 0,
            'longest': 0,
            'current_start': None,
            'longest_start': None,
            'longest_end': None,
        }
        contribution_dates = sorted(
            datetime.strptime(item['date'], '%Y-%m-%d').date()
            for item in daily_contributions if item['count'] > 0
        )
        if not contribution_dates:
            return empty

        date_set = set(contribution_dates)
        today = date.today()

        # Current streak counts back from today, or from yesterday while today is still empty
        check_date = today if today in date_set else today - timedelta(days=1)
        current_streak = 0
        current_start = None
        while check_date in date_set:
            current_streak += 1
            current_start = check_date
            check_date -= timedelta(days=1)

        longest_streak = 1
        longest_start = longest_end = contribution_dates[0]
        streak_length = 1
        for i in range(1, len(contribution_dates)):
            if (contribution_dates[i] - contribution_dates[i - 1]).days == 1:
                streak_length += 1
            else:
                streak_length = 1
            if streak_length > longest_streak:
                longest_streak = streak_length
                longest_start = contribution_dates[i - streak_length + 1]
                longest_end = contribution_dates[i]

        return {
            'current': current_streak,
            'longest': longest_streak,
            'current_start': current_start.isoformat() if current_start else None,
            'longest_start': longest_start.isoformat(),
            'longest_end': longest_end.isoformat(),
        }
