"""
Render parameters and their normalization from query strings or JSON bodies.
"""
import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ..themes import THEMES, get_theme, DEFAULT_THEME

CARD_TYPES = ('stats', 'languages', 'streak', 'activity', 'quote', 'custom', 'banner', 'contribution')
DEFAULT_CARD_TYPE = 'stats'

# (width, height) per card type
CARD_SIZES = {
    'languages': (300, 300),
    'contribution': (620, 300),
}
DEFAULT_CARD_SIZE = (495, 195)

DEFAULT_RADIUS = 12
DEFAULT_PADDING = 25
DEFAULT_ANIMATION = 'fadeIn'
DEFAULT_SPEED = 'normal'

FALLBACK_QUOTE = 'Code is poetry.'
FALLBACK_AUTHOR = 'Anonymous'

_HEX_COLOR = re.compile(r'^#?(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')
_FUNC_COLOR = re.compile(r'^(?:rgb|rgba|hsl|hsla)\(\s*[0-9.,%\s]+\)$')
_NAMED_COLOR = re.compile(r'^[a-zA-Z]{3,20}$')
_FALSE_VALUES = ('false', '0', 'no', 'off')


@dataclass
class CardColors:
    background: str
    primary: str
    secondary: str
    text: str
    border: str


@dataclass
class Padding:
    top: int = DEFAULT_PADDING
    right: int = DEFAULT_PADDING
    bottom: int = DEFAULT_PADDING
    left: int = DEFAULT_PADDING


@dataclass
class AnimationSettings:
    enabled: bool = True
    kind: str = DEFAULT_ANIMATION
    speed: str = DEFAULT_SPEED


@dataclass
class GradientSpec:
    enabled: bool = False
    type: str = 'linear'  # linear | radial
    angle: float = 135
    start: str = ''
    end: str = ''


@dataclass
class StatsPayload:
    total_stars: int = 0
    total_forks: int = 0
    public_repos: int = 0
    followers: int = 0
    following: int = 0


@dataclass
class LanguageEntry:
    name: str
    percentage: float
    color: Optional[str] = None


@dataclass
class StreakPayload:
    current: int = 0
    longest: int = 0
    total: int = 0
    start_date: Optional[str] = None
    longest_streak_start: Optional[str] = None
    longest_streak_end: Optional[str] = None
    days: List[int] = field(default_factory=list)


@dataclass
class QuotePayload:
    quote: str = FALLBACK_QUOTE
    author: str = FALLBACK_AUTHOR


@dataclass
class RenderParams:
    """Fully resolved input of a single card render."""
    card_type: str
    username: str
    colors: CardColors
    width: int
    height: int
    border_radius: int = DEFAULT_RADIUS
    padding: Padding = field(default_factory=Padding)
    show_border: bool = True
    animation: AnimationSettings = field(default_factory=AnimationSettings)
    gradient: GradientSpec = field(default_factory=GradientSpec)
    stats: StatsPayload = field(default_factory=StatsPayload)
    languages: List[LanguageEntry] = field(default_factory=list)
    streak: StreakPayload = field(default_factory=StreakPayload)
    activity: List[int] = field(default_factory=list)
    quote: QuotePayload = field(default_factory=QuotePayload)
    custom_text: str = ''
    font_size: Optional[int] = None
    banner_name: str = ''
    banner_description: str = ''
    wave_style: str = 'wave'
    demo: bool = False
    today: Optional[date] = None


def resolve_card_type(value: Any) -> str:
    """Return a known card type, falling back to stats."""
    if isinstance(value, str) and value in CARD_TYPES:
        return value
    return DEFAULT_CARD_TYPE


def sanitize_color(value: Any, default: str) -> str:
    """Accept hex, rgb()/hsl() and named colors; anything else yields the default."""
    if not isinstance(value, str):
        return default
    value = value.strip()
    if _HEX_COLOR.match(value):
        return value if value.startswith('#') else f'#{value}'
    if _FUNC_COLOR.match(value) or _NAMED_COLOR.match(value):
        return value
    return default


def _first(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != '':
            return value
    return None


def _float(value: Any, default: Optional[float]) -> Optional[float]:
    """Finite float or the default; inf, nan and out-of-range numbers are rejected."""
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(result):
        return default
    return result


def _int(value: Any, default: int, minimum: Optional[int] = 0) -> int:
    result = _float(value, None)
    if result is None:
        return default
    result = int(result)
    if minimum is not None and result < minimum:
        return default
    return result


def _bool(value: Any, default: bool) -> bool:
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_VALUES


def _count(value: Any) -> int:
    return max(_int(value, 0, minimum=None), 0)


def _text(value: Any, default: str = '') -> str:
    if value is None:
        return default
    return str(value)


def _iso_date(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


def parse_stats(raw: Any) -> StatsPayload:
    if not isinstance(raw, Mapping):
        return StatsPayload()
    return StatsPayload(
        total_stars=_count(raw.get('totalStars')),
        total_forks=_count(raw.get('totalForks')),
        public_repos=_count(raw.get('publicRepos')),
        followers=_count(raw.get('followers')),
        following=_count(raw.get('following')),
    )


def parse_languages(raw: Any) -> List[LanguageEntry]:
    if not isinstance(raw, (list, tuple)):
        return []
    languages = []
    for item in raw:
        if not isinstance(item, Mapping) or not item.get('name'):
            continue
        languages.append(LanguageEntry(
            name=str(item['name']),
            percentage=min(max(_float(item.get('percentage'), 0.0), 0.0), 100.0),
            color=sanitize_color(item.get('color'), None),
        ))
    return languages


def parse_day_counts(raw: Any) -> List[int]:
    """Daily counts from ints, {"count": n} records or a comma-separated string."""
    if isinstance(raw, str):
        raw = [part for part in raw.split(',') if part.strip()]
    if not isinstance(raw, (list, tuple)):
        return []
    counts = []
    for item in raw:
        if isinstance(item, Mapping):
            item = item.get('count', item.get('contributionCount', 0))
        counts.append(_count(item))
    return counts


def parse_streak(raw: Any) -> StreakPayload:
    if not isinstance(raw, Mapping):
        return StreakPayload()
    return StreakPayload(
        current=_count(raw.get('current')),
        longest=_count(raw.get('longest')),
        total=_count(raw.get('total')),
        start_date=_iso_date(raw.get('startDate')),
        longest_streak_start=_iso_date(raw.get('longestStreakStart')),
        longest_streak_end=_iso_date(raw.get('longestStreakEnd')),
        days=parse_day_counts(raw.get('days')),
    )


def parse_quote(raw: Any) -> QuotePayload:
    if not isinstance(raw, Mapping) or not raw.get('quote'):
        return QuotePayload()
    return QuotePayload(
        quote=str(raw['quote']),
        author=_text(raw.get('author')) or FALLBACK_AUTHOR,
    )


def parse_padding(raw: Mapping) -> Padding:
    base = _int(raw.get('padding'), DEFAULT_PADDING)
    return Padding(
        top=_int(raw.get('paddingTop'), base),
        right=_int(raw.get('paddingRight'), base),
        bottom=_int(raw.get('paddingBottom'), base),
        left=_int(raw.get('paddingLeft'), base),
    )


def normalize_params(raw: Mapping) -> RenderParams:
    """
    Merge caller-supplied fields over defaults.

    Accepts the flat camelCase record used by the query string and the JSON
    body alike. Never raises: unknown values fall back to their defaults.
    """
    card_type = resolve_card_type(_first(raw, 'type', 'cardType'))

    theme_id = _text(raw.get('theme'), DEFAULT_THEME)
    palette = get_theme(theme_id if theme_id in THEMES else DEFAULT_THEME).colors()
    colors = CardColors(
        background=sanitize_color(_first(raw, 'bg', 'bgColor'), palette['background']),
        primary=sanitize_color(_first(raw, 'primary', 'primaryColor'), palette['primary']),
        secondary=sanitize_color(_first(raw, 'secondary', 'secondaryColor'), palette['secondary']),
        text=sanitize_color(_first(raw, 'text', 'textColor'), palette['text']),
        border=sanitize_color(_first(raw, 'border', 'borderColor'), palette['border']),
    )

    default_width, default_height = CARD_SIZES.get(card_type, DEFAULT_CARD_SIZE)
    width = _int(raw.get('width'), default_width, minimum=1)
    height = _int(raw.get('height'), default_height, minimum=1)

    animation = AnimationSettings(
        enabled=_bool(raw.get('animationEnabled'), True),
        kind=_text(_first(raw, 'animation'), DEFAULT_ANIMATION),
        speed=_text(_first(raw, 'speed', 'animationSpeed'), DEFAULT_SPEED),
    )

    gradient_raw = raw.get('gradient')
    if isinstance(gradient_raw, Mapping):
        gradient_fields = {
            'gradient': gradient_raw.get('enabled', True),
            'gradientType': gradient_raw.get('type'),
            'gradientAngle': gradient_raw.get('angle'),
            'gradientStart': gradient_raw.get('start'),
            'gradientEnd': gradient_raw.get('end'),
        }
    else:
        gradient_fields = raw
    gradient_type = _text(gradient_fields.get('gradientType'), 'linear')
    gradient = GradientSpec(
        enabled=_bool(gradient_fields.get('gradient'), False),
        type=gradient_type if gradient_type in ('linear', 'radial') else 'linear',
        angle=_float(gradient_fields.get('gradientAngle'), 135),
        start=sanitize_color(gradient_fields.get('gradientStart'), colors.primary),
        end=sanitize_color(gradient_fields.get('gradientEnd'), colors.secondary),
    )

    font_size = _int(raw.get('fontSize'), 0)

    return RenderParams(
        card_type=card_type,
        username=_text(raw.get('username')).strip(),
        colors=colors,
        width=width,
        height=height,
        border_radius=_int(_first(raw, 'radius', 'borderRadius'), DEFAULT_RADIUS),
        padding=parse_padding(raw),
        show_border=_bool(raw.get('showBorder'), True),
        animation=animation,
        gradient=gradient,
        stats=parse_stats(raw.get('stats')),
        languages=parse_languages(raw.get('languages')),
        streak=parse_streak(raw.get('streak')),
        activity=parse_day_counts(raw.get('activity')),
        quote=parse_quote(raw.get('quote')),
        custom_text=_text(raw.get('customText')),
        font_size=font_size or None,
        banner_name=_text(raw.get('bannerName')),
        banner_description=_text(raw.get('bannerDescription')),
        wave_style=_text(raw.get('waveStyle'), 'wave'),
        demo=_bool(raw.get('demo'), False),
    )


def params_to_dict(params: RenderParams) -> Dict[str, Any]:
    """Flat summary used in log lines."""
    return {
        'type': params.card_type,
        'username': params.username,
        'width': params.width,
        'height': params.height,
        'animation': params.animation.kind,
        'speed': params.animation.speed,
    }
