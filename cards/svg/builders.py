"""
Per-type SVG card builders.

Every builder takes resolved RenderParams and returns a complete SVG
document. Builders never raise on missing data: each payload has a default.
"""
import random
from datetime import date
from typing import List, Tuple

from .animations import animation_css, resolve_animation, speed_multiplier, NO_ANIMATION
from .elements import FONT_FAMILY, sub, svg_root, to_string, linear_gradient, radial_gradient
from .formatting import (
    format_number, format_value as fv, format_seconds, format_short_date,
    format_date_range, wrap_text,
)
from .params import RenderParams
from .waves import get_wave_style, wave_keyframes, key_times, key_splines

LANGUAGE_ROWS = 6
LANGUAGE_BAR_MAX = 145
LANGUAGE_BAR_MIN = 20
LANGUAGE_SCALE_FLOOR = 35

# name -> (badge text, gradient start, gradient end)
LANGUAGE_BADGES = {
    'Python': ('Py', '#3572A5', '#FFD43B'),
    'JavaScript': ('JS', '#f7df1e', '#c9b800'),
    'TypeScript': ('TS', '#3178c6', '#235a97'),
    'Java': ('☕', '#b07219', '#e76f00'),
    'C++': ('C+', '#f34b7d', '#00599c'),
    'C': ('C', '#555555', '#a8b9cc'),
    'C#': ('C#', '#178600', '#68217a'),
    'Go': ('Go', '#00ADD8', '#5dc9e2'),
    'Rust': ('🦀', '#dea584', '#b7410e'),
    'Ruby': ('💎', '#701516', '#cc342d'),
    'PHP': ('🐘', '#4F5D95', '#8892bf'),
    'Swift': ('Sw', '#F05138', '#ffac45'),
    'Kotlin': ('Kt', '#A97BFF', '#7f52ff'),
    'Dart': ('🎯', '#00B4AB', '#0175c2'),
    'HTML': ('H5', '#e34c26', '#f06529'),
    'CSS': ('C3', '#563d7c', '#264de4'),
    'SCSS': ('Sc', '#c6538c', '#cf649a'),
    'Shell': ('$_', '#89e051', '#4eaa25'),
    'Vue': ('V', '#41b883', '#35495e'),
    'Svelte': ('Sv', '#ff3e00', '#ff6a3d'),
    'Scala': ('Sc', '#c22d40', '#dc322f'),
    'Lua': ('Lu', '#000080', '#2c2d72'),
    'Haskell': ('λ', '#5e5086', '#8f4e8b'),
    'Jupyter Notebook': ('📓', '#DA5B0B', '#f37626'),
}
DEFAULT_BADGE = (None, '#8b949e', '#6e7681')

GRID_COLUMNS = 53
GRID_ROWS = 7
GRID_GAP = 2
LEVEL_OPACITY = (0.08, 0.3, 0.5, 0.75, 1.0)
CELL_STAGGER = 0.02

ACTIVITY_BARS = 30

QUOTE_LINE_HEIGHT = 22

DEFAULT_CUSTOM_TEXT = 'Your custom text here'
DEFAULT_CUSTOM_FONT_SIZE = 20
DEFAULT_BANNER_NAME = 'Hello, World!'
DEFAULT_BANNER_DESCRIPTION = 'Welcome to my GitHub profile'

FLAME_PATH = (
    'M0,-12 C5,-6 9,-2 7,4 C5.5,9 2.5,11 0,11 C-2.5,11 -5.5,9 -7,4 '
    'C-8.5,-1 -4,-3 -3,-8 C-1,-5 0,-4 0,-12 Z'
)


def _base_css(p: RenderParams) -> str:
    c = p.colors
    return (
        f".title{{font:600 18px {FONT_FAMILY};fill:{c.primary}}}"
        f".stat-value{{font:700 20px {FONT_FAMILY}}}"
        f".stat-label{{font:400 12px {FONT_FAMILY};fill:{c.text};opacity:0.7}}"
        f".text{{font:400 14px {FONT_FAMILY};fill:{c.text}}}"
        f".small{{font:400 11px {FONT_FAMILY};fill:{c.text};opacity:0.7}}"
    )


def _is_animated(p: RenderParams) -> bool:
    return resolve_animation(p.animation.kind, p.animation.enabled) != NO_ANIMATION


def _start_card(p: RenderParams, css: str = ''):
    """Root, stylesheet, defs and background shared by every card."""
    root = svg_root(p.width, p.height)
    stylesheet = _base_css(p) + css + animation_css(
        p.animation.kind, p.animation.speed, p.colors.primary, p.animation.enabled,
    )
    sub(root, 'style', stylesheet)
    defs = sub(root, 'defs')

    fill = p.colors.background
    if p.gradient.enabled:
        if p.gradient.type == 'radial':
            radial_gradient(defs, 'card-bg', p.gradient.start, p.gradient.end)
        else:
            linear_gradient(defs, 'card-bg', p.gradient.start, p.gradient.end, p.gradient.angle)
        fill = 'url(#card-bg)'

    sub(
        root, 'rect',
        x=1, y=1, width=max(p.width - 2, 0), height=max(p.height - 2, 0),
        rx=p.border_radius, fill=fill,
        stroke=p.colors.border if p.show_border else None,
        stroke_width=2 if p.show_border else None,
    )
    return root, defs


def _content_width(p: RenderParams) -> float:
    return max(p.width - p.padding.left - p.padding.right, 0)


def build_stats(p: RenderParams) -> str:
    root, _ = _start_card(p)
    username = p.username or 'developer'
    column = _content_width(p) / 4

    group = sub(root, 'g', transform=f"translate({fv(p.padding.left)}, {fv(p.padding.top)})")
    sub(group, 'text', f"{username}'s GitHub Stats", class_='title anim', y=18)

    stats = p.stats
    items = [
        ('⭐', stats.total_stars, 'Total Stars', p.colors.primary),
        ('📦', stats.public_repos, 'Repositories', p.colors.secondary),
        ('👥', stats.followers, 'Followers', p.colors.primary),
        ('🔀', stats.total_forks, 'Total Forks', p.colors.secondary),
    ]
    for i, (icon, value, label, color) in enumerate(items):
        block = sub(group, 'g', transform=f"translate({fv(column * i)}, 60)", class_=f"anim d{i + 1}")
        sub(block, 'text', f"{icon} {format_number(value)}", class_='stat-value', fill=color)
        sub(block, 'text', label, class_='stat-label', y=22)
    return to_string(root)


def language_bar_width(percentage: float, top_percentage: float) -> float:
    """Bar length relative to the leading language, never thinner than the minimum."""
    scale = max(top_percentage, LANGUAGE_SCALE_FLOOR)
    return max(percentage / scale * LANGUAGE_BAR_MAX, LANGUAGE_BAR_MIN)


def language_badge(name: str) -> Tuple[str, str, str]:
    badge, start, end = LANGUAGE_BADGES.get(name, DEFAULT_BADGE)
    return badge or name[:2], start, end


def build_languages(p: RenderParams) -> str:
    c = p.colors
    css = (
        f".lang-name{{font:600 12px {FONT_FAMILY};fill:{c.text}}}"
        f".lang-pct{{font:600 11px {FONT_FAMILY}}}"
        f".badge{{font:700 10px {FONT_FAMILY};fill:#ffffff}}"
    )
    root, defs = _start_card(p, css)
    sub(root, 'text', 'Most Used Languages', class_='title anim', x=p.padding.left, y=p.padding.top + 18)

    languages = p.languages[:LANGUAGE_ROWS]
    if not languages:
        sub(root, 'text', 'No language data', class_='small anim d1', x=p.padding.left, y=p.padding.top + 50)
        return to_string(root)

    top = max(lang.percentage for lang in languages)
    width = _content_width(p)
    for i, lang in enumerate(languages):
        badge, start, end = language_badge(lang.name)
        gradient_id = f"lang-{i}"
        linear_gradient(defs, gradient_id, start, end)

        row = sub(
            root, 'g',
            transform=f"translate({fv(p.padding.left)}, {fv(p.padding.top + 35 + i * 36)})",
            class_=f"anim d{min(i + 1, 5)}",
        )
        sub(row, 'rect', width=width, height=30, rx=15, fill=c.primary, fill_opacity=0.08)
        sub(row, 'circle', cx=15, cy=15, r=11, fill=f"url(#{gradient_id})")
        sub(row, 'text', badge, class_='badge', x=15, y=19, text_anchor='middle')
        sub(row, 'text', lang.name, class_='lang-name', x=32, y=13)
        sub(
            row, 'text', f"{fv(lang.percentage)}%", class_='lang-pct',
            x=width - 10, y=13, text_anchor='end', fill=lang.color or c.secondary,
        )
        sub(row, 'rect', x=32, y=19, width=LANGUAGE_BAR_MAX, height=5, rx=2.5, fill=c.text, fill_opacity=0.1)
        sub(
            row, 'rect', x=32, y=19, width=language_bar_width(lang.percentage, top),
            height=5, rx=2.5, fill=f"url(#{gradient_id})",
        )
    return to_string(root)


def build_streak(p: RenderParams) -> str:
    c = p.colors
    multiplier = speed_multiplier(p.animation.speed)
    css = (
        f".streak-num{{font:700 28px {FONT_FAMILY}}}"
        f".streak-label{{font:600 13px {FONT_FAMILY};fill:{c.text}}}"
    )
    if _is_animated(p):
        css += (
            "@keyframes ringFade{0%{opacity:0}100%{opacity:1}}"
            f".ring{{opacity:0;animation:ringFade {format_seconds(0.5 * multiplier)} ease-out forwards;"
            f"animation-delay:{format_seconds(0.4 * multiplier)}}}"
        )
    root, defs = _start_card(p, css)

    today = p.today or date.today()
    streak = p.streak
    column = _content_width(p) / 3
    cy = p.padding.top + 45
    centers = [p.padding.left + column * (2 * i + 1) / 2 for i in range(3)]

    for i in (1, 2):
        x = p.padding.left + column * i
        sub(root, 'line', x1=x, y1=cy - 30, x2=x, y2=cy + 90, stroke=c.text, stroke_opacity=0.2)

    columns = [
        (format_number(streak.total), 'Total Contributions', f"As of {format_short_date(today)}", c.secondary),
        (format_number(streak.current), 'Current Streak', format_date_range(streak.start_date, None), c.primary),
        (
            format_number(streak.longest), 'Longest Streak',
            format_date_range(streak.longest_streak_start, streak.longest_streak_end), c.secondary,
        ),
    ]

    ring_x = centers[1]
    mask = sub(defs, 'mask', id='ring-mask')
    sub(mask, 'rect', x=0, y=0, width=p.width, height=p.height, fill='white')
    sub(mask, 'ellipse', cx=ring_x, cy=cy - 40, rx=13, ry=11, fill='black')
    ring = sub(root, 'g', mask='url(#ring-mask)', class_='ring')
    sub(ring, 'circle', cx=ring_x, cy=cy, r=40, fill='none', stroke=c.primary, stroke_width=5)
    flame = sub(root, 'g', transform=f"translate({fv(ring_x)}, {fv(cy - 40)})", class_='anim d2')
    sub(flame, 'path', d=FLAME_PATH, fill=c.primary)

    for i, (value, label, detail, color) in enumerate(columns):
        x = centers[i]
        group = sub(root, 'g', class_=f"anim d{i + 1}", text_anchor='middle')
        sub(group, 'text', value, class_='streak-num', x=x, y=cy + 10, fill=color)
        sub(group, 'text', label, class_='streak-label', x=x, y=cy + 65)
        sub(group, 'text', detail, class_='small', x=x, y=cy + 85)
    return to_string(root)


def contribution_level(count: int) -> int:
    """Intensity tier: 0 / 1 / 2-3 / 4-6 / 7+."""
    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 6:
        return 3
    return 4


def contribution_counts(p: RenderParams) -> Tuple[List[int], bool]:
    """
    Day counts for the full grid, oldest first. Missing leading days are zero
    unless demo mode asks for sample data; returns (counts, uses_sample_data).
    """
    cells = GRID_COLUMNS * GRID_ROWS
    days = list(p.streak.days)[-cells:]
    missing = cells - len(days)
    if missing <= 0:
        return days, False
    if not p.demo:
        return [0] * missing + days, False
    rng = random.Random(p.username or 'demo')
    filler = [rng.randint(1, 5) if rng.random() < 0.4 else 0 for _ in range(missing)]
    return filler + days, True


def build_contribution(p: RenderParams) -> str:
    c = p.colors
    animated = _is_animated(p)
    multiplier = speed_multiplier(p.animation.speed)
    css = ''
    if animated:
        css = (
            "@keyframes cellIn{0%{opacity:0}100%{opacity:1}}"
            f".cell{{opacity:0;animation:cellIn {format_seconds(0.3 * multiplier)} ease-out forwards}}"
        )
    root, _ = _start_card(p, css)

    title = f"{p.username}'s Contributions" if p.username else 'Contribution Graph'
    sub(root, 'text', title, class_='title anim', x=p.padding.left, y=p.padding.top + 18)

    counts, sample = contribution_counts(p)
    pitch = _content_width(p) / GRID_COLUMNS
    cell = max(pitch - GRID_GAP, 1)
    top = p.padding.top + 40

    grid = sub(root, 'g', transform=f"translate({fv(p.padding.left)}, {fv(top)})")
    for index, count in enumerate(counts):
        col, row = divmod(index, GRID_ROWS)
        level = contribution_level(count)
        sub(
            grid, 'rect',
            x=col * pitch, y=row * pitch, width=cell, height=cell, rx=2,
            fill=c.primary if level else c.text, fill_opacity=LEVEL_OPACITY[level],
            class_='cell' if animated else None,
            style=f"animation-delay:{format_seconds(col * CELL_STAGGER * multiplier)}" if animated else None,
        )

    footer_y = top + GRID_ROWS * pitch + 25
    total = sum(counts)
    summary = f"{format_number(total)} contributions in the last year"
    if sample:
        summary += ' (sample data)'
    sub(root, 'text', summary, class_='small anim d3', x=p.padding.left, y=footer_y)

    legend_x = p.width - p.padding.right - 5 * (cell + GRID_GAP) - 30
    legend = sub(root, 'g', class_='anim d4')
    sub(legend, 'text', 'Less', class_='small', x=legend_x - 6, y=footer_y, text_anchor='end')
    for level, opacity in enumerate(LEVEL_OPACITY):
        sub(
            legend, 'rect',
            x=legend_x + level * (cell + GRID_GAP), y=footer_y - cell, width=cell, height=cell, rx=2,
            fill=c.primary if level else c.text, fill_opacity=opacity,
        )
    sub(legend, 'text', 'More', class_='small', x=legend_x + 5 * (cell + GRID_GAP) + 4, y=footer_y)
    return to_string(root)


def activity_bars(p: RenderParams) -> List[int]:
    bars = list(p.activity)[-ACTIVITY_BARS:]
    if bars:
        return bars
    if p.demo:
        rng = random.Random(p.username or 'demo')
        return [rng.randint(0, 14) for _ in range(ACTIVITY_BARS)]
    return [0] * ACTIVITY_BARS


def build_activity(p: RenderParams) -> str:
    c = p.colors
    root, _ = _start_card(p)
    bars = activity_bars(p)
    count = len(bars)
    sub(root, 'text', f"Activity Graph (Last {count} Days)", class_='title anim', x=p.padding.left, y=p.padding.top + 10)

    bar_width = (p.width - 80) / ACTIVITY_BARS
    max_value = max(bars + [1])
    baseline = p.height - 65
    max_height = max(baseline - 50, 0)

    for i, value in enumerate(bars):
        height = value / max_value * max_height
        opacity = None
        if value > max_value * 0.6:
            color = c.primary
        elif value > max_value * 0.3:
            color = c.secondary
        else:
            color = c.primary
            opacity = 0.4
        sub(
            root, 'rect',
            x=40 + i * bar_width, y=baseline - height, width=max(bar_width - 2, 1), height=height,
            rx=2, fill=color, fill_opacity=opacity, class_=f"anim d{i * 5 // count + 1}",
        )

    sub(root, 'text', f"{count} days ago", class_='small', x=40, y=p.height - 15)
    sub(root, 'text', 'Today', class_='small', x=p.width - 40, y=p.height - 15, text_anchor='end')
    return to_string(root)


def build_quote(p: RenderParams) -> str:
    c = p.colors
    css = (
        f".quote{{font:italic 400 16px {FONT_FAMILY};fill:{c.text}}}"
        f".author{{font:400 13px {FONT_FAMILY};fill:{c.secondary}}}"
        f".quote-mark{{font:700 32px Georgia, serif;fill:{c.primary}}}"
    )
    root, _ = _start_card(p, css)
    center_x = p.width / 2
    header = p.padding.top + 25
    footer = p.padding.bottom + 20

    sub(root, 'text', '“', class_='quote-mark anim', x=center_x, y=p.padding.top + 20, text_anchor='middle')

    lines = wrap_text(p.quote.quote)
    available = p.height - header - footer
    first_baseline = header + (available - len(lines) * QUOTE_LINE_HEIGHT) / 2 + 16
    text = sub(root, 'text', class_='quote anim d1', text_anchor='middle')
    for i, line in enumerate(lines):
        sub(text, 'tspan', line, x=center_x, y=first_baseline + i * QUOTE_LINE_HEIGHT)

    sub(
        root, 'text', f"— {p.quote.author}", class_='author anim d2',
        x=center_x, y=p.height - p.padding.bottom, text_anchor='middle',
    )
    return to_string(root)


def build_custom(p: RenderParams) -> str:
    font_size = p.font_size or DEFAULT_CUSTOM_FONT_SIZE
    css = f".custom-text{{font:600 {font_size}px {FONT_FAMILY};fill:{p.colors.primary}}}"
    root, _ = _start_card(p, css)
    sub(
        root, 'text', p.custom_text or DEFAULT_CUSTOM_TEXT, class_='custom-text anim',
        x='50%', y='50%', text_anchor='middle', dominant_baseline='middle',
    )
    return to_string(root)


def banner_font_sizes(width: int) -> Tuple[int, int]:
    """Name and description sizes grow with the card width up to fixed caps."""
    return min(round(width * 0.08), 48), min(round(width * 0.035), 20)


def build_banner(p: RenderParams) -> str:
    c = p.colors
    name_size, description_size = banner_font_sizes(p.width)
    css = (
        f".banner-name{{font:700 {name_size}px {FONT_FAMILY};fill:{c.text}}}"
        f".banner-desc{{font:400 {description_size}px {FONT_FAMILY};fill:{c.secondary}}}"
    )
    root, defs = _start_card(p, css)

    clip = sub(defs, 'clipPath', id='banner-clip')
    sub(clip, 'rect', x=1, y=1, width=max(p.width - 2, 0), height=max(p.height - 2, 0), rx=p.border_radius)

    style = get_wave_style(p.wave_style)
    duration = style.duration * speed_multiplier(p.animation.speed)
    animated = _is_animated(p)
    layers = [
        (0.72, 0.0, c.primary, 0.25, '0s'),
        (0.8, 1.5, c.secondary, 0.2, format_seconds(duration / 2)),
    ]
    waves = sub(root, 'g', clip_path='url(#banner-clip)')
    for base_ratio, phase_offset, color, opacity, begin in layers:
        frames = wave_keyframes(style, p.width, p.height, base_ratio, phase_offset)
        path = sub(waves, 'path', d=frames[0], fill=color, fill_opacity=opacity)
        if animated:
            sub(
                path, 'animate',
                attributeName='d', dur=format_seconds(duration), begin=begin,
                repeatCount='indefinite', calcMode='spline',
                keyTimes=key_times(len(frames)), keySplines=key_splines(style, len(frames)),
                values=';'.join(frames),
            )

    name = p.banner_name or p.username or DEFAULT_BANNER_NAME
    description = p.banner_description or DEFAULT_BANNER_DESCRIPTION
    name_y = p.height * 0.42
    sub(root, 'text', name, class_='banner-name anim', x=p.width / 2, y=name_y, text_anchor='middle')
    sub(
        root, 'text', description, class_='banner-desc anim d2',
        x=p.width / 2, y=name_y + description_size + 12, text_anchor='middle',
    )
    return to_string(root)
