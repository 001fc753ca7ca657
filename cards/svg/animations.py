"""
CSS animation blocks embedded in every card.

Each card carries its own stylesheet: README images cannot reference
external CSS.
"""
from typing import Dict, Tuple

from .formatting import format_seconds

SPEED_MULTIPLIERS: Dict[str, float] = {
    'slow': 2.0,
    'normal': 1.0,
    'fast': 0.5,
}

DELAY_STEP = 0.1
DELAY_CLASSES = 5

# kind -> (keyframes body, base duration in seconds, timing/iteration, extra .anim rules)
ANIMATIONS: Dict[str, Tuple[str, float, str, str]] = {
    'fadeIn': (
        '0%{opacity:0;transform:translateY(-10px)}100%{opacity:1;transform:translateY(0)}',
        0.8, 'ease-out forwards', 'opacity:0;',
    ),
    'wave': (
        '0%,100%{transform:translateY(0)}50%{transform:translateY(-5px)}',
        1.5, 'ease-in-out infinite', '',
    ),
    'scaleIn': (
        '0%{transform:scale(0.5);opacity:0}100%{transform:scale(1);opacity:1}',
        0.5, 'ease-out forwards', 'opacity:0;transform-origin:center;transform-box:fill-box;',
    ),
    'glow': (
        '0%,100%{filter:drop-shadow(0 0 3px {primary})}50%{filter:drop-shadow(0 0 12px {primary})}',
        2.0, 'ease-in-out infinite', '',
    ),
    'blink': (
        '0%,100%{opacity:1}50%{opacity:0.5}',
        1.5, 'ease-in-out infinite', '',
    ),
    'typing': (
        '0%{clip-path:inset(0 100% 0 0)}100%{clip-path:inset(0 0 0 0)}',
        2.0, 'steps(30) forwards', 'clip-path:inset(0 100% 0 0);',
    ),
    'slideInLeft': (
        '0%{opacity:0;transform:translateX(-30px)}100%{opacity:1;transform:translateX(0)}',
        0.6, 'ease-out forwards', 'opacity:0;',
    ),
    'slideInRight': (
        '0%{opacity:0;transform:translateX(30px)}100%{opacity:1;transform:translateX(0)}',
        0.6, 'ease-out forwards', 'opacity:0;',
    ),
    'slideInUp': (
        '0%{opacity:0;transform:translateY(20px)}100%{opacity:1;transform:translateY(0)}',
        0.6, 'ease-out forwards', 'opacity:0;',
    ),
    'bounce': (
        '0%,20%,50%,80%,100%{transform:translateY(0)}40%{transform:translateY(-8px)}60%{transform:translateY(-4px)}',
        1.0, 'ease infinite', '',
    ),
}

DEFAULT_ANIMATION = 'fadeIn'
NO_ANIMATION = 'none'


def speed_multiplier(speed: str) -> float:
    """slow/normal/fast -> 2/1/0.5; unknown speeds count as normal."""
    return SPEED_MULTIPLIERS.get(speed, SPEED_MULTIPLIERS['normal'])


def resolve_animation(kind: str, enabled: bool = True) -> str:
    if not enabled or kind == NO_ANIMATION:
        return NO_ANIMATION
    return kind if kind in ANIMATIONS else DEFAULT_ANIMATION


def animation_css(kind: str, speed: str = 'normal', primary: str = '#0CF709', enabled: bool = True) -> str:
    """
    Build the animation stylesheet: one @keyframes rule, the .anim class and
    the .d1-.d5 stagger classes. Durations and delays scale with speed.
    """
    kind = resolve_animation(kind, enabled)
    multiplier = speed_multiplier(speed)
    delays = ''.join(
        f".d{i}{{animation-delay:{format_seconds(DELAY_STEP * i * multiplier)}}}"
        for i in range(1, DELAY_CLASSES + 1)
    )
    if kind == NO_ANIMATION:
        return f".anim{{animation:none}}{delays}"

    keyframes, duration, timing, extra = ANIMATIONS[kind]
    keyframes = keyframes.replace('{primary}', primary)
    return (
        f"@keyframes {kind}{{{keyframes}}}"
        f".anim{{{extra}animation:{kind} {format_seconds(duration * multiplier)} {timing}}}"
        f"{delays}"
    )
