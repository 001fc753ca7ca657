"""
Procedural wave silhouettes for the banner card.
"""
import math
from dataclasses import dataclass
from typing import List, Tuple

from .formatting import format_value

SEGMENTS = 24


@dataclass(frozen=True)
class WaveStyle:
    name: str
    amplitudes: Tuple[float, ...]  # fraction of card height, one per keyframe
    phases: Tuple[float, ...]
    frequency: float
    duration: float
    key_spline: str
    stepped: bool = False


WAVE_STYLES = {
    'wave': WaveStyle(
        'wave', (0.06, 0.06, 0.06), (0.0, 2 * math.pi / 3, 4 * math.pi / 3),
        frequency=1.5, duration=8.0, key_spline='0.45 0 0.55 1',
    ),
    'pulse': WaveStyle(
        'pulse', (0.02, 0.1), (0.0, 0.0),
        frequency=2.0, duration=4.0, key_spline='0.4 0 0.2 1',
    ),
    'flow': WaveStyle(
        'flow', (0.05, 0.07, 0.05, 0.07), (0.0, math.pi / 2, math.pi, 3 * math.pi / 2),
        frequency=1.0, duration=10.0, key_spline='0.5 0 0.5 1',
    ),
    'glitch': WaveStyle(
        'glitch', (0.05, 0.08, 0.03), (0.0, 1.3, 2.9),
        frequency=3.0, duration=3.0, key_spline='0 0.9 0.1 1', stepped=True,
    ),
}

DEFAULT_WAVE_STYLE = 'wave'


def get_wave_style(name: str) -> WaveStyle:
    return WAVE_STYLES.get(name, WAVE_STYLES[DEFAULT_WAVE_STYLE])


def _wave_y(style: WaveStyle, index: int, keyframe: int, amplitude: float, phase: float) -> float:
    t = 2 * math.pi * style.frequency * index / SEGMENTS + phase
    if not style.stepped:
        return amplitude * math.sin(t)
    # square-ish steps with a jitter that differs per keyframe
    jitter = 0.5 + ((index * 7 + keyframe * 3) % 5) / 8
    return amplitude * jitter * (1 if math.sin(t) >= 0 else -1)


def wave_path(style: WaveStyle, width: float, height: float, base_ratio: float,
              keyframe: int, phase_offset: float = 0.0) -> str:
    """One closed silhouette: wave line across the card, filled to the bottom edge."""
    amplitude = style.amplitudes[keyframe] * height
    phase = style.phases[keyframe] + phase_offset
    base = height * base_ratio
    points = []
    for i in range(SEGMENTS + 1):
        x = width * i / SEGMENTS
        y = base + _wave_y(style, i, keyframe, amplitude, phase)
        points.append(f"L{format_value(x)},{format_value(y)}")
    return f"M0,{format_value(height)} {' '.join(points)} L{format_value(width)},{format_value(height)} Z"


def wave_keyframes(style: WaveStyle, width: float, height: float, base_ratio: float,
                   phase_offset: float = 0.0) -> List[str]:
    """Keyframe paths for one layer; the first frame is repeated at the end so the loop is seamless."""
    frames = [
        wave_path(style, width, height, base_ratio, i, phase_offset)
        for i in range(len(style.amplitudes))
    ]
    frames.append(frames[0])
    return frames


def key_times(frame_count: int) -> str:
    steps = frame_count - 1
    return ';'.join(format_value(i / steps) for i in range(frame_count))


def key_splines(style: WaveStyle, frame_count: int) -> str:
    return ';'.join([style.key_spline] * (frame_count - 1))
