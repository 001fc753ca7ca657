"""
Element-tree helpers for building SVG documents.

Text and attribute values go through lxml, so user-supplied strings are
escaped on serialization.
"""
import base64
import math
import re
from typing import Optional

from lxml import etree

from .formatting import format_value

SVG_NS = 'http://www.w3.org/2000/svg'
FONT_FAMILY = "'Segoe UI', Ubuntu, 'Helvetica Neue', sans-serif"

# characters XML 1.0 does not allow: C0 controls other than tab/newline/CR, lone surrogates, U+FFFE/U+FFFF
_XML_ILLEGAL = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')


def xml_safe(value: str) -> str:
    return _XML_ILLEGAL.sub('', value)


def _tag(name: str) -> str:
    return '{%s}%s' % (SVG_NS, name)


def _attr_name(name: str) -> str:
    # class_ -> class, stroke_width -> stroke-width
    return name.rstrip('_').replace('_', '-')


def sub(parent, tag: str, text: Optional[str] = None, **attrs):
    """Append an SVG child element; None-valued attributes are skipped."""
    element = etree.SubElement(parent, _tag(tag))
    for name, value in attrs.items():
        if value is None:
            continue
        element.set(_attr_name(name), xml_safe(format_value(value)))
    if text is not None:
        element.text = xml_safe(str(text))
    return element


def svg_root(width: int, height: int):
    root = etree.Element(_tag('svg'), nsmap={None: SVG_NS})
    root.set('width', format_value(width))
    root.set('height', format_value(height))
    root.set('viewBox', f"0 0 {format_value(width)} {format_value(height)}")
    root.set('role', 'img')
    return root


def to_string(root) -> str:
    return etree.tostring(root, encoding='unicode')


def to_data_url(svg: str) -> str:
    """Encode an SVG document as a base64 data URL."""
    encoded = base64.b64encode(svg.encode('utf-8')).decode('ascii')
    return f"data:image/svg+xml;base64,{encoded}"


def linear_gradient(defs, gradient_id: str, start: str, end: str, angle: float = 90):
    """Two-stop gradient; angle follows CSS (0 = bottom to top, 90 = left to right)."""
    radians = math.radians(angle - 90)
    dx = math.cos(radians) * 50
    dy = math.sin(radians) * 50
    gradient = sub(
        defs, 'linearGradient', id=gradient_id,
        x1=f"{format_value(50 - dx)}%", y1=f"{format_value(50 - dy)}%",
        x2=f"{format_value(50 + dx)}%", y2=f"{format_value(50 + dy)}%",
    )
    sub(gradient, 'stop', offset='0%', stop_color=start)
    sub(gradient, 'stop', offset='100%', stop_color=end)
    return gradient


def radial_gradient(defs, gradient_id: str, start: str, end: str):
    gradient = sub(defs, 'radialGradient', id=gradient_id, cx='50%', cy='50%', r='75%')
    sub(gradient, 'stop', offset='0%', stop_color=start)
    sub(gradient, 'stop', offset='100%', stop_color=end)
    return gradient
