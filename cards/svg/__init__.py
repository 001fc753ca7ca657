"""
SVG card rendering engine.
"""
from .elements import to_data_url
from .params import RenderParams, normalize_params
from .renderer import render, render_card, get_builder

__all__ = ['RenderParams', 'normalize_params', 'render', 'render_card', 'get_builder', 'to_data_url']
