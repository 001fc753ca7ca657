"""
Card dispatch: resolve a builder for the card type and render.
"""
import logging
from typing import Callable, Dict, Mapping

from . import builders
from .params import RenderParams, DEFAULT_CARD_TYPE, normalize_params, params_to_dict

logger = logging.getLogger(__name__)

CardBuilder = Callable[[RenderParams], str]

CARD_BUILDERS: Dict[str, CardBuilder] = {
    'stats': builders.build_stats,
    'languages': builders.build_languages,
    'streak': builders.build_streak,
    'contribution': builders.build_contribution,
    'activity': builders.build_activity,
    'quote': builders.build_quote,
    'custom': builders.build_custom,
    'banner': builders.build_banner,
}


def get_builder(card_type: str) -> CardBuilder:
    """Get the builder for a card type, returning the stats builder if not found."""
    return CARD_BUILDERS.get(card_type, CARD_BUILDERS[DEFAULT_CARD_TYPE])


def render_card(card_type: str, params: RenderParams) -> str:
    """Render one card to an SVG document string."""
    logger.debug("Rendering card %s", params_to_dict(params))
    return get_builder(card_type)(params)


def render(raw: Mapping) -> str:
    """Normalize a flat request record and render it."""
    params = normalize_params(raw)
    return render_card(params.card_type, params)
