"""
Views for the cards app.
"""
import json
import logging

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_GET

from .services.github_client import GitHubClient
from .services.quotes import QuoteService
from .svg import normalize_params, render_card, to_data_url
from .themes import get_all_themes

logger = logging.getLogger(__name__)

DATA_CARD_TYPES = ('stats', 'languages', 'streak', 'activity', 'contribution')
QUERY_IGNORED_FIELDS = ('stats', 'languages', 'streak', 'quote')


def _card_response(svg: str, output_format: str) -> HttpResponse:
    if output_format == 'base64':
        response = HttpResponse(to_data_url(svg), content_type='text/plain; charset=utf-8')
    else:
        response = HttpResponse(svg, content_type='image/svg+xml')
    max_age = getattr(settings, 'CARD_CACHE_SECONDS', 3600)
    response['Cache-Control'] = f'public, max-age={max_age}'
    return response


def _with_github_data(raw: dict, username: str, client: GitHubClient) -> dict:
    """Fill missing payloads from GitHub; failures leave the defaults in place."""
    try:
        data = client.get_card_data(username)
    except ValueError as e:
        logger.warning("Could not fetch GitHub data for %s: %s", username, e)
        return raw
    for name, payload in data.payloads().items():
        raw.setdefault(name, payload)
    return raw


@csrf_exempt
@require_http_methods(["GET", "POST"])
def card_view(request, card_type=None):
    """
    Render a card as SVG.

    GET reads the flat parameter record from the query string and fetches
    GitHub data or a quote when the card needs them. POST takes the same
    record as a JSON body with payloads inline.
    """
    try:
        if request.method == 'POST':
            raw = json.loads(request.body or b'{}')
            if not isinstance(raw, dict):
                raise ValueError("Request body must be a JSON object")
        else:
            raw = request.GET.dict()
            # structured payloads only arrive in JSON bodies; activity may be "1,2,3"
            for name in QUERY_IGNORED_FIELDS:
                raw.pop(name, None)

        if card_type:
            raw['type'] = card_type
        params = normalize_params(raw)

        if request.method == 'GET':
            if params.username and params.card_type in DATA_CARD_TYPES:
                raw = _with_github_data(raw, params.username, GitHubClient())
            if params.card_type == 'quote':
                raw['quote'] = QuoteService().quote_of_the_day()
            params = normalize_params(raw)

        logger.info("Generating card: %s %s", params.card_type, params.username)
        svg = render_card(params.card_type, params)
        return _card_response(svg, raw.get('format', ''))

    except Exception as e:
        logger.exception("Error generating card")
        return JsonResponse({'error': str(e)}, status=500)


@require_GET
def github_stats_view(request, username):
    """Card payloads for a user as JSON."""
    try:
        data = GitHubClient().get_card_data(username)
        return JsonResponse({
            'user': {
                'login': data.username,
                'name': data.name,
                'avatar_url': data.avatar_url,
                'created_at': data.created_at,
            },
            **data.payloads(),
        })
    except ValueError as e:
        error_message = str(e)
        is_rate_limit = 'RATE_LIMIT' in error_message
        display_error = error_message.replace(' RATE_LIMIT_NO_TOKEN', '').replace(' RATE_LIMIT_WITH_TOKEN', '')
        status_code = 429 if is_rate_limit else 404
        return JsonResponse({'error': display_error}, status=status_code)
    except Exception as e:
        logger.exception("Unexpected error fetching stats for %s", username)
        return JsonResponse({'error': f"An unexpected error occurred: {str(e)}"}, status=500)


@require_GET
def quote_view(request):
    """Quote of the day as JSON; ?random=true picks a fresh one for previews."""
    service = QuoteService()
    if request.GET.get('random', '').lower() == 'true':
        return JsonResponse(service.random_quote())
    return JsonResponse(service.quote_of_the_day())


@require_GET
def health_view(request):
    return JsonResponse({
        'status': 'ok',
        'timestamp': timezone.now().isoformat(),
        'env': {
            'hasGitHubToken': bool(getattr(settings, 'GITHUB_TOKEN', None)),
        },
        'themes': [theme.id for theme in get_all_themes()],
        'endpoints': {
            'card': '/api/card/?type=stats&username=YOUR_USERNAME&theme=neon',
            'stats': '/api/github-stats/YOUR_USERNAME/',
            'quote': '/api/quote/',
            'health': '/api/health/',
        },
    })
