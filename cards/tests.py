"""
Tests for the cards app.
"""
import json
import re
from datetime import date, timedelta
from unittest.mock import patch, MagicMock

import requests
from django.core.cache import cache
from django.test import TestCase, Client, override_settings
from lxml import etree

from .services.github_client import GitHubClient, GitHubCardData
from .services.quotes import QuoteService, QUOTES
from .svg import normalize_params, render, render_card
from .svg.animations import animation_css, speed_multiplier
from .svg.builders import language_bar_width, banner_font_sizes, contribution_level
from .svg.elements import SVG_NS
from .svg.formatting import format_number, format_value, format_date_range, wrap_text
from .themes import get_theme, get_all_themes, DEFAULT_THEME

NS = {'svg': SVG_NS}


def parse(svg):
    return etree.fromstring(svg.encode('utf-8'))


def texts(root, css_class):
    return [el.text for el in root.iterfind('.//svg:text', NS) if el.get('class') == css_class]


class ThemeTests(TestCase):
    """Tests for theme presets."""

    def test_get_theme_default(self):
        """Test getting default theme."""
        theme = get_theme('neon')
        self.assertEqual(theme.id, 'neon')
        self.assertEqual(theme.name, 'Neon')
        self.assertEqual(theme.background, '#0d1117')

    def test_get_theme_invalid(self):
        """Test getting invalid theme returns default."""
        theme = get_theme('invalid_theme')
        self.assertEqual(theme.id, DEFAULT_THEME)

    def test_get_all_themes(self):
        """Test getting all themes."""
        themes = get_all_themes()
        self.assertGreater(len(themes), 0)
        self.assertTrue(all(set(t.colors()) == {'background', 'primary', 'secondary', 'text', 'border'} for t in themes))


class FormattingTests(TestCase):
    """Tests for number, text and date formatting."""

    def test_format_number(self):
        self.assertEqual(format_number(0), '0')
        self.assertEqual(format_number(999), '999')
        self.assertEqual(format_number(1500), '1.5K')
        self.assertEqual(format_number(12345), '12.3K')
        self.assertEqual(format_number(2_300_000), '2.3M')

    def test_format_number_truncates(self):
        """Test one decimal is truncated rather than rounded up."""
        self.assertEqual(format_number(1999), '1.9K')
        self.assertEqual(format_number(999_999), '999.9K')

    def test_format_value(self):
        self.assertEqual(format_value(145.0), '145')
        self.assertEqual(format_value(72.5), '72.5')
        self.assertEqual(format_value(1 / 3), '0.33')

    def test_format_value_non_finite(self):
        self.assertEqual(format_value(float('nan')), '0')
        self.assertEqual(format_value(float('inf')), '0')

    def test_wrap_short_quote(self):
        self.assertEqual(wrap_text('Code is poetry.'), ['Code is poetry.'])

    def test_wrap_long_quote_truncates(self):
        """Test a 200+ character quote stops at four lines with an ellipsis."""
        quote = ' '.join(['lorem'] * 34)
        self.assertGreaterEqual(len(quote), 200)
        lines = wrap_text(quote)
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[-1].endswith('...'))
        self.assertTrue(all(len(line) <= 38 for line in lines))

    def test_wrap_unbroken_text(self):
        lines = wrap_text('a' * 200)
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[-1], 'a' * 35 + '...')

    def test_format_date_range(self):
        self.assertEqual(format_date_range('2024-01-05', '2024-02-10'), 'Jan 5 - Feb 10')
        self.assertEqual(format_date_range('2024-03-01', None), 'Mar 1 - Present')
        self.assertEqual(format_date_range(None, None), 'Present')
        self.assertEqual(format_date_range('garbage', None), 'Present')


class AnimationStyleTests(TestCase):
    """Tests for the animation stylesheet generator."""

    DURATION = re.compile(r'(\d+(?:\.\d+)?)s\b')

    def test_fade_in_normal(self):
        css = animation_css('fadeIn', 'normal')
        self.assertIn('@keyframes fadeIn', css)
        self.assertIn('animation:fadeIn 0.8s ease-out forwards', css)
        self.assertIn('.d1{animation-delay:0.1s}', css)
        self.assertIn('.d5{animation-delay:0.5s}', css)

    def test_slow_doubles_and_fast_halves(self):
        for kind in ('fadeIn', 'wave', 'bounce'):
            normal = [float(v) for v in self.DURATION.findall(animation_css(kind, 'normal'))]
            slow = [float(v) for v in self.DURATION.findall(animation_css(kind, 'slow'))]
            fast = [float(v) for v in self.DURATION.findall(animation_css(kind, 'fast'))]
            self.assertEqual(len(normal), 6)
            for base, doubled, halved in zip(normal, slow, fast):
                self.assertAlmostEqual(doubled, base * 2)
                self.assertAlmostEqual(halved, base / 2)

    def test_unknown_kind_falls_back_to_fade_in(self):
        self.assertEqual(animation_css('sparkle', 'normal'), animation_css('fadeIn', 'normal'))

    def test_none_and_disabled(self):
        css = animation_css('none', 'normal')
        self.assertNotIn('@keyframes', css)
        self.assertIn('.anim{animation:none}', css)
        self.assertEqual(animation_css('glow', 'normal', enabled=False), css)

    def test_glow_uses_primary(self):
        self.assertIn('#ff0000', animation_css('glow', 'normal', '#ff0000'))

    def test_unknown_speed(self):
        self.assertEqual(speed_multiplier('warp'), 1.0)


class NormalizeParamsTests(TestCase):
    """Tests for request parameter normalization."""

    def test_defaults(self):
        params = normalize_params({})
        self.assertEqual(params.card_type, 'stats')
        self.assertEqual((params.width, params.height), (495, 195))
        self.assertEqual(params.colors.primary, '#0CF709')
        self.assertEqual(params.colors.secondary, '#00e1ff')
        self.assertEqual(params.border_radius, 12)
        self.assertEqual(params.padding.left, 25)
        self.assertEqual(params.animation.kind, 'fadeIn')
        self.assertEqual(params.animation.speed, 'normal')
        self.assertTrue(params.show_border)

    def test_size_defaults_per_type(self):
        self.assertEqual(self._size('languages'), (300, 300))
        self.assertEqual(self._size('contribution'), (620, 300))
        self.assertEqual(self._size('banner'), (495, 195))
        self.assertEqual(self._size('quote'), (495, 195))

    def _size(self, card_type):
        params = normalize_params({'type': card_type})
        return params.width, params.height

    def test_explicit_size(self):
        params = normalize_params({'type': 'languages', 'width': '400', 'height': 'abc'})
        self.assertEqual((params.width, params.height), (400, 300))

    def test_theme_and_overrides(self):
        params = normalize_params({'theme': 'dracula', 'bg': '123456'})
        self.assertEqual(params.colors.background, '#123456')
        self.assertEqual(params.colors.primary, '#ff79c6')

    def test_unsafe_color_falls_back(self):
        params = normalize_params({'primary': '#fff" onload="alert(1)'})
        self.assertEqual(params.colors.primary, '#0CF709')

    def test_unknown_type(self):
        self.assertEqual(normalize_params({'type': 'bogus'}).card_type, 'stats')

    def test_query_string_values(self):
        params = normalize_params({'showBorder': 'false', 'activity': '1,2,3', 'radius': '0', 'padding': '10'})
        self.assertFalse(params.show_border)
        self.assertEqual(params.activity, [1, 2, 3])
        self.assertEqual(params.border_radius, 0)
        self.assertEqual(params.padding.top, 10)

    def test_bad_payloads_are_zeroed(self):
        params = normalize_params({'stats': {'totalStars': -5, 'followers': 'many'}, 'languages': 'Python'})
        self.assertEqual(params.stats.total_stars, 0)
        self.assertEqual(params.stats.followers, 0)
        self.assertEqual(params.languages, [])

    def test_non_finite_numbers_use_defaults(self):
        params = normalize_params({
            'width': '1e400',
            'height': 'inf',
            'radius': 'nan',
            'gradient': 'true',
            'gradientAngle': 'inf',
            'stats': {'totalStars': 'inf', 'followers': 10 ** 400},
            'languages': [
                {'name': 'Go', 'percentage': float('nan')},
                {'name': 'C', 'percentage': float('inf')},
                {'name': 'Rust', 'percentage': 10 ** 400},
                {'name': 'Zig', 'percentage': 1e300},
            ],
        })
        self.assertEqual((params.width, params.height), (495, 195))
        self.assertEqual(params.border_radius, 12)
        self.assertEqual(params.gradient.angle, 135)
        self.assertEqual(params.stats.total_stars, 0)
        self.assertEqual(params.stats.followers, 0)
        self.assertEqual([lang.percentage for lang in params.languages], [0.0, 0.0, 0.0, 100.0])


class RendererTests(TestCase):
    """Tests for the SVG card builders."""

    def test_stats_end_to_end(self):
        svg = render({
            'type': 'stats',
            'username': 'octocat',
            'stats': {'totalStars': 12345, 'publicRepos': 8, 'followers': 42, 'totalForks': 3},
        })
        root = parse(svg)
        self.assertIn("octocat's GitHub Stats", svg)
        self.assertIn('⭐ 12.3K', texts(root, 'stat-value'))

    def test_stats_empty_payload(self):
        root = parse(render({'type': 'stats'}))
        self.assertEqual(texts(root, 'stat-value'), ['⭐ 0', '📦 0', '👥 0', '🔀 0'])

    def test_canvas_sizes(self):
        for card_type, size in (('languages', ('300', '300')), ('contribution', ('620', '300')), ('quote', ('495', '195'))):
            root = parse(render({'type': card_type}))
            self.assertEqual((root.get('width'), root.get('height')), size)
            self.assertEqual(root.get('viewBox'), f'0 0 {size[0]} {size[1]}')

    def test_unknown_type_renders_stats(self):
        raw = {'username': 'octocat', 'stats': {'totalStars': 10}}
        self.assertEqual(render(dict(raw, type='bogus')), render(dict(raw, type='stats')))
        params = normalize_params(raw)
        self.assertEqual(render_card('bogus', params), render_card('stats', params))

    def test_deterministic(self):
        raw = {
            'username': 'octocat',
            'languages': [{'name': 'Python', 'percentage': 60}],
            'activity': [1, 5, 3],
            'quote': {'quote': 'Make it work.', 'author': 'Kent Beck'},
            'streak': {'current': 2, 'longest': 4, 'total': 10, 'days': [1, 0, 2]},
        }
        for card_type in ('stats', 'languages', 'streak', 'contribution', 'activity', 'quote', 'custom', 'banner'):
            params = normalize_params(dict(raw, type=card_type))
            params.today = date(2024, 5, 1)
            self.assertEqual(render_card(card_type, params), render_card(card_type, params))

    def test_text_is_escaped(self):
        svg = render({'type': 'custom', 'customText': '<script>alert(1)</script> & co'})
        self.assertNotIn('<script>', svg)
        self.assertIn('&lt;script&gt;', svg)
        self.assertEqual(texts(parse(svg), 'custom-text anim'), ['<script>alert(1)</script> & co'])

    def test_control_characters_are_stripped(self):
        root = parse(render({'type': 'custom', 'customText': 'a\x01b'}))
        self.assertEqual(texts(root, 'custom-text anim'), ['ab'])
        self.assertIn("ab's GitHub Stats", render({'username': 'a\x00b'}))
        root = parse(render({'type': 'banner', 'bannerName': 'Ada\ud800', 'bannerDescription': 'x\x0by'}))
        self.assertEqual(texts(root, 'banner-name anim'), ['Ada'])
        self.assertEqual(texts(root, 'banner-desc anim d2'), ['xy'])
        root = parse(render({'type': 'quote', 'quote': {'quote': 'tab\tok\x1f', 'author': '\x07Bell'}}))
        self.assertEqual([tspan.text for tspan in root.iterfind('.//svg:tspan', NS)], ['tab ok'])
        self.assertEqual(texts(root, 'author anim d2'), ['— Bell'])
        languages = [{'name': 'Go\x02', 'percentage': 50}]
        self.assertIn('Go', texts(parse(render({'type': 'languages', 'languages': languages})), 'lang-name'))

    def test_non_finite_numbers_render(self):
        for angle in ('inf', '-inf', 'nan', '1e400'):
            root = parse(render({'gradient': 'true', 'gradientAngle': angle, 'width': angle}))
            self.assertEqual(root.get('width'), '495')
        root = parse(render({
            'type': 'languages',
            'languages': [{'name': 'Go', 'percentage': float('nan')}, {'name': 'C', 'percentage': float('inf')}],
        }))
        bars = [
            rect.get('width') for rect in root.iterfind('.//svg:rect', NS)
            if (rect.get('fill') or '').startswith('url(#lang-')
        ]
        self.assertEqual(bars, ['20', '20'])

    def test_custom_default_text(self):
        self.assertIn('Your custom text here', render({'type': 'custom'}))

    def test_border_and_gradient(self):
        root = parse(render({'showBorder': 'false', 'gradient': 'true', 'gradientAngle': '90'}))
        background = root.find('svg:rect', NS)
        self.assertIsNone(background.get('stroke'))
        self.assertEqual(background.get('fill'), 'url(#card-bg)')
        gradient = root.find('.//svg:linearGradient', NS)
        self.assertEqual(gradient.get('id'), 'card-bg')
        self.assertEqual((gradient.get('x1'), gradient.get('y1'), gradient.get('x2')), ('0%', '50%', '100%'))

    def test_radial_gradient(self):
        root = parse(render({'gradient': {'type': 'radial', 'start': '#111111', 'end': '#222222'}}))
        self.assertIsNotNone(root.find('.//svg:radialGradient', NS))

    def test_language_bar_width(self):
        self.assertEqual(language_bar_width(50, 50), 145)
        self.assertEqual(language_bar_width(25, 50), 72.5)
        self.assertEqual(language_bar_width(0, 50), 20)
        self.assertAlmostEqual(language_bar_width(10, 20), 10 / 35 * 145)

    def test_languages_card(self):
        root = parse(render({
            'type': 'languages',
            'languages': [
                {'name': 'Python', 'percentage': 50},
                {'name': 'Go', 'percentage': 25},
                {'name': 'Brainfuck', 'percentage': 0},
            ],
        }))
        bars = [
            rect.get('width') for rect in root.iterfind('.//svg:rect', NS)
            if (rect.get('fill') or '').startswith('url(#lang-')
        ]
        self.assertEqual(bars, ['145', '72.5', '20'])
        self.assertIn('Br', texts(root, 'badge'))
        self.assertIn('Py', texts(root, 'badge'))

    def test_languages_limit_and_empty(self):
        languages = [{'name': f'Lang{i}', 'percentage': 10} for i in range(8)]
        root = parse(render({'type': 'languages', 'languages': languages}))
        self.assertEqual(len(root.findall('.//svg:linearGradient', NS)), 6)
        self.assertIn('No language data', render({'type': 'languages'}))

    def test_streak_card(self):
        params = normalize_params({
            'type': 'streak',
            'streak': {
                'current': 5, 'longest': 12, 'total': 1500, 'startDate': '2024-04-27',
                'longestStreakStart': '2024-01-03', 'longestStreakEnd': '2024-01-14',
            },
        })
        params.today = date(2024, 5, 1)
        svg = render_card('streak', params)
        root = parse(svg)
        self.assertIn('Apr 27 - Present', svg)
        self.assertIn('Jan 3 - Jan 14', svg)
        self.assertIn('As of May 1', svg)
        self.assertEqual(texts(root, 'streak-num'), ['1.5K', '5', '12'])
        mask = root.find('.//svg:mask', NS)
        self.assertEqual(mask.get('id'), 'ring-mask')
        self.assertIsNotNone(mask.find('svg:ellipse', NS))
        self.assertIn('@keyframes ringFade', svg)

    def test_contribution_levels(self):
        self.assertEqual([contribution_level(n) for n in (0, 1, 2, 3, 4, 6, 7, 30)], [0, 1, 2, 2, 3, 3, 4, 4])

    def test_contribution_grid(self):
        root = parse(render({'type': 'contribution', 'streak': {'days': [0, 1, 2, 4, 7]}}))
        cells = [rect for rect in root.iterfind('.//svg:rect', NS) if rect.get('class') == 'cell']
        self.assertEqual(len(cells), 53 * 7)
        self.assertEqual([cell.get('fill-opacity') for cell in cells[-5:]], ['0.08', '0.3', '0.5', '0.75', '1'])
        self.assertEqual(cells[0].get('style'), 'animation-delay:0s')
        self.assertEqual(cells[-1].get('style'), 'animation-delay:1.04s')
        self.assertNotIn('sample data', render({'type': 'contribution'}))

    def test_contribution_demo_mode(self):
        raw = {'type': 'contribution', 'username': 'octocat', 'demo': 'true'}
        svg = render(raw)
        self.assertIn('(sample data)', svg)
        self.assertEqual(svg, render(raw))

    def test_contribution_without_animation(self):
        root = parse(render({'type': 'contribution', 'animation': 'none'}))
        self.assertFalse(any(rect.get('class') == 'cell' for rect in root.iterfind('.//svg:rect', NS)))

    def test_activity_card(self):
        root = parse(render({'type': 'activity', 'activity': [10, 5, 1], 'primary': '#111111', 'secondary': '#222222'}))
        bars = [rect for rect in root.iterfind('svg:rect', NS) if (rect.get('class') or '').startswith('anim')]
        self.assertEqual([bar.get('height') for bar in bars], ['80', '40', '8'])
        self.assertEqual([bar.get('fill') for bar in bars], ['#111111', '#222222', '#111111'])
        self.assertEqual(bars[2].get('fill-opacity'), '0.4')

    def test_activity_defaults_to_thirty_days(self):
        root = parse(render({'type': 'activity'}))
        bars = [rect for rect in root.iterfind('svg:rect', NS) if (rect.get('class') or '').startswith('anim')]
        self.assertEqual(len(bars), 30)

    def test_quote_card(self):
        root = parse(render({'type': 'quote', 'quote': {'quote': ' '.join(['lorem'] * 40), 'author': 'Ipsum'}}))
        lines = [tspan.text for tspan in root.iterfind('.//svg:tspan', NS)]
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[-1].endswith('...'))
        self.assertEqual(texts(root, 'author anim d2'), ['— Ipsum'])

    def test_quote_fallback(self):
        svg = render({'type': 'quote'})
        self.assertIn('Code is poetry.', svg)
        self.assertIn('— Anonymous', svg)

    def test_banner_waves(self):
        root = parse(render({'type': 'banner', 'bannerName': 'Ada', 'waveStyle': 'glitch'}))
        animations = root.findall('.//svg:animate', NS)
        self.assertEqual(len(animations), 2)
        self.assertTrue(all(a.get('calcMode') == 'spline' for a in animations))
        self.assertEqual([a.get('begin') for a in animations], ['0s', '1.5s'])
        self.assertEqual(animations[0].get('keyTimes'), '0;0.33;0.67;1')
        self.assertEqual(len(animations[0].get('values').split(';')), 4)
        self.assertIn('Ada', texts(root, 'banner-name anim'))

    def test_banner_unknown_style_and_speed(self):
        root = parse(render({'type': 'banner', 'waveStyle': 'zigzag', 'speed': 'slow'}))
        animations = root.findall('.//svg:animate', NS)
        self.assertEqual([a.get('dur') for a in animations], ['16s', '16s'])
        self.assertEqual(animations[1].get('begin'), '8s')

    def test_banner_static_without_animation(self):
        root = parse(render({'type': 'banner', 'animationEnabled': 'false'}))
        self.assertEqual(root.findall('.//svg:animate', NS), [])
        self.assertEqual(len(root.findall('.//svg:path', NS)), 2)

    def test_banner_font_sizes(self):
        self.assertEqual(banner_font_sizes(495), (40, 17))
        self.assertEqual(banner_font_sizes(2000), (48, 20))


class GitHubClientTests(TestCase):
    """Tests for GitHub client."""

    def setUp(self):
        cache.clear()

    def _response(self, payload):
        response = MagicMock()
        response.json.return_value = payload
        response.raise_for_status = MagicMock()
        return response

    def _mock_responses(self):
        today = date.today()
        counts = [1, 0, 3, 1, 2]
        days = [
            {'date': (today - timedelta(days=4 - i)).isoformat(), 'contributionCount': count}
            for i, count in enumerate(counts)
        ]
        return [
            self._response({
                'login': 'testuser',
                'name': 'Test User',
                'avatar_url': 'https://example.com/avatar.jpg',
                'public_repos': 4,
                'followers': 5,
                'following': 3,
                'created_at': '2020-01-01T00:00:00Z',
            }),
            self._response([
                {'name': 'a', 'stargazers_count': 10, 'forks_count': 2, 'language': 'Python', 'fork': False},
                {'name': 'b', 'stargazers_count': 5, 'forks_count': 1, 'language': 'Python', 'fork': False},
                {'name': 'c', 'stargazers_count': 100, 'forks_count': 50, 'language': 'Go', 'fork': True},
                {'name': 'd', 'stargazers_count': 1, 'forks_count': 0, 'language': 'Rust', 'fork': False},
            ]),
            self._response({'contributions': [days]}),
        ]

    @patch('cards.services.github_client.requests.get')
    def test_get_card_data_success(self, mock_get):
        """Test successful payload retrieval."""
        mock_get.side_effect = self._mock_responses()

        data = GitHubClient().get_card_data('testuser')

        self.assertEqual(data.username, 'testuser')
        self.assertEqual(data.name, 'Test User')
        self.assertEqual(data.stats['totalStars'], 16)
        self.assertEqual(data.stats['totalForks'], 3)
        self.assertEqual(data.stats['publicRepos'], 4)
        self.assertEqual(
            [(lang['name'], lang['percentage']) for lang in data.languages],
            [('Python', 67), ('Rust', 33)],
        )
        self.assertEqual(data.streak['current'], 3)
        self.assertEqual(data.streak['longest'], 3)
        self.assertEqual(data.streak['total'], 7)
        self.assertEqual(data.streak['startDate'], (date.today() - timedelta(days=2)).isoformat())
        self.assertEqual(data.streak['days'], [1, 0, 3, 1, 2])
        self.assertEqual(data.activity, [1, 0, 3, 1, 2])

    @patch('cards.services.github_client.requests.get')
    def test_get_card_data_cached(self, mock_get):
        """Test a second lookup is served from the cache."""
        mock_get.side_effect = self._mock_responses()
        client = GitHubClient()
        first = client.get_card_data('testuser')
        second = client.get_card_data('TestUser')
        self.assertEqual(mock_get.call_count, 3)
        self.assertEqual(first, second)

    @patch('cards.services.github_client.requests.get')
    def test_contributions_unavailable(self, mock_get):
        """Test a failing contributions feed leaves zeroed streak data."""
        responses = self._mock_responses()[:2]
        mock_get.side_effect = responses + [requests.ConnectionError('offline')]

        data = GitHubClient().get_card_data('testuser')

        self.assertEqual(data.streak['current'], 0)
        self.assertEqual(data.streak['total'], 0)
        self.assertEqual(data.activity, [])

    @patch('cards.services.github_client.requests.get')
    def test_get_card_data_not_found(self, mock_get):
        """Test handling of user not found."""
        mock_response = MagicMock()
        mock_response.status_code = 404

        error = requests.HTTPError()
        error.response = mock_response
        mock_get.side_effect = error

        with self.assertRaises(ValueError) as ctx:
            GitHubClient().get_card_data('nonexistent')
        self.assertIn('not found', str(ctx.exception))

    @override_settings(GITHUB_TOKEN=None)
    @patch('cards.services.github_client.requests.get')
    def test_rate_limited(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 403
        mock_response.headers = {}

        error = requests.HTTPError()
        error.response = mock_response
        mock_get.side_effect = error

        with self.assertRaises(ValueError) as ctx:
            GitHubClient().get_card_data('someone')
        self.assertIn('RATE_LIMIT_NO_TOKEN', str(ctx.exception))


class QuoteServiceTests(TestCase):
    """Tests for the quote service."""

    def setUp(self):
        cache.clear()

    def test_quote_of_the_day_is_stable(self):
        service = QuoteService()
        day = date(2024, 1, 1)
        first = service.quote_of_the_day(day)
        self.assertEqual(first, service.quote_of_the_day(day))
        self.assertEqual(first, QUOTES[day.toordinal() % len(QUOTES)])

    def test_random_quote(self):
        quote = QuoteService().random_quote()
        self.assertIn(quote, QUOTES)


class ViewTests(TestCase):
    """Tests for views."""

    def setUp(self):
        self.client = Client()
        cache.clear()

    def _card_data(self):
        return GitHubCardData(
            username='octocat',
            name='The Octocat',
            avatar_url='',
            created_at='2011-01-25T18:44:36Z',
            stats={'totalStars': 12345, 'totalForks': 10, 'publicRepos': 8, 'followers': 42, 'following': 9},
            languages=[{'name': 'Ruby', 'percentage': 60, 'color': '#CC342D'}],
            streak={'current': 1, 'longest': 2, 'total': 3},
            activity=[1, 2, 3],
        )

    def test_custom_card(self):
        response = self.client.get('/api/card/', {'type': 'custom', 'customText': 'Hello'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'image/svg+xml')
        self.assertIn('public, max-age=', response['Cache-Control'])
        self.assertIn('Hello', response.content.decode())

    @patch('cards.views.GitHubClient')
    def test_stats_card_with_github_data(self, mock_client_class):
        mock_client = MagicMock()
        mock_client.get_card_data.return_value = self._card_data()
        mock_client_class.return_value = mock_client

        response = self.client.get('/api/card/stats/', {'username': 'octocat'})

        self.assertEqual(response.status_code, 200)
        content = response.content.decode()
        self.assertIn("octocat's GitHub Stats", content)
        self.assertIn('12.3K', content)
        mock_client.get_card_data.assert_called_once_with('octocat')

    @patch('cards.views.GitHubClient')
    def test_username_is_trimmed_before_fetch(self, mock_client_class):
        mock_client = MagicMock()
        mock_client.get_card_data.return_value = self._card_data()
        mock_client_class.return_value = mock_client

        response = self.client.get('/api/card/', {'type': 'stats', 'username': ' octocat '})

        self.assertEqual(response.status_code, 200)
        mock_client.get_card_data.assert_called_once_with('octocat')

    def test_unusual_input_still_renders(self):
        response = self.client.get('/api/card/', {'width': '1e400', 'gradient': 'true', 'gradientAngle': 'nan'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('width="495"', response.content.decode())

        response = self.client.get('/api/card/', {'type': 'custom', 'customText': 'hi\x01'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('>hi<', response.content.decode())

        body = {'type': 'languages', 'languages': [{'name': 'Go', 'percentage': float('nan')}]}
        response = self.client.post('/api/card/', data=json.dumps(body), content_type='application/json')
        self.assertEqual(response.status_code, 200)

    @patch('cards.views.GitHubClient')
    def test_card_renders_defaults_when_fetch_fails(self, mock_client_class):
        mock_client = MagicMock()
        mock_client.get_card_data.side_effect = ValueError("User 'ghost' not found on GitHub")
        mock_client_class.return_value = mock_client

        response = self.client.get('/api/card/', {'type': 'stats', 'username': 'ghost'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('⭐ 0', response.content.decode())

    @patch('cards.views.GitHubClient')
    def test_quote_card_skips_github(self, mock_client_class):
        response = self.client.get('/c/', {'type': 'quote', 'username': 'octocat'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('— ', response.content.decode())
        mock_client_class.assert_not_called()

    def test_post_json_body(self):
        body = {'type': 'languages', 'languages': [{'name': 'Go', 'percentage': 40}]}
        response = self.client.post('/api/card/', data=json.dumps(body), content_type='application/json')
        self.assertEqual(response.status_code, 200)
        self.assertIn('Most Used Languages', response.content.decode())

    def test_post_malformed_json(self):
        response = self.client.post('/api/card/', data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 500)
        self.assertIn('error', response.json())

    def test_base64_format(self):
        response = self.client.get('/api/card/', {'type': 'banner', 'format': 'base64'})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.content.decode().startswith('data:image/svg+xml;base64,'))

    @patch('cards.views.GitHubClient')
    def test_github_stats_view(self, mock_client_class):
        mock_client = MagicMock()
        mock_client.get_card_data.return_value = self._card_data()
        mock_client_class.return_value = mock_client

        response = self.client.get('/api/github-stats/octocat/')

        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload['user']['login'], 'octocat')
        self.assertEqual(payload['stats']['totalStars'], 12345)

    @patch('cards.views.GitHubClient')
    def test_github_stats_view_errors(self, mock_client_class):
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client

        mock_client.get_card_data.side_effect = ValueError("User 'ghost' not found on GitHub")
        self.assertEqual(self.client.get('/api/github-stats/ghost/').status_code, 404)

        mock_client.get_card_data.side_effect = ValueError("GitHub API rate limit exceeded. RATE_LIMIT_NO_TOKEN")
        response = self.client.get('/api/github-stats/ghost/')
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json()['error'], 'GitHub API rate limit exceeded.')

    def test_quote_view(self):
        payload = self.client.get('/api/quote/').json()
        self.assertEqual(set(payload), {'quote', 'author'})

    def test_random_quote_view(self):
        payload = self.client.get('/api/quote/', {'random': 'true'}).json()
        self.assertIn(payload, QUOTES)

    def test_health_view(self):
        payload = self.client.get('/api/health/').json()
        self.assertEqual(payload['status'], 'ok')
        self.assertEqual(payload['themes'], [theme.id for theme in get_all_themes()])
        self.assertIn('neon', payload['themes'])
