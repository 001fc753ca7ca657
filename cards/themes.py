"""
Theme presets for the SVG cards.
"""
from typing import Dict, List


class Theme:
    """Named color preset."""

    def __init__(
        self,
        id: str,
        name: str,
        background: str,
        primary: str,
        secondary: str,
        text: str,
        border: str,
    ):
        self.id = id
        self.name = name
        self.background = background
        self.primary = primary
        self.secondary = secondary
        self.text = text
        self.border = border

    def colors(self) -> Dict[str, str]:
        return {
            'background': self.background,
            'primary': self.primary,
            'secondary': self.secondary,
            'text': self.text,
            'border': self.border,
        }


# Theme registry
THEMES: Dict[str, Theme] = {
    'neon': Theme('neon', 'Neon', '#0d1117', '#0CF709', '#00e1ff', '#c9d1d9', '#0CF709'),
    'tokyo-night': Theme('tokyo-night', 'Tokyo Night', '#1a1b26', '#7aa2f7', '#bb9af7', '#c0caf5', '#7aa2f7'),
    'dracula': Theme('dracula', 'Dracula', '#282a36', '#ff79c6', '#bd93f9', '#f8f8f2', '#ff79c6'),
    'github-dark': Theme('github-dark', 'GitHub Dark', '#0d1117', '#58a6ff', '#8b949e', '#c9d1d9', '#30363d'),
    'ocean': Theme('ocean', 'Ocean', '#0a192f', '#64ffda', '#8892b0', '#ccd6f6', '#64ffda'),
    'sunset': Theme('sunset', 'Sunset', '#1a1a2e', '#ff6b6b', '#ffd93d', '#f0f0f0', '#ff6b6b'),
    'forest': Theme('forest', 'Forest', '#1e2a1e', '#7cb342', '#aed581', '#e8f5e9', '#7cb342'),
    'midnight': Theme('midnight', 'Midnight', '#0f0f23', '#ffff66', '#9999cc', '#cccccc', '#ffff66'),
    'cyberpunk': Theme('cyberpunk', 'Cyberpunk', '#0a0a0f', '#f706cf', '#00f0ff', '#ffffff', '#f706cf'),
    'nord': Theme('nord', 'Nord', '#2e3440', '#88c0d0', '#81a1c1', '#eceff4', '#4c566a'),
    'monokai': Theme('monokai', 'Monokai', '#272822', '#a6e22e', '#f92672', '#f8f8f2', '#a6e22e'),
    'gruvbox': Theme('gruvbox', 'Gruvbox', '#282828', '#fabd2f', '#83a598', '#ebdbb2', '#fabd2f'),
    'solarized': Theme('solarized', 'Solarized', '#002b36', '#b58900', '#268bd2', '#839496', '#b58900'),
    'catppuccin': Theme('catppuccin', 'Catppuccin', '#1e1e2e', '#cba6f7', '#f5c2e7', '#cdd6f4', '#cba6f7'),
    'aurora': Theme('aurora', 'Aurora', '#0b0d17', '#00d9ff', '#ff6bcb', '#e0e0e0', '#00d9ff'),
    'matrix': Theme('matrix', 'Matrix', '#000000', '#00ff00', '#00aa00', '#00ff00', '#00ff00'),
}

DEFAULT_THEME = 'neon'


def get_theme(theme_id: str) -> Theme:
    """Get a theme by ID, returning default if not found."""
    return THEMES.get(theme_id, THEMES[DEFAULT_THEME])


def get_all_themes() -> List[Theme]:
    """Get all available themes."""
    return list(THEMES.values())
