# Brisk CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color palette and style tokens for Brisk CLI output.

Colors are plain hex strings (optionally prefixed with `bold`) so they can be used
both as Rich styles and as prompt_toolkit style strings.

Style tokens are shared between the two libraries:
- Rich markup uses them through the console theme (`[prompt.label]...`).
- prompt_toolkit fragments use them as classes (`class:prompt.label`).

Only presentation is decided here; nothing in this module affects prompt state.
"""
from prompt_toolkit.styles import Style
from rich.markup import escape
from rich.theme import Theme


class OneColors:
    """One Dark inspired palette."""

    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"

    BLACK_b = f"bold {BLACK}"
    WHITE_b = f"bold {WHITE}"
    LIGHT_RED_b = f"bold {LIGHT_RED}"
    LIGHT_YELLOW_b = f"bold {LIGHT_YELLOW}"
    GREEN_b = f"bold {GREEN}"
    CYAN_b = f"bold {CYAN}"
    BLUE_b = f"bold {BLUE}"
    MAGENTA_b = f"bold {MAGENTA}"


STYLE_TOKENS: dict[str, str] = {
    "prompt.label": OneColors.CYAN_b,
    "prompt.default": OneColors.COMMENT_GREY,
    "prompt.input": OneColors.WHITE,
    "prompt.error": OneColors.LIGHT_RED,
    "prompt.hint": OneColors.COMMENT_GREY,
    "prompt.pointer": OneColors.MAGENTA_b,
    "prompt.highlight": OneColors.BLUE_b,
    "prompt.selected": OneColors.GREEN,
    "prompt.item": OneColors.WHITE,
    "prompt.candidate": OneColors.DARK_YELLOW,
    "help.usage": OneColors.WHITE_b,
    "help.heading": OneColors.LIGHT_YELLOW_b,
    "help.command": OneColors.CYAN,
    "help.flag": OneColors.BLUE,
    "help.dim": OneColors.COMMENT_GREY,
    "error": OneColors.LIGHT_RED_b,
    "warning": OneColors.LIGHT_YELLOW,
    "success": OneColors.GREEN_b,
}


def get_brisk_theme() -> Theme:
    """Rich theme exposing every Brisk style token."""
    return Theme(STYLE_TOKENS)


def get_prompt_style() -> Style:
    """prompt_toolkit style mapping the same tokens onto fragment classes."""
    return Style.from_dict(dict(STYLE_TOKENS))


def stylize(text: str, token: str) -> str:
    """Wrap `text` in Rich markup for `token`, escaping any markup inside it."""
    if token not in STYLE_TOKENS:
        return escape(text)
    return f"[{token}]{escape(text)}[/{token}]"
