"""Workspace label composition.

A label is the workspace number followed by the styled application glyph and,
when a real window is focused, the styled layout glyph and window title::

    1<span font_size="small">◧</span> <span font_size="small">vim</span>

Sway keeps parsing the leading number, so workspace switching by number keeps
working after a rename.
"""

from typing import Optional

from .config import DEFAULT_CONFIG, IconCategory, LabelConfig, LayoutCategory
from .resolver import EMPTY_GLYPH, Glyph, Mark

ELLIPSIS = "…"


def escape_markup(text: str) -> str:
    """Escape text for inclusion in Pango markup."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def truncate_title(title: str, max_length: int) -> str:
    if len(title) <= max_length:
        return title
    return title[: max(max_length - 1, 0)] + ELLIPSIS


def style(text: str, attributes: str) -> str:
    """Wrap ``text`` in a span; bare text when there are no attributes."""
    if not text:
        return ""
    if not attributes:
        return text
    return f"<span {attributes}>{text}</span>"


def _mark_attributes(mark: Mark, config: LabelConfig) -> str:
    if isinstance(mark.category, LayoutCategory):
        return config.layout_style.attributes(mark.category)
    return config.icon_style.attributes(mark.category)


def render_glyph(glyph: Glyph, config: LabelConfig = DEFAULT_CONFIG) -> str:
    """Render each mark in its category style. Glyphs may hold markup and are not escaped."""
    return "".join(
        style(mark.text, _mark_attributes(mark, config))
        for mark in glyph.marks
    )


def render_title(title: Optional[str], config: LabelConfig = DEFAULT_CONFIG) -> str:
    max_length = config.title.max_length
    if not title or max_length == 0:
        return ""
    return style(escape_markup(truncate_title(title, max_length)), config.title.style)


def compose_label(
    workspace_number: int,
    app_glyph: Glyph,
    layout_glyph: Glyph,
    window_title: Optional[str],
    is_window_the_workspace_itself: bool,
    config: LabelConfig = DEFAULT_CONFIG,
) -> str:
    """Build the markup name for a workspace.

    Args:
        workspace_number: Number sway parsed from the workspace name
        app_glyph: Resolved application glyph
        layout_glyph: Resolved layout glyph
        window_title: Title of the labeled window
        is_window_the_workspace_itself: True when no window is focused and the
            workspace stands in for it; suppresses layout glyph and title
        config: Style tables

    Returns:
        Pango markup string
    """
    label = f"{workspace_number}{render_glyph(app_glyph, config)}"
    if is_window_the_workspace_itself:
        return label

    label += render_glyph(layout_glyph, config)
    title = render_title(window_title, config)
    if title:
        label += f" {title}"
    return label


def placeholder_label(workspace_number: int, config: LabelConfig = DEFAULT_CONFIG) -> str:
    """Label for a freshly created workspace that holds no window yet."""
    empty = Glyph.single(IconCategory.EMPTY, config.glyphs.empty)
    return compose_label(workspace_number, empty, EMPTY_GLYPH, None, True, config)


def _quote(name: str) -> str:
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def rename_command(old_name: str, new_name: str) -> str:
    """Build the sway command renaming ``old_name`` to ``new_name``."""
    return f"rename workspace {_quote(old_name)} to {_quote(new_name)}"
