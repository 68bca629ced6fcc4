"""Glyph resolution for workspace labels.

Turns a window and its position in the tree into two glyphs:

- the application glyph, looked up by the window's application identifier
- the layout glyph, describing the shape of the container the window sits in

Both are pure functions of their arguments and the configuration.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .config import DEFAULT_CONFIG, IconCategory, LabelConfig, LayoutCategory
from .models import AppIdentity, Layout, Node

HORIZONTAL_LAYOUTS = (Layout.SPLITH, Layout.TABBED)
VERTICAL_LAYOUTS = (Layout.SPLITV, Layout.STACKED)


@dataclass(frozen=True)
class Mark:
    """A single styled symbol inside a glyph."""
    category: Union[LayoutCategory, IconCategory]
    text: str


@dataclass(frozen=True)
class Glyph:
    """Sequence of marks rendered side by side; empty when nothing applies."""
    marks: Tuple[Mark, ...] = ()

    @classmethod
    def single(cls, category: Union[LayoutCategory, IconCategory], text: str) -> "Glyph":
        return cls((Mark(category, text),))

    @property
    def text(self) -> str:
        return "".join(mark.text for mark in self.marks)

    def __bool__(self) -> bool:
        return bool(self.text)


EMPTY_GLYPH = Glyph()


def application_identifier(identity: Optional[AppIdentity]) -> str:
    """Return ``app_id``, else the first non-empty X11 class/instance, else ''."""
    if identity is None:
        return ""
    if identity.app_id:
        return identity.app_id
    for fallback in (identity.window_class, identity.window_instance):
        if fallback:
            return fallback
    return ""


def resolve_app_glyph(
    app_identity: Optional[AppIdentity],
    config: LabelConfig = DEFAULT_CONFIG,
) -> Glyph:
    """Resolve the application glyph.

    An absent identifier means the workspace has no identifiable window and
    yields the ``empty`` glyph; a known identifier yields its icon; anything
    else yields the ``unknown`` glyph.
    """
    identifier = application_identifier(app_identity)
    if not identifier:
        return Glyph.single(IconCategory.EMPTY, config.glyphs.empty)

    icon = config.app_icon(identifier)
    if icon is None:
        return Glyph.single(IconCategory.UNKNOWN, config.glyphs.unknown)
    return Glyph.single(IconCategory.APP, icon)


def _position(window: Node, siblings: Sequence[Node]) -> int:
    for index, sibling in enumerate(siblings):
        if sibling.id == window.id:
            return index
    return -1


def resolve_layout_glyph(
    window: Node,
    parent: Node,
    sibling_count: int,
    siblings: Sequence[Node],
    config: LabelConfig = DEFAULT_CONFIG,
) -> Glyph:
    """Resolve the glyph describing the window's container shape.

    Args:
        window: The window being labeled
        parent: Its direct parent (or the window itself when it has none)
        sibling_count: Number of entries in ``siblings``, window included
        siblings: The parent's floating children for a floating window,
            otherwise the parent's tiled children, in order
        config: Glyph tables

    Returns:
        Layout glyph, empty when the parent layout carries no shape
    """
    glyphs = config.layout

    def glyph(category: LayoutCategory) -> Glyph:
        return Glyph.single(category, glyphs.glyph(category))

    if window.is_floating:
        if sibling_count <= 1:
            return glyph(LayoutCategory.FLOATING)
        return glyph(LayoutCategory.FLOATING_PEERS)

    if sibling_count == 0:
        return EMPTY_GLYPH
    if sibling_count == 1:
        return glyph(LayoutCategory.SINGLE)

    position = _position(window, siblings)

    if parent.layout in HORIZONTAL_LAYOUTS:
        if sibling_count == 2:
            return glyph(LayoutCategory.LEFT if position == 0 else LayoutCategory.RIGHT)
        return Glyph(tuple(
            Mark(LayoutCategory.BAR_FOCUSED, glyphs.bar_focused)
            if index == position
            else Mark(LayoutCategory.BAR_UNFOCUSED, glyphs.bar_unfocused)
            for index in range(sibling_count)
        ))

    if parent.layout in VERTICAL_LAYOUTS:
        if sibling_count == 2:
            return glyph(LayoutCategory.TOP if position == 0 else LayoutCategory.BOTTOM)
        # No per-position detail for vertical stacks
        return glyph(LayoutCategory.MANY_VERTICAL)

    return EMPTY_GLYPH
