import logging
from typing import Optional, Tuple

from fstree.constants import CSS_CLASS_DESELECTED, CSS_CLASS_SELECTED, CSS_CLASS_WRAP, DEFAULT_INDENT_PX, DEFAULT_LEAF_PAD_PX, \
    ICON_CARET_DOWN, ICON_CARET_RIGHT, ICON_FILE, ICON_FOLDER, ICON_FOLDER_OPEN
from fstree.util.ensure import ensure_int

logger = logging.getLogger(__name__)


class NodeDisplay:
    """Everything a toolkit needs to draw one row. Pure data: no widgets, no pixels drawn here."""
    def __init__(self, name: str, wrap_class: str, padding_left_px: int, translate_x_px: int, z_index: int,
                 icons: Tuple[str, ...], mode_badge: Optional[str], interactive: bool):
        self.name: str = name
        self.wrap_class: str = wrap_class
        self.padding_left_px: int = padding_left_px
        self.translate_x_px: int = translate_x_px
        self.z_index: int = z_index
        self.icons: Tuple[str, ...] = icons
        self.mode_badge: Optional[str] = mode_badge
        self.interactive: bool = interactive

    def __repr__(self):
        return f'NodeDisplay("{self.name}" class="{self.wrap_class}" pad={self.padding_left_px} icons={self.icons} badge={self.mode_badge})'


def get_indent_settings(config=None) -> Tuple[int, int]:
    if not config:
        return DEFAULT_INDENT_PX, DEFAULT_LEAF_PAD_PX
    indent_px = ensure_int(config.get_config('display.indent_px', DEFAULT_INDENT_PX, is_required=False))
    leaf_pad_px = ensure_int(config.get_config('display.leaf_pad_px', DEFAULT_LEAF_PAD_PX, is_required=False))
    return indent_px, leaf_pad_px


def get_depth_size(depth: int, is_leaf: bool, indent_px: int = DEFAULT_INDENT_PX, leaf_pad_px: int = DEFAULT_LEAF_PAD_PX) -> int:
    padding = indent_px * depth
    if is_leaf:
        padding += leaf_pad_px
    return padding


def get_icons(node) -> Tuple[str, ...]:
    if node.child_nodes is None:
        return ICON_FILE,
    if node.opened:
        return ICON_CARET_DOWN, ICON_FOLDER_OPEN
    return ICON_CARET_RIGHT, ICON_FOLDER


def describe(controller, config=None) -> NodeDisplay:
    node = controller.node
    is_leaf = node.child_nodes is None
    indent_px, leaf_pad_px = get_indent_settings(config)

    wrap_class = f'{CSS_CLASS_WRAP} {CSS_CLASS_SELECTED if node.selected else CSS_CLASS_DESELECTED}'
    # the badge only makes sense for files; directories show their open/closed state instead
    mode_badge = node.mode.badge if is_leaf else None

    return NodeDisplay(name=node.name, wrap_class=wrap_class,
                       padding_left_px=get_depth_size(controller.depth, is_leaf, indent_px, leaf_pad_px),
                       translate_x_px=get_depth_size(controller.depth - 1, is_leaf, indent_px, leaf_pad_px),
                       z_index=controller.depth, icons=get_icons(node), mode_badge=mode_badge,
                       interactive=not controller.noninteractive)
