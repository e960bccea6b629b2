import logging
from typing import Any, Dict, List, Optional

from fstree.constants import NodeMode
from fstree.util.ensure import ensure_bool, ensure_node_mode

logger = logging.getLogger(__name__)


class FSNode:
    """
    ◤━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━◥
    CLASS FSNode

    One entry (file or directory) of the listing. The record belongs to whoever built the tree: controllers flip
    its 'selected' & 'opened' flags in place and never copy it, so any code holding a reference sees the changes.
    A child_nodes of None means the entry is a leaf. An empty list is a directory with nothing in it.
    ◣━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━◢
    """
    def __init__(self, name: str, mode: NodeMode = NodeMode.NONE, child_nodes: Optional[List['FSNode']] = None,
                 selected: bool = False, opened: bool = False):
        self.name: str = name
        self.mode: NodeMode = ensure_node_mode(mode)
        self.child_nodes: Optional[List[FSNode]] = child_nodes
        self.selected: bool = selected
        self.opened: bool = opened

    def is_dir(self) -> bool:
        return self.child_nodes is not None

    def is_file(self) -> bool:
        return self.child_nodes is None

    @classmethod
    def from_dict(cls, node_dict: Dict[str, Any]) -> 'FSNode':
        """Builds a record (and all its descendants) from nested dicts. Accepts both 'childNodes' and 'child_nodes'"""
        child_dicts = node_dict.get('childNodes', node_dict.get('child_nodes', None))
        if child_dicts is None:
            child_nodes = None
        else:
            child_nodes = [cls.from_dict(child_dict) for child_dict in child_dicts]

        return cls(name=node_dict.get('name', None), mode=node_dict.get('mode', None), child_nodes=child_nodes,
                   selected=ensure_bool(node_dict.get('selected', False)), opened=ensure_bool(node_dict.get('opened', False)))

    def __repr__(self):
        if self.is_dir():
            return f'Dir("{self.name}" selected={self.selected} opened={self.opened} children={len(self.child_nodes)})'
        return f'File("{self.name}" mode={self.mode.name} selected={self.selected})'
