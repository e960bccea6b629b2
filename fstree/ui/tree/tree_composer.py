import logging
import weakref
from typing import Callable, List

from fstree.error import TreeIdentityError
from fstree.model.fs_node import FSNode
from fstree.ui.tree import node_controller

logger = logging.getLogger(__name__)


def _make_forwarder(parent_ref: weakref.ref, notify_func_name: str) -> Callable:
    """Builds a hook which passes (node, controller) through to the given notify method of the parent. The parent is held
    weakly, so that a discarded child which is still referenced somewhere does not keep its old parent alive."""
    def forward(node, controller):
        parent = parent_ref()
        if parent is None:
            logger.debug(f'Dropping {notify_func_name} for "{controller.path}": parent no longer exists')
            return
        getattr(parent, notify_func_name)(node, controller)

    return forward


class TreeComposer:
    """
    ◤━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━◥
    CLASS TreeComposer

    Builds one generation of child controllers under a parent (a NodeController or the TreeRoot): one controller per
    child record, in order, each one level deeper than the parent, with its path prefixed by the parent's path and its
    hooks forwarding to the parent. Composers are never reused: the parent drops its composer on every structural
    update and creates a new one.
    ◣━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━◢
    """
    def __init__(self, child_nodes: List[FSNode], parent):
        if parent is None:
            raise TreeIdentityError('TreeComposer(): parent is required!')
        self.child_nodes: List[FSNode] = child_nodes
        self._parent_ref = weakref.ref(parent)
        self._child_controllers: List = []

    @property
    def child_controllers(self) -> List:
        return list(self._child_controllers)

    def compose(self) -> List:
        parent = self._parent_ref()
        if parent is None:
            raise TreeIdentityError('TreeComposer.compose(): parent no longer exists')

        on_select = _make_forwarder(self._parent_ref, 'notify_select')
        on_deselect = _make_forwarder(self._parent_ref, 'notify_deselect')
        on_open = _make_forwarder(self._parent_ref, 'notify_open')
        on_close = _make_forwarder(self._parent_ref, 'notify_close')

        child_depth = parent.depth + 1
        self._child_controllers = [node_controller.NodeController(node=child_node, depth=child_depth, parent_controller=parent,
                                                                  on_select=on_select, on_deselect=on_deselect,
                                                                  on_open=on_open, on_close=on_close,
                                                                  noninteractive=parent.noninteractive,
                                                                  scheduler=parent.scheduler)
                                   for child_node in self.child_nodes]
        return list(self._child_controllers)
