import logging
import weakref
from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Callable, Dict, Iterator, List, Optional

from fstree.error import TreeIdentityError
from fstree.logging_constants import SUPER_DEBUG_ENABLED
from fstree.model.fs_node import FSNode
from fstree.ui.tree import tree_composer
from fstree.ui.tree.render_scheduler import RenderScheduler

logger = logging.getLogger(__name__)

NodeHook = Callable[[FSNode, 'NodeController'], None]


def no_op(node, controller):
    pass


# ABSTRACT CLASS TreeOwner
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class TreeOwner(ABC):
    """Anything which can own a generation of child controllers: either a NodeController or the TreeRoot.

    The child controllers are never patched. Every structural update goes through recompose(), which drops the whole
    list (and the TreeComposer which built it) and builds a new one."""

    def __init__(self, path: str, depth: int, tree_id: str, scheduler: RenderScheduler, noninteractive: bool):
        self._path: str = path
        self._depth: int = depth
        self.tree_id: str = tree_id
        self._scheduler: RenderScheduler = scheduler
        self.noninteractive: bool = noninteractive
        self._live: bool = False
        self._composer: Optional[tree_composer.TreeComposer] = None
        self._child_controllers: List[NodeController] = []

    @property
    def path(self) -> str:
        return self._path

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def scheduler(self) -> RenderScheduler:
        return self._scheduler

    @property
    def is_live(self) -> bool:
        return self._live

    @property
    def child_controllers(self) -> List['NodeController']:
        return list(self._child_controllers)

    def mount(self):
        """Liveness start: raised by the presentation layer once the visual representation exists"""
        self._live = True

    def unmount(self):
        """Liveness end: raised by the presentation layer when the visual representation is torn down"""
        self._live = False

    @abstractmethod
    def get_visible_child_nodes(self) -> Optional[List[FSNode]]:
        """The child records which should currently have controllers, or None if there should be none"""
        pass

    def recompose(self) -> List['NodeController']:
        """Throws away the current child controllers and builds a fresh generation.

        Returns:
            the discarded controllers
        """
        discarded = self._child_controllers
        self._composer = None
        self._child_controllers = []

        child_nodes = self.get_visible_child_nodes()
        if child_nodes is not None:
            self._composer = tree_composer.TreeComposer(child_nodes, self)
            self._child_controllers = self._composer.compose()

        if SUPER_DEBUG_ENABLED:
            logger.debug(f'[{self.tree_id}] Recomposed "{self._path}": discarded {len(discarded)}, '
                         f'built {len(self._child_controllers)} child controllers')
        return discarded

    def iter_descendants(self) -> Iterator['NodeController']:
        """Depth-first, pre-order walk over every controller currently reachable below this one"""
        for child in self._child_controllers:
            yield child
            yield from child.iter_descendants()

    # Notifications from child controllers. Each generation of children is wired to these by TreeComposer
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    @abstractmethod
    def notify_select(self, node: FSNode, controller: 'NodeController'):
        pass

    @abstractmethod
    def notify_deselect(self, node: FSNode, controller: 'NodeController'):
        pass

    @abstractmethod
    def notify_open(self, node: FSNode, controller: 'NodeController'):
        pass

    @abstractmethod
    def notify_close(self, node: FSNode, controller: 'NodeController'):
        pass


# CLASS NodeController
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class NodeController(TreeOwner):
    """
    ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼
    CLASS NodeController

    Mediates the select/deselect/open/close transitions for a single FSNode, and holds its identity in the tree.

    Every transition returns a Future which resolves to (node, controller). The owner hook given at construction fires
    once per call, even when the call is a no-op, followed by the per-call hook if one was passed. Both get
    (node, controller).

    The node's flags are always written in place before the transition call returns. When the controller is not live,
    everything else (children rebuilt, hooks) happens before the call returns too. When it is live, the redraw goes
    through the RenderScheduler and the hooks fire only after the render pass which shows the new state was
    acknowledged.

    Path & depth are fixed at construction. If the tree is restructured, new controllers are created.
    ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼
    """
    def __init__(self, node: FSNode, depth: int = 0, parent_controller: TreeOwner = None,
                 on_select: Optional[NodeHook] = None, on_deselect: Optional[NodeHook] = None,
                 on_open: Optional[NodeHook] = None, on_close: Optional[NodeHook] = None,
                 noninteractive: bool = False, scheduler: Optional[RenderScheduler] = None):
        if not isinstance(parent_controller, TreeOwner):
            raise TreeIdentityError(f'Cannot create controller for {node!r}: parent is not a tree owner: {parent_controller!r}')
        name = getattr(node, 'name', None)
        if not isinstance(name, str):
            raise TreeIdentityError(f'Cannot create controller: node has no name: {node!r}')
        if not isinstance(parent_controller.path, str):
            raise TreeIdentityError(f'Cannot create controller for "{name}": parent path is not a string: {parent_controller.path!r}')
        if not isinstance(depth, int) or depth < 0:
            raise TreeIdentityError(f'Cannot create controller for "{name}": bad depth: {depth!r}')

        if scheduler is None:
            scheduler = parent_controller.scheduler
        TreeOwner.__init__(self, path=parent_controller.path + name, depth=depth, tree_id=parent_controller.tree_id,
                           scheduler=scheduler, noninteractive=noninteractive)

        self._parent_ref = weakref.ref(parent_controller)
        """Never owns the parent"""

        self.node: FSNode = node

        self._on_select: NodeHook = on_select or no_op
        self._on_deselect: NodeHook = on_deselect or no_op
        self._on_open: NodeHook = on_open or no_op
        self._on_close: NodeHook = on_close or no_op

        self.recompose()

    @property
    def parent_controller(self) -> Optional[TreeOwner]:
        """The owner which created this controller, or None if it has been garbage-collected"""
        return self._parent_ref()

    def iter_ancestors(self) -> Iterator[TreeOwner]:
        parent = self.parent_controller
        while parent is not None:
            yield parent
            parent = getattr(parent, 'parent_controller', None)

    def get_visible_child_nodes(self) -> Optional[List[FSNode]]:
        if self.node.child_nodes is not None and self.node.opened:
            return self.node.child_nodes
        return None

    def apply_state(self, changes: Dict[str, bool]) -> List['NodeController']:
        """Writes the given flags to the node, then rebuilds the child controllers.

        Returns:
            the child controllers which were discarded
        """
        self.write_flags(changes)
        return self.recompose()

    def write_flags(self, changes: Dict[str, bool]):
        for flag_name, value in changes.items():
            setattr(self.node, flag_name, value)

    # Transitions
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    def select(self, on_select: Optional[NodeHook] = None) -> Future:
        if self.node.selected:
            return self._complete_now(self._on_select, on_select)
        return self._transition({'selected': True}, self._on_select, on_select)

    def deselect(self, on_deselect: Optional[NodeHook] = None) -> Future:
        if not self.node.selected:
            return self._complete_now(self._on_deselect, on_deselect)
        return self._transition({'selected': False}, self._on_deselect, on_deselect)

    def toggle_select(self, on_toggle: Optional[NodeHook] = None) -> Future:
        if self.node.selected:
            return self.deselect(on_toggle)
        return self.select(on_toggle)

    def open(self, on_open: Optional[NodeHook] = None) -> Future:
        if self.node.child_nodes is None or self.node.opened:
            return self._complete_now(self._on_open, on_open)
        return self._transition({'opened': True}, self._on_open, on_open)

    def close(self, on_close: Optional[NodeHook] = None) -> Future:
        if self.node.child_nodes is None or not self.node.opened:
            return self._complete_now(self._on_close, on_close)
        return self._transition({'opened': False}, self._on_close, on_close)

    def toggle_open(self, on_toggle: Optional[NodeHook] = None) -> Future:
        if self.node.opened:
            return self.close(on_toggle)
        return self.open(on_toggle)

    def _fire_hooks(self, owner_hook: NodeHook, call_hook: Optional[NodeHook]):
        # Exceptions raised by either hook propagate to whoever triggered the completion
        owner_hook(self.node, self)
        if call_hook:
            call_hook(self.node, self)

    def _complete_now(self, owner_hook: NodeHook, call_hook: Optional[NodeHook]) -> Future:
        self._fire_hooks(owner_hook, call_hook)
        future = Future()
        future.set_result((self.node, self))
        return future

    def _transition(self, changes: Dict[str, bool], owner_hook: NodeHook, call_hook: Optional[NodeHook]) -> Future:
        if not self._live:
            if SUPER_DEBUG_ENABLED:
                logger.debug(f'[{self.tree_id}] Applying {changes} in place to detached node "{self._path}"')
            self.apply_state(changes)
            return self._complete_now(owner_hook, call_hook)

        # flags now; children and hooks after the render pass
        self.write_flags(changes)
        logger.debug(f'[{self.tree_id}] Scheduling redraw of live node "{self._path}" after {changes}')
        future = Future()

        def on_applied():
            try:
                self._fire_hooks(owner_hook, call_hook)
            except Exception as err:
                future.set_exception(err)
                raise
            future.set_result((self.node, self))

        self._scheduler.apply_and_acknowledge(self, changes, on_applied)
        return future

    # Click handlers (wired by the presentation layer)
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    def on_icon_clicked(self) -> Optional[Future]:
        """A click on the caret/folder icon opens or closes a directory. On a file icon it toggles the selection."""
        if self.noninteractive:
            return None
        if self.node.is_dir():
            return self.toggle_open()
        return self.toggle_select()

    def on_text_clicked(self) -> Optional[Future]:
        if self.noninteractive:
            return None
        return self.toggle_select()

    # Pass-throughs: notifications from our own children go to our owner hooks
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    def notify_select(self, node: FSNode, controller: 'NodeController'):
        self._on_select(node, controller)

    def notify_deselect(self, node: FSNode, controller: 'NodeController'):
        self._on_deselect(node, controller)

    def notify_open(self, node: FSNode, controller: 'NodeController'):
        self._on_open(node, controller)

    def notify_close(self, node: FSNode, controller: 'NodeController'):
        self._on_close(node, controller)

    def __repr__(self):
        return f'NodeController(path="{self._path}" depth={self._depth} live={self._live} node={self.node!r})'
