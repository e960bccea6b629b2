import logging
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

import treelib
from pydispatch import dispatcher

from fstree.constants import ROOT_DEPTH, ROOT_PATH
from fstree.error import TreeIdentityError
from fstree.model.fs_node import FSNode
from fstree.signal_constants import ID_DEFAULT_TREE, Signal
from fstree.ui.tree.node_controller import NodeController, NodeHook, TreeOwner, no_op
from fstree.ui.tree.render_scheduler import QueuedRenderScheduler, RenderScheduler
from fstree.util.ensure import ensure_bool
from fstree.util.has_lifecycle import HasLifecycle, start_func, stop_func

logger = logging.getLogger(__name__)


# CLASS TreeRoot
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class TreeRoot(HasLifecycle, TreeOwner):
    """
    The root sentinel of a tree, and its owner. It has no node of its own: it holds the top-level records, the root path
    and the external hook set. Every notification from anywhere in the tree ends up here; it is passed to the external
    hook and then broadcast with PyDispatcher (sender=tree_id).

    start() brings the whole tree up (liveness start for every reachable controller); shutdown() tears it down.
    """
    def __init__(self, child_nodes: List[FSNode], tree_id: str = ID_DEFAULT_TREE, root_path: str = ROOT_PATH,
                 on_select: Optional[NodeHook] = None, on_deselect: Optional[NodeHook] = None,
                 on_open: Optional[NodeHook] = None, on_close: Optional[NodeHook] = None,
                 noninteractive: Optional[bool] = None, scheduler: Optional[RenderScheduler] = None, config=None):
        if not isinstance(root_path, str):
            raise TreeIdentityError(f'[{tree_id}] Root path must be a string: {root_path!r}')

        if noninteractive is None:
            if config:
                noninteractive = ensure_bool(config.get_config('tree.noninteractive', False, is_required=False))
            else:
                noninteractive = False

        if scheduler is None:
            scheduler = QueuedRenderScheduler()

        HasLifecycle.__init__(self)
        TreeOwner.__init__(self, path=root_path, depth=ROOT_DEPTH, tree_id=tree_id, scheduler=scheduler, noninteractive=noninteractive)
        self.config = config
        self.child_nodes: List[FSNode] = child_nodes if child_nodes is not None else []

        self._on_select: NodeHook = on_select or no_op
        self._on_deselect: NodeHook = on_deselect or no_op
        self._on_open: NodeHook = on_open or no_op
        self._on_close: NodeHook = on_close or no_op

        self.recompose()
        logger.debug(f'[{self.tree_id}] Created tree root "{self._path}" with {len(self._child_controllers)} top-level controllers')

    @property
    def parent_controller(self):
        return None

    def get_visible_child_nodes(self) -> Optional[List[FSNode]]:
        return self.child_nodes

    @start_func
    def start(self):
        self._scheduler.mount(self)
        logger.info(f'[{self.tree_id}] Tree is live')

    @stop_func
    def shutdown(self):
        self._scheduler.unmount(self)
        logger.info(f'[{self.tree_id}] Tree is detached')

    def rebuild(self) -> List[NodeController]:
        """Replaces every top-level controller (and so the entire controller tree) with new instances"""
        discarded = self.recompose()
        if self._live:
            for child in discarded:
                self._scheduler.unmount(child)
            for child in self._child_controllers:
                self._scheduler.mount(child)

        logger.debug(f'[{self.tree_id}] Rebuilt tree: replaced {len(discarded)} top-level controllers')
        dispatcher.send(signal=Signal.TREE_REBUILT, sender=self.tree_id)
        return self.child_controllers

    # Notifications: external hook first, then broadcast
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    def notify_select(self, node: FSNode, controller: NodeController):
        logger.debug(f'[{self.tree_id}] Selected: "{controller.path}"')
        self._on_select(node, controller)
        dispatcher.send(signal=Signal.NODE_SELECTED, sender=self.tree_id, node=node, controller=controller)

    def notify_deselect(self, node: FSNode, controller: NodeController):
        logger.debug(f'[{self.tree_id}] Deselected: "{controller.path}"')
        self._on_deselect(node, controller)
        dispatcher.send(signal=Signal.NODE_DESELECTED, sender=self.tree_id, node=node, controller=controller)

    def notify_open(self, node: FSNode, controller: NodeController):
        logger.debug(f'[{self.tree_id}] Opened: "{controller.path}"')
        self._on_open(node, controller)
        dispatcher.send(signal=Signal.NODE_OPENED, sender=self.tree_id, node=node, controller=controller)

    def notify_close(self, node: FSNode, controller: NodeController):
        logger.debug(f'[{self.tree_id}] Closed: "{controller.path}"')
        self._on_close(node, controller)
        dispatcher.send(signal=Signal.NODE_CLOSED, sender=self.tree_id, node=node, controller=controller)

    # Lookups
    # ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼

    def iter_controllers(self) -> Iterator[NodeController]:
        return self.iter_descendants()

    def find_controller(self, path: str) -> Optional[NodeController]:
        """Only finds controllers which currently exist, i.e. whose ancestors are all opened"""
        for controller in self.iter_descendants():
            if controller.path == path:
                return controller
        return None

    def get_selected_nodes(self) -> List[FSNode]:
        """Searches the records, not the controllers, so selected nodes inside closed directories are included"""
        selected_list: List[FSNode] = []
        node_queue: Deque[FSNode] = deque(self.child_nodes)
        while len(node_queue) > 0:
            node = node_queue.popleft()
            if node.selected:
                selected_list.append(node)
            if node.child_nodes:
                node_queue.extend(node.child_nodes)
        return selected_list

    def build_controller_tree(self) -> treelib.Tree:
        """Snapshot of the controllers which are currently reachable, for diagnostics. Node identifiers are the id()
        of each controller; data is the controller itself."""
        tree = treelib.Tree()
        tree.create_node(tag=f'[{self.tree_id}] "{self._path}"', identifier=id(self), data=self)

        owner_queue: Deque[Tuple[TreeOwner, int]] = deque([(self, id(self))])
        while len(owner_queue) > 0:
            owner, parent_nid = owner_queue.popleft()
            for child in owner.child_controllers:
                tree.create_node(tag=self._make_debug_tag(child), identifier=id(child), parent=parent_nid, data=child)
                owner_queue.append((child, id(child)))
        return tree

    @staticmethod
    def _make_debug_tag(controller: NodeController) -> str:
        flags = []
        if controller.node.selected:
            flags.append('selected')
        if controller.node.opened:
            flags.append('opened')
        if controller.is_live:
            flags.append('live')
        return f'{controller.node.name} ({", ".join(flags)})' if flags else controller.node.name

    def print_tree_contents_debug(self):
        logger.debug(f'[{self.tree_id}] Controller tree for "{self._path}": \n' + self.build_controller_tree().show(stdout=False))

    def __repr__(self):
        return f'TreeRoot(tree_id="{self.tree_id}" path="{self._path}" live={self._live} children={len(self._child_controllers)})'
