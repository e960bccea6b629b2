import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Dict, List

from fstree.logging_constants import SUPER_DEBUG_ENABLED

logger = logging.getLogger(__name__)


class PendingUpdate:
    def __init__(self, controller, changes: Dict[str, bool], on_applied: Callable[[], None]):
        self.controller = controller
        self.changes: Dict[str, bool] = changes
        self.on_applied: Callable[[], None] = on_applied

    def __repr__(self):
        return f'PendingUpdate(path="{self.controller.path}" changes={self.changes})'


# ABSTRACT CLASS RenderScheduler
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class RenderScheduler(ABC):
    """Boundary between the controllers and whatever draws them.

    The presentation layer raises the liveness events (mount/unmount) and owns the render pass. A live controller writes
    its node's flags, then hands the change to apply_and_acknowledge() and waits for the acknowledgement, which must
    come strictly after the new state was rendered."""

    def mount(self, owner):
        """Liveness start for the owner and its whole reachable subtree"""
        owner.mount()
        for child in owner.child_controllers:
            self.mount(child)

    def unmount(self, owner):
        """Liveness end for the owner and its whole reachable subtree"""
        for child in owner.child_controllers:
            self.unmount(child)
        owner.unmount()

    @abstractmethod
    def apply_and_acknowledge(self, controller, changes: Dict[str, bool], on_applied: Callable[[], None]):
        pass

    def render_update(self, controller, changes: Dict[str, bool]):
        """Renders one controller with the state already written to its node. Its child controllers are recomposed from
        scratch; if it is still live, the old ones are torn down and the new ones brought up."""
        if SUPER_DEBUG_ENABLED:
            logger.debug(f'[{controller.tree_id}] Rendering "{controller.path}" after {changes}')
        discarded = controller.recompose()
        if controller.is_live:
            for child in discarded:
                self.unmount(child)
            for child in controller.child_controllers:
                self.mount(child)


# CLASS QueuedRenderScheduler
# ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼

class QueuedRenderScheduler(RenderScheduler):
    """Batches updates until flush() is called. Each flush() is a single render pass: every queued update is rendered
    in FIFO order, and only then are their acknowledgements delivered.

    Acknowledgements are where the completion hooks run. If one of them raises, the exception propagates out of
    flush() and the acknowledgements still outstanding are delivered at the start of the next flush()."""

    def __init__(self):
        self._pending: Deque[PendingUpdate] = deque()
        self._unacknowledged: Deque[PendingUpdate] = deque()
        self.render_pass_count: int = 0

    def apply_and_acknowledge(self, controller, changes: Dict[str, bool], on_applied: Callable[[], None]):
        update = PendingUpdate(controller, changes, on_applied)
        if SUPER_DEBUG_ENABLED:
            logger.debug(f'[{controller.tree_id}] Queueing {update}')
        self._pending.append(update)

    def has_pending_updates(self) -> bool:
        return len(self._pending) > 0 or len(self._unacknowledged) > 0

    def flush(self) -> int:
        """Runs one render pass. Updates queued from inside an acknowledgement are left for the next pass.

        Returns:
            the number of updates rendered in this pass
        """
        batch: List[PendingUpdate] = list(self._pending)
        self._pending.clear()

        if batch:
            self.render_pass_count += 1
            logger.debug(f'Render pass #{self.render_pass_count}: {len(batch)} updates')

        for update in batch:
            self.render_update(update.controller, update.changes)
            self._unacknowledged.append(update)

        while self._unacknowledged:
            update = self._unacknowledged.popleft()
            update.on_applied()

        return len(batch)

    def flush_all(self, max_passes: int = 100) -> int:
        """Keeps running render passes until nothing is queued. Needed when completion hooks start new transitions."""
        total = 0
        passes = 0
        while self.has_pending_updates():
            if passes >= max_passes:
                raise RuntimeError(f'Render queue still not empty after {max_passes} passes')
            total += self.flush()
            passes += 1
        return total
