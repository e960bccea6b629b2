import logging
from typing import Callable, Dict

from fstree.ui.tree.render_scheduler import QueuedRenderScheduler

import gi
gi.require_version("Gtk", "3.0")
from gi.repository import GLib

logger = logging.getLogger(__name__)


class GLibRenderScheduler(QueuedRenderScheduler):
    """Runs the render pass on the GTK main loop. All updates queued before the main loop goes idle are rendered
    together, then acknowledged."""

    def __init__(self):
        super().__init__()
        self._idle_source_id = None

    def apply_and_acknowledge(self, controller, changes: Dict[str, bool], on_applied: Callable[[], None]):
        super().apply_and_acknowledge(controller, changes, on_applied)
        if self._idle_source_id is None:
            self._idle_source_id = GLib.idle_add(self._on_idle)

    def _on_idle(self):
        self._idle_source_id = None
        count = self.flush()
        logger.debug(f'Rendered {count} updates from GLib idle callback')
        if self.has_pending_updates():
            self._idle_source_id = GLib.idle_add(self._on_idle)
        return GLib.SOURCE_REMOVE
