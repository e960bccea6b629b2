import functools
import logging
from abc import ABC
from typing import Callable, List, Optional

from pydispatch import dispatcher
from pydispatch.dispatcher import Any
from pydispatch.errors import DispatcherKeyError

from fstree.signal_constants import Signal

logger = logging.getLogger(__name__)


def start_func(func):
    """Decorator for the "start" method of a HasLifecycle. Runs start_lifecycle() first"""

    @functools.wraps(func)
    def wrapper(obj_self, *args, **kwargs):
        logger.debug(f'[{obj_self.lifecycle_name}] Starting')
        obj_self.start_lifecycle()
        return func(obj_self, *args, **kwargs)

    return wrapper


def stop_func(func):
    """Decorator for the "shutdown" method of a HasLifecycle. Runs shutdown_lifecycle() first"""

    @functools.wraps(func)
    def wrapper(obj_self, *args, **kwargs):
        logger.debug(f'[{obj_self.lifecycle_name}] Shutting down')
        obj_self.shutdown_lifecycle()
        return func(obj_self, *args, **kwargs)

    return wrapper


class DispatchListener:
    def __init__(self, signal: Signal, receiver: Callable, sender):
        self.signal: Signal = signal
        self.receiver: Callable = receiver
        self.sender = sender

    def __repr__(self):
        return f'DispatchListener(signal={self.signal.name} sender={self.sender})'


class HasLifecycle(ABC):
    """
    ▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼▼
    CLASS HasLifecycle

    Something which is started and shut down, e.g. a tree whose rows come and go with a window.

    An object is "shut down" until start() is called, and again after shutdown(). While started it listens for
    Signal.SHUTDOWN_APP, and every PyDispatcher listener it connects is remembered, so that shutdown() can disconnect
    them all. An object which is garbage-collected while started is shut down at that point.
    ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼ ▼
    """
    def __init__(self):
        self._listeners: List[DispatchListener] = []
        self.was_shutdown = True

    def __del__(self):
        if getattr(self, 'was_shutdown', True):
            return

        self.shutdown()

    @property
    def lifecycle_name(self) -> str:
        return getattr(self, 'tree_id', None) or self.__class__.__name__

    @property
    def is_started(self) -> bool:
        return not self.was_shutdown

    def connect_dispatch_listener(self, signal: Signal, receiver: Callable, sender: Optional[str] = None, weak=True):
        if not sender:
            sender = Any
        listener = DispatchListener(signal, receiver, sender)
        self._listeners.append(listener)
        logger.debug(f'[{self.lifecycle_name}] Connecting {listener} weak={weak}')
        dispatcher.connect(signal=signal, receiver=receiver, sender=sender, weak=weak)

    def disconnect_all_listeners(self):
        listeners = self._listeners
        self._listeners = []

        for listener in listeners:
            try:
                dispatcher.disconnect(signal=listener.signal, receiver=listener.receiver, sender=listener.sender)
            except DispatcherKeyError:
                # weak receiver already collected
                logger.debug(f'[{self.lifecycle_name}] Already gone: {listener}')

    def start_lifecycle(self):
        """Called by @start_func"""
        if not self.was_shutdown:
            # restart: drop the listeners of the previous run
            self.disconnect_all_listeners()
        self.was_shutdown = False
        self.connect_dispatch_listener(signal=Signal.SHUTDOWN_APP, receiver=self._on_shutdown_app)

    def shutdown_lifecycle(self):
        """Called by @stop_func"""
        self.disconnect_all_listeners()
        self.was_shutdown = True

    def _on_shutdown_app(self):
        if not self.was_shutdown:
            self.shutdown()

    def start(self):
        self.start_lifecycle()

    def shutdown(self):
        self.shutdown_lifecycle()
