from enum import IntEnum

# Note: this file cannot be named "signal.py" because it will result in a namespace conflict with an imported library

ID_DEFAULT_TREE = 'fs_tree'


class Signal(IntEnum):
    # --- Node notifications (sender is always the tree_id) ---
    NODE_SELECTED = 1
    NODE_DESELECTED = 2
    NODE_OPENED = 3
    NODE_CLOSED = 4

    TREE_REBUILT = 10
    """Fired after the top-level controllers of a tree were thrown away and recomposed"""

    SHUTDOWN_APP = 20
