from enum import Enum

# When parsing config file:
PROJECT_DIR_TOKEN = '$PROJECT_DIR'
DEFAULT_CONFIG_FILE_NAME = 'fstree.cfg'
RESOURCES_DIR_NAME = 'resources'

ROOT_PATH = ''
ROOT_DEPTH = 0

# Indentation, in px. Every level of depth adds DEFAULT_INDENT_PX; leaves are pushed right by DEFAULT_LEAF_PAD_PX
# so that their icon lines up with the folder icon of a sibling branch (which has a caret in front of it)
DEFAULT_INDENT_PX = 23
DEFAULT_LEAF_PAD_PX = 14

CSS_CLASS_WRAP = 'FSNode-wrap'
CSS_CLASS_SELECTED = 'FSNode-selected'
CSS_CLASS_DESELECTED = 'FSNode-deselected'

ICON_CARET_RIGHT = 'caret-right'
ICON_CARET_DOWN = 'caret-down'
ICON_FOLDER = 'folder'
ICON_FOLDER_OPEN = 'folder-open'
ICON_FILE = 'file'


class NodeMode(Enum):
    """Change status of a node, as reported by a diff. Only affects the badge shown next to a file"""
    NONE = ''
    ADDED = 'a'
    DELETED = 'd'
    MODIFIED = 'm'

    @classmethod
    def from_code(cls, code):
        if code is None or code == '':
            return NodeMode.NONE
        if isinstance(code, NodeMode):
            return code
        return NodeMode(str(code).lower())

    @property
    def badge(self):
        if self == NodeMode.NONE:
            return None
        return self.value.upper()
