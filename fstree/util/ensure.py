import logging

from fstree.constants import NodeMode

logger = logging.getLogger(__name__)


def ensure_int(val):
    try:
        if type(val) == str:
            return int(val)
    except ValueError:
        logger.error(f'Bad value: {val}')
    return val


def ensure_bool(val):
    if type(val) == str:
        # bool('false') would be True
        lowered = val.strip().lower()
        if lowered in ('true', 'yes', 'on', '1'):
            return True
        if lowered in ('false', 'no', 'off', '0', ''):
            return False
        logger.error(f'Bad value: {val}')
        return val
    return bool(val)


def ensure_list(val):
    if val:
        if isinstance(val, list):
            return val
        else:
            return [val]
    else:
        return []


def ensure_node_mode(val):
    try:
        if not isinstance(val, NodeMode):
            return NodeMode.from_code(val)
    except ValueError:
        logger.error(f'Bad value: {val}')
        return NodeMode.NONE
    return val
