import logging
import unittest

from fstree.constants import NodeMode
from fstree.model.fs_node import FSNode

logger = logging.getLogger(__name__)


class FSNodeTest(unittest.TestCase):
    def test_defaults(self):
        node = FSNode('a.txt')
        self.assertTrue(node.is_file())
        self.assertFalse(node.is_dir())
        self.assertFalse(node.selected)
        self.assertFalse(node.opened)
        self.assertEqual(NodeMode.NONE, node.mode)

        empty_dir = FSNode('empty/', child_nodes=[])
        self.assertTrue(empty_dir.is_dir())

    def test_from_dict(self):
        node = FSNode.from_dict({
            'name': 'root/', 'opened': 'true', 'childNodes': [
                {'name': 'a.txt', 'mode': 'a', 'selected': True},
                {'name': 'sub/', 'child_nodes': [{'name': 'b.txt', 'mode': 'D'}]},
                {'name': 'empty/', 'childNodes': []},
            ]})

        self.assertEqual('root/', node.name)
        self.assertTrue(node.opened)
        self.assertFalse(node.selected)
        self.assertEqual(['a.txt', 'sub/', 'empty/'], [c.name for c in node.child_nodes])

        a_txt, sub, empty = node.child_nodes
        self.assertTrue(a_txt.is_file())
        self.assertTrue(a_txt.selected)
        self.assertEqual(NodeMode.ADDED, a_txt.mode)
        self.assertEqual(NodeMode.DELETED, sub.child_nodes[0].mode)
        self.assertEqual([], empty.child_nodes)
        self.assertTrue(empty.is_dir())

    def test_node_mode(self):
        self.assertEqual(NodeMode.NONE, NodeMode.from_code(None))
        self.assertEqual(NodeMode.NONE, NodeMode.from_code(''))
        self.assertEqual(NodeMode.MODIFIED, NodeMode.from_code('m'))
        self.assertEqual(NodeMode.MODIFIED, NodeMode.from_code(NodeMode.MODIFIED))
        with self.assertRaises(ValueError):
            NodeMode.from_code('x')

        self.assertIsNone(NodeMode.NONE.badge)
        self.assertEqual('A', NodeMode.ADDED.badge)
        self.assertEqual('D', NodeMode.DELETED.badge)
        self.assertEqual('M', NodeMode.MODIFIED.badge)

    def test_unknown_mode_falls_back_to_none(self):
        with self.assertLogs('fstree.util.ensure', level='ERROR'):
            node = FSNode('a.txt', mode='z')
        self.assertEqual(NodeMode.NONE, node.mode)


if __name__ == '__main__':
    unittest.main()
