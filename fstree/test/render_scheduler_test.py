import logging
import unittest

from fstree.model.fs_node import FSNode
from fstree.ui.tree.render_scheduler import QueuedRenderScheduler
from fstree.ui.tree.tree_root import TreeRoot

logger = logging.getLogger(__name__)

TEST_TREE_ID = 'render_scheduler_test'


class LiveTransitionTest(unittest.TestCase):
    """Transitions on controllers which are mounted must wait for the render pass"""

    def setUp(self):
        self.calls = []

        def on_select(node, controller):
            # state must already be visible when the hook runs
            self.calls.append(('on_select', node.name, node.selected))

        def on_open(node, controller):
            self.calls.append(('on_open', node.name, node.opened))

        self.file1 = FSNode('file1')
        self.dir_node = FSNode('dir/', child_nodes=[self.file1])
        self.file2 = FSNode('file2')
        self.scheduler = QueuedRenderScheduler()
        self.root = TreeRoot([self.dir_node, self.file2], tree_id=TEST_TREE_ID, scheduler=self.scheduler,
                             on_select=on_select, on_open=on_open)
        self.root.start()

    def tearDown(self):
        self.root.shutdown()

    def test_start_mounts_everything(self):
        self.assertTrue(self.root.is_live)
        for con in self.root.iter_controllers():
            self.assertTrue(con.is_live)

    def test_select_waits_for_render_pass(self):
        file2_con = self.root.child_controllers[1]
        call_hook_calls = []
        future = file2_con.select(lambda node, con: call_hook_calls.append((node, con)))

        self.assertFalse(future.done())
        # the record is updated right away; only the hooks wait
        self.assertTrue(self.file2.selected)
        self.assertEqual([], self.calls)
        self.assertEqual([], call_hook_calls)
        self.assertTrue(self.scheduler.has_pending_updates())

        self.assertEqual(1, self.scheduler.flush())

        self.assertTrue(self.file2.selected)
        self.assertTrue(future.done())
        self.assertEqual((self.file2, file2_con), future.result())
        self.assertEqual([('on_select', 'file2', True)], self.calls)
        self.assertEqual([(self.file2, file2_con)], call_hook_calls)
        self.assertFalse(self.scheduler.has_pending_updates())

    def test_noop_completes_immediately_even_when_live(self):
        self.file2.selected = True
        file2_con = self.root.child_controllers[1]
        future = file2_con.select()
        self.assertTrue(future.done())
        self.assertEqual([('on_select', 'file2', True)], self.calls)
        self.assertFalse(self.scheduler.has_pending_updates())

    def test_open_mounts_new_children(self):
        dir_con = self.root.child_controllers[0]
        future = dir_con.open()
        self.assertEqual([], dir_con.child_controllers)

        self.scheduler.flush()
        self.assertTrue(future.done())
        self.assertEqual([('on_open', 'dir/', True)], self.calls)
        file1_con = dir_con.child_controllers[0]
        self.assertTrue(file1_con.is_live)

        # new child is live too, so its transitions go through the scheduler as well
        select_future = file1_con.select()
        self.assertFalse(select_future.done())
        self.scheduler.flush()
        self.assertTrue(self.file1.selected)
        self.assertTrue(select_future.done())

        dir_con.close()
        self.scheduler.flush()
        self.assertEqual([], dir_con.child_controllers)
        self.assertFalse(file1_con.is_live)

    def test_toggle_select_twice_before_render_pass(self):
        file2_con = self.root.child_controllers[1]
        first = file2_con.toggle_select()
        second = file2_con.toggle_select()
        self.assertFalse(self.file2.selected)
        self.assertFalse(first.done())
        self.assertFalse(second.done())

        self.scheduler.flush_all()
        self.assertFalse(self.file2.selected)
        self.assertTrue(first.done())
        self.assertTrue(second.done())

    def test_toggle_open_twice_before_render_pass(self):
        dir_con = self.root.child_controllers[0]
        dir_con.toggle_open()
        dir_con.toggle_open()
        self.scheduler.flush_all()
        self.assertFalse(self.dir_node.opened)
        self.assertEqual([], dir_con.child_controllers)

    def test_repeated_select_before_render_pass_is_noop(self):
        file2_con = self.root.child_controllers[1]
        first = file2_con.select()
        second = file2_con.select()
        self.assertFalse(first.done())
        self.assertTrue(second.done())
        self.assertEqual(1, self.scheduler.flush())
        self.assertTrue(first.done())
        self.assertFalse(self.scheduler.has_pending_updates())

    def test_batched_updates_acknowledged_after_whole_pass(self):
        dir_con, file2_con = self.root.child_controllers
        seen_at_ack = []
        dir_con.open(lambda node, con: seen_at_ack.append(self.file2.selected))
        file2_con.select()
        self.assertEqual(2, self.scheduler.flush())
        self.assertEqual(1, self.scheduler.render_pass_count)
        # file2 was rendered in the same pass, before any acknowledgement
        self.assertEqual([True], seen_at_ack)

    def test_transition_started_from_hook_goes_to_next_pass(self):
        dir_con = self.root.child_controllers[0]
        futures = []

        def select_first_child(node, con):
            futures.append(con.child_controllers[0].select())

        dir_con.open(select_first_child)
        self.scheduler.flush()
        self.assertEqual(1, len(futures))
        self.assertFalse(futures[0].done())
        self.assertEqual(1, self.scheduler.flush_all())
        self.assertTrue(futures[0].done())
        self.assertTrue(self.file1.selected)

    def test_hook_exception_propagates_from_flush(self):
        file2_con = self.root.child_controllers[1]
        dir_con = self.root.child_controllers[0]

        def bad_hook(node, con):
            raise ValueError('boom')

        failing = file2_con.select(bad_hook)
        succeeding = dir_con.open()

        with self.assertRaises(ValueError):
            self.scheduler.flush()
        self.assertTrue(failing.done())
        self.assertIsInstance(failing.exception(), ValueError)

        # the second acknowledgement is not lost
        self.assertTrue(self.dir_node.opened)
        self.assertFalse(succeeding.done())
        self.assertTrue(self.scheduler.has_pending_updates())
        self.assertEqual(0, self.scheduler.flush())
        self.assertTrue(succeeding.done())

    def test_detached_controller_runs_synchronously(self):
        self.root.shutdown()
        file2_con = self.root.child_controllers[1]
        self.assertFalse(file2_con.is_live)
        future = file2_con.select()
        self.assertTrue(future.done())
        self.assertTrue(self.file2.selected)
        self.assertFalse(self.scheduler.has_pending_updates())

    def test_rebuild_remounts_new_controllers(self):
        old = self.root.child_controllers
        new = self.root.rebuild()
        for con in old:
            self.assertFalse(con.is_live)
        for con in new:
            self.assertTrue(con.is_live)

    def test_mount_and_unmount_single_controller(self):
        file2_con = self.root.child_controllers[1]
        self.scheduler.unmount(file2_con)
        self.assertFalse(file2_con.is_live)
        self.assertTrue(file2_con.select().done())
        self.scheduler.mount(file2_con)
        self.assertTrue(file2_con.is_live)
        self.assertFalse(file2_con.deselect().done())
        self.scheduler.flush()
        self.assertFalse(self.file2.selected)


if __name__ == '__main__':
    unittest.main()
