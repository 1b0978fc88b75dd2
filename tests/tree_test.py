import unittest

from huffcodec.models import ByteFrequency
from huffcodec.tree import TreeBuilder, build_tree
from huffcodec.logger import Logger, TreeBuildLog

A, B, C = ord('a'), ord('b'), ord('c')

class TestTreeBuilder(unittest.TestCase):
    def test_empty_frequency(self):
        tree = build_tree(ByteFrequency())
        self.assertTrue(tree.is_empty)
        self.assertEqual(tree.weight, 0)
        self.assertEqual(len(tree), 0)

    def test_single_entry_is_leaf_root(self):
        tree = build_tree(ByteFrequency({A: 5}))
        root = tree.node(tree.root)
        self.assertTrue(root.is_leaf)
        self.assertEqual(root.byte, A)
        self.assertEqual(root.weight, 5)
        self.assertEqual(len(tree), 1)

    def test_two_entries(self):
        tree = build_tree(ByteFrequency({A: 3, B: 2}))
        root = tree.node(tree.root)
        self.assertFalse(root.is_leaf)
        self.assertEqual(root.weight, 5)
        self.assertEqual(tree.node(root.left).byte, B)
        self.assertEqual(tree.node(root.right).byte, A)

    def test_merge_order_aaaabbc(self):
        builder = TreeBuilder()
        tree = builder.build(ByteFrequency({A: 4, B: 2, C: 1}))
        self.assertEqual(tree.weight, 7)
        # c and b merge first into weight 3, then that node merges with a.
        first_left, first_right = builder.merge_order[0]
        self.assertEqual(tree.node(first_left).byte, C)
        self.assertEqual(tree.node(first_right).byte, B)
        merged = tree.node(tree.root)
        self.assertEqual(tree.node(merged.left).weight, 3)
        self.assertEqual(tree.node(merged.right).byte, A)
        self.assertEqual(len(builder.merge_order), 2)

    def test_every_internal_node_has_two_children(self):
        tree = build_tree(ByteFrequency({i: i + 1 for i in range(40)}))
        for node in tree.nodes:
            if node.is_leaf:
                self.assertIsNone(node.left)
                self.assertIsNone(node.right)
            else:
                self.assertIsNotNone(node.left)
                self.assertIsNotNone(node.right)
                self.assertEqual(node.weight, tree.node(node.left).weight + tree.node(node.right).weight)
        self.assertEqual(len(tree.leaves()), 40)
        self.assertEqual(len(tree), 79)

    def test_tie_break_prefers_lower_bytes_then_leaves(self):
        builder = TreeBuilder()
        tree = builder.build(ByteFrequency({C: 1, A: 1, B: 1}))
        # Equal weights: a and b (lower bytes) merge first, then c (a leaf) comes before the merged node.
        first_left, first_right = builder.merge_order[0]
        self.assertEqual((tree.node(first_left).byte, tree.node(first_right).byte), (A, B))
        root = tree.node(tree.root)
        self.assertEqual(tree.node(root.left).byte, C)
        self.assertEqual(tree.depth_of(C), 1)
        self.assertEqual(tree.depth_of(A), 2)

    def test_deterministic(self):
        freq = ByteFrequency({i: (i * 7) % 5 + 1 for i in range(30)})
        first = TreeBuilder()
        second = TreeBuilder()
        first.build(freq)
        second.build(freq)
        self.assertEqual(first.merge_order, second.merge_order)

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            build_tree({A: 1})

    def test_logs_summary(self):
        logger = Logger()
        build_tree(ByteFrequency({A: 4, B: 2, C: 1}), logger)
        log = [log for log in logger.logs if isinstance(log, TreeBuildLog)][0]
        self.assertEqual((log.leaves, log.merges, log.weight), (3, 2, 7))

if __name__ == '__main__':
    unittest.main()
