"""
tree.py

Huffman tree construction.
"""


import heapq
from typing import List, Optional, Tuple

from .logger import Logger, TreeBuildLog
from .models import ByteFrequency, HuffmanTree
from .validators import validate_type


class TreeBuilder:
    """
    Builds a minimum-weight binary tree by repeatedly merging the two
    lightest nodes of a priority queue.

    Tie-break policy: the queue is keyed on (weight, serial). Leaves get
    serials 0..n-1 in ascending byte order, each merged node gets the next
    serial after that. Among equal weights the smaller serial is extracted
    first, so leaves come before merged nodes, lower bytes before higher
    bytes, and older merged nodes before newer ones. The first node
    extracted in a merge becomes the left child.
    """

    TIE_BREAK = "(weight, serial)"

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self.logger: Optional[Logger] = logger
        self.merge_order: List[Tuple[int, int]] = []

    def build(self, frequency: ByteFrequency) -> HuffmanTree:
        """
        Build the tree for a frequency distribution.

        An empty distribution gives an empty tree. A single entry gives a
        tree whose root is a leaf.

        Args:
            frequency (ByteFrequency): The byte counts.

        Returns:
            HuffmanTree: The tree, with node indices equal to their serials.
        """
        validate_type(frequency, "Frequency", ByteFrequency)

        tree = HuffmanTree()
        self.merge_order = []

        # The arena index doubles as the serial, leaves are added in byte order.
        heap = []
        for byte in sorted(frequency):
            index = tree.add_leaf(byte, frequency[byte])
            heap.append((frequency[byte], index))
        heapq.heapify(heap)

        while len(heap) > 1:
            _, left = heapq.heappop(heap)
            _, right = heapq.heappop(heap)
            merged = tree.add_internal(left, right)
            self.merge_order.append((left, right))
            heapq.heappush(heap, (tree.node(merged).weight, merged))

        if heap:
            tree.root = heap[0][1]

        if self.logger is not None:
            self.logger.log(TreeBuildLog(len(frequency), len(self.merge_order), tree.weight))
        return tree


def build_tree(frequency: ByteFrequency, logger: Optional[Logger] = None) -> HuffmanTree:
    """Shortcut for TreeBuilder(logger).build(frequency)."""
    return TreeBuilder(logger).build(frequency)
