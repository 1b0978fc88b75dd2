"""
tables.py

Derives code tables from Huffman trees.
"""


from typing import Dict, Iterable, Optional, Union

from .logger import Logger, CodeTableLog
from .models import ByteFrequency, Code, CodeTable, HuffmanTree, find_prefix_conflict
from .settings import DEFAULT_CODE
from .tree import TreeBuilder
from .validators import validate_type


def build_code_table(tree: HuffmanTree, logger: Optional[Logger] = None) -> CodeTable:
    """
    Walk the tree depth first and record the path to every leaf, 0 for a
    left branch and 1 for a right branch.

    A tree whose root is a leaf has no path, its byte gets DEFAULT_CODE.
    An empty tree gives an empty table.

    Args:
        tree (HuffmanTree): The tree to walk.
        logger (Optional[Logger]): Receives one CodeTableLog per entry.

    Returns:
        CodeTable: The byte to code bijection.
    """
    validate_type(tree, "Tree", HuffmanTree)

    codes: Dict[int, Code] = {}
    if tree.root is not None:
        stack = [(tree.root, ())]
        while stack:
            index, path = stack.pop()
            node = tree.node(index)
            if node.is_leaf:
                codes[node.byte] = path if path else DEFAULT_CODE
                continue
            stack.append((node.right, path + (1,)))
            stack.append((node.left, path + (0,)))

    table = CodeTable(codes)
    if logger is not None:
        weights = {node.byte: node.weight for node in tree.nodes if node.is_leaf}
        for byte, code in table.items():
            logger.log(CodeTableLog(byte, weights[byte], len(code)))
    return table


def build_code_table_from_frequency(frequency: ByteFrequency, logger: Optional[Logger] = None) -> CodeTable:
    """Build the tree for a frequency distribution and derive its table."""
    return build_code_table(TreeBuilder(logger).build(frequency), logger)


def is_prefix_free(codes: Union[CodeTable, Iterable[Code]]) -> bool:
    """Check that no code of a table, or of a plain collection of codes, is a prefix of another."""
    if isinstance(codes, CodeTable):
        codes = codes.codes()
    return find_prefix_conflict(codes) is None
