"""
models.py

The shared objects used in huffcodec.

"""


from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

Code = Tuple[int, ...]


class HuffmanError(ValueError):
    """Base class for coding errors."""


class MissingCodeError(HuffmanError):
    """Raised when a byte to encode has no entry in the code table."""

    def __init__(self, byte: int, position: Optional[int] = None) -> None:
        self.byte = byte
        self.position = position
        if position is None:
            message = f"No code for byte {byte}"
        else:
            message = f"No code for byte {byte} at position {position}"
        super().__init__(message)


class TruncatedStreamError(HuffmanError):
    """Raised when a bitstream ends in the middle of a code."""

    def __init__(self, message: str, remaining_bits: int = 0) -> None:
        self.remaining_bits = remaining_bits
        super().__init__(message)


class CorruptStreamError(HuffmanError):
    """Raised when a bit sequence cannot match any code."""


class FrameFormatError(HuffmanError):
    """Raised when a serialized frame is malformed."""


def find_prefix_conflict(codes: Iterable[Code]) -> Optional[Tuple[Code, Code]]:
    """
    Find a pair of codes where the first is a prefix of the second.

    After sorting, a code that prefixes any other code also prefixes its
    immediate successor.
    """
    ordered = sorted(tuple(code) for code in codes)
    for current, following in zip(ordered, ordered[1:]):
        if following[:len(current)] == current:
            return current, following
    return None


class ByteFrequency(Mapping):
    """
    Sparse mapping from byte value to its occurrence count.

    Only bytes that occur have an entry. Iteration is in ascending byte order.
    """
    def __init__(self, counts: Optional[Dict[int, int]] = None) -> None:
        self._counts: Dict[int, int] = {}
        for byte, count in sorted((counts or {}).items()):
            if not isinstance(byte, int) or not 0 <= byte <= 255:
                raise ValueError(f"Byte value must be an int in 0..255, got {byte!r}")
            if not isinstance(count, int) or count < 0:
                raise ValueError(f"Count for byte {byte} must be a non-negative int")
            if count > 0:
                self._counts[byte] = count

    @classmethod
    def from_counts(cls, counts: Dict[int, int]) -> 'ByteFrequency':
        return cls(counts)

    @property
    def total(self) -> int:
        """Total number of bytes counted."""
        return sum(self._counts.values())

    def __getitem__(self, byte: int) -> int:
        return self._counts[byte]

    def __iter__(self) -> Iterator[int]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{byte}: {count}" for byte, count in self._counts.items()) + "}"

    def __repr__(self) -> str:
        return f"ByteFrequency({self})"


class HuffmanNode:
    """
    A node of a HuffmanTree. Leaves hold a byte, internal nodes hold the
    arena indices of exactly two children.
    """
    __slots__ = ("weight", "byte", "left", "right")

    def __init__(self, weight: int, byte: Optional[int] = None,
                 left: Optional[int] = None, right: Optional[int] = None) -> None:
        self.weight: int = weight
        self.byte: Optional[int] = byte
        self.left: Optional[int] = left
        self.right: Optional[int] = right

    @property
    def is_leaf(self) -> bool:
        return self.byte is not None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"HuffmanNode(weight={self.weight}, byte={self.byte})"
        return f"HuffmanNode(weight={self.weight}, left={self.left}, right={self.right})"


class HuffmanTree:
    """
    Binary tree stored as an arena of nodes addressed by index.

    An empty tree has no nodes and a root of None.
    """
    def __init__(self) -> None:
        self.nodes: List[HuffmanNode] = []
        self.root: Optional[int] = None

    def add_leaf(self, byte: int, weight: int) -> int:
        self.nodes.append(HuffmanNode(weight, byte=byte))
        return len(self.nodes) - 1

    def add_internal(self, left: int, right: int) -> int:
        weight = self.nodes[left].weight + self.nodes[right].weight
        self.nodes.append(HuffmanNode(weight, left=left, right=right))
        return len(self.nodes) - 1

    def node(self, index: int) -> HuffmanNode:
        return self.nodes[index]

    @property
    def is_empty(self) -> bool:
        return self.root is None

    @property
    def weight(self) -> int:
        if self.root is None:
            return 0
        return self.nodes[self.root].weight

    def leaves(self) -> List[HuffmanNode]:
        """Leaf nodes in left-to-right order."""
        return [self.nodes[index] for index, _ in self.walk() if self.nodes[index].is_leaf]

    def walk(self) -> Iterator[Tuple[int, int]]:
        """Yield (node index, depth) pairs in depth-first preorder, left child first."""
        if self.root is None:
            return
        stack = [(self.root, 0)]
        while stack:
            index, depth = stack.pop()
            yield index, depth
            node = self.nodes[index]
            if not node.is_leaf:
                stack.append((node.right, depth + 1))
                stack.append((node.left, depth + 1))

    def depth_of(self, byte: int) -> int:
        """
        Get the depth of the leaf holding the given byte.

        Raises:
            KeyError: If no leaf holds the byte.
        """
        for index, depth in self.walk():
            if self.nodes[index].byte == byte:
                return depth
        raise KeyError(byte)

    def __len__(self) -> int:
        return len(self.nodes)


class CodeTable:
    """
    Bijection between byte values and their prefix codes.

    Codes are tuples of 0/1 ints. The table is read-only once constructed.
    """
    def __init__(self, codes: Optional[Dict[int, Code]] = None) -> None:
        self._codes: Dict[int, Code] = {}
        self._bytes: Dict[Code, int] = {}
        for byte, code in sorted((codes or {}).items()):
            code = tuple(code)
            if not isinstance(byte, int) or not 0 <= byte <= 255:
                raise ValueError(f"Byte value must be an int in 0..255, got {byte!r}")
            if len(code) == 0:
                raise ValueError(f"Code for byte {byte} is empty")
            if any(bit not in (0, 1) for bit in code):
                raise ValueError(f"Code for byte {byte} must contain only 0 and 1")
            if code in self._bytes:
                raise ValueError(f"Bytes {self._bytes[code]} and {byte} share the code {code}")
            self._codes[byte] = code
            self._bytes[code] = byte

        conflict = find_prefix_conflict(self._codes.values())
        if conflict is not None:
            shorter, longer = conflict
            raise ValueError(
                f"Code of byte {self._bytes[shorter]} is a prefix of the code of byte {self._bytes[longer]}"
            )

    def code_for(self, byte: int) -> Code:
        """
        Get the code of a byte.

        Raises:
            MissingCodeError: If the byte has no code.
        """
        try:
            return self._codes[byte]
        except KeyError:
            raise MissingCodeError(byte) from None

    def byte_for(self, code: Code) -> Optional[int]:
        """Get the byte for an exact code, or None when no entry matches."""
        return self._bytes.get(tuple(code))

    def lookup(self, code: Code) -> int:
        """Like byte_for, but raises KeyError on a miss."""
        return self._bytes[tuple(code)]

    def lengths(self) -> Dict[int, int]:
        return {byte: len(code) for byte, code in self._codes.items()}

    @property
    def max_length(self) -> int:
        return max((len(code) for code in self._codes.values()), default=0)

    def items(self) -> Iterator[Tuple[int, Code]]:
        return iter(self._codes.items())

    def codes(self) -> List[Code]:
        return list(self._codes.values())

    def __contains__(self, byte: object) -> bool:
        return byte in self._codes

    def __iter__(self) -> Iterator[int]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return False
        return self._codes == other._codes

    def __str__(self) -> str:
        return "{" + ", ".join(
            f"{byte}: {''.join(str(bit) for bit in code)}" for byte, code in self._codes.items()
        ) + "}"

    def __repr__(self) -> str:
        return f"CodeTable({self})"
