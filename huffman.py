import heapq
import logging
from collections import Counter
from typing import Dict, Hashable, Iterable, List, NamedTuple, Optional, Tuple, Union

from errors import EmptyInputError, MalformedTreeError

logger = logging.getLogger(__name__)

TABLE_ORDERS = ("code", "symbol", "length", "table")  #: Orders accepted by ``code_table_rows``


class Leaf(NamedTuple):
    """Tree leaf holding exactly one symbol and its frequency."""

    symbol: Hashable
    freq: int


class Internal(NamedTuple):
    """Internal tree node.

    :ivar freq: Sum of the children's frequencies.
    :ivar left: Arena id of the child reached with bit ``'0'``.
    :ivar right: Arena id of the child reached with bit ``'1'``.
    """

    freq: int
    left: int
    right: int


Node = Union[Leaf, Internal]


class HuffmanTree:
    """Binary Huffman tree stored as an arena of nodes indexed by id.

    Ids are plain list indices; the builder appends children before their
    parent, but any order is accepted as long as every node is reachable
    from the root at most once.

    :ivar nodes: The node arena.
    :type nodes: List[Leaf | Internal]
    :ivar root: Arena id of the root node.
    :type root: int
    """

    def __init__(self, nodes: List[Node], root: int):
        """Wrap an existing arena.

        :param nodes: Arena of ``Leaf`` and ``Internal`` nodes.
        :type nodes: List[Leaf | Internal]
        :param root: Id of the root node inside ``nodes``.
        :type root: int
        :raises MalformedTreeError: If ``root`` is not a valid id.
        """
        if not 0 <= root < len(nodes):
            raise MalformedTreeError(f"Root id {root} is outside the tree")
        self.nodes = list(nodes)
        self.root = root

    def __len__(self) -> int:
        """Return the number of nodes in the arena.

        :returns: Node count, leaves and internal nodes together.
        :rtype: int
        """
        return len(self.nodes)

    def __eq__(self, other):
        if not isinstance(other, HuffmanTree):
            return NotImplemented
        return self.root == other.root and self.nodes == other.nodes

    def __repr__(self):
        return f"HuffmanTree(nodes={len(self.nodes)}, root={self.root})"

    def node(self, node_id: int) -> Node:
        """Look up a node by id.

        :param node_id: Arena id.
        :type node_id: int
        :returns: The node stored under ``node_id``.
        :rtype: Leaf | Internal
        :raises MalformedTreeError: If ``node_id`` is outside the arena.
        """
        if not 0 <= node_id < len(self.nodes):
            raise MalformedTreeError(f"Node id {node_id} is outside the tree")
        return self.nodes[node_id]

    def is_leaf(self, node_id: int) -> bool:
        """Tell whether ``node_id`` is a leaf.

        :param node_id: Arena id.
        :type node_id: int
        :returns: ``True`` for a ``Leaf``.
        :rtype: bool
        """
        return isinstance(self.node(node_id), Leaf)

    def child(self, node_id: int, bit: str) -> Optional[int]:
        """Return the id of the child reached from ``node_id`` by ``bit``.

        :param node_id: Current node id.
        :type node_id: int
        :param bit: ``'0'`` for the left child, ``'1'`` for the right child.
        :type bit: str
        :returns: Child id, or ``None`` if there is no such edge.
        :rtype: int | None
        """
        node = self.node(node_id)
        if isinstance(node, Leaf):
            return None
        if bit == "0":
            return node.left
        if bit == "1":
            return node.right
        return None

    def leaves(self) -> List[Leaf]:
        """Return every leaf of the arena."""
        return [n for n in self.nodes if isinstance(n, Leaf)]

    def depth(self) -> int:
        """Return the length of the longest root-to-leaf path.

        :returns: Depth of the deepest leaf; 0 for a one-leaf tree.
        :rtype: int
        :raises MalformedTreeError: If a node is reachable twice.
        """
        best = 0
        seen = set()
        stack = [(self.root, 0)]
        while stack:
            node_id, level = stack.pop()
            if node_id in seen:
                raise MalformedTreeError(f"Node {node_id} is shared in the tree")
            seen.add(node_id)
            node = self.node(node_id)
            if isinstance(node, Leaf):
                best = max(best, level)
            else:
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
        return best


def count_frequencies(sequence: Iterable[Hashable]) -> Dict[Hashable, int]:
    """Count how many times every distinct symbol occurs in ``sequence``.

    :param sequence: Input symbols (e.g. the characters of a string).
    :type sequence: Iterable[Hashable]
    :returns: Mapping from symbol to occurrence count; empty for empty input.
    :rtype: Dict[Hashable, int]
    """
    return dict(Counter(sequence))


def single_leaf_tree(symbol: Hashable, freq: int) -> HuffmanTree:
    """Build the degenerate tree used when the input has one distinct symbol.

    :param symbol: The only symbol of the input.
    :param int freq: Number of occurrences of ``symbol``.
    :returns: A tree whose root is a leaf.
    :rtype: HuffmanTree
    """
    return HuffmanTree([Leaf(symbol, freq)], 0)


def build_tree(frequencies: Dict[Hashable, int]) -> HuffmanTree:
    """Build a Huffman tree by repeatedly merging the two rarest nodes.

    Nodes are kept in a min-heap keyed by ``(freq, seq)`` where ``seq`` is
    the order in which the node entered the heap, so equal frequencies are
    broken deterministically. The first node popped becomes the left child.

    :param frequencies: Mapping from symbol to count (every count >= 1).
    :type frequencies: Dict[Hashable, int]
    :returns: The built tree.
    :rtype: HuffmanTree
    :raises EmptyInputError: If ``frequencies`` is empty.
    :raises ValueError: If ``frequencies`` has a single entry; use
        :func:`single_leaf_tree` for that case.
    """
    if not frequencies:
        raise EmptyInputError("Cannot build a Huffman tree from zero symbols")
    if len(frequencies) == 1:
        raise ValueError(
            "A Huffman tree needs at least two distinct symbols"
        )

    nodes: List[Node] = []
    heap: List[Tuple[int, int, int]] = []
    for symbol, freq in frequencies.items():
        if freq < 1:
            raise ValueError(f"Frequency of {symbol!r} must be positive")
        nodes.append(Leaf(symbol, freq))
        heap.append((freq, len(nodes) - 1, len(nodes) - 1))
    heapq.heapify(heap)
    seq = len(nodes)

    while len(heap) > 1:
        left_freq, _, left = heapq.heappop(heap)
        right_freq, _, right = heapq.heappop(heap)
        nodes.append(Internal(left_freq + right_freq, left, right))
        heapq.heappush(heap, (left_freq + right_freq, seq, len(nodes) - 1))
        seq += 1

    root = heap[0][2]
    logger.debug(
        "Built Huffman tree: %d symbols, %d nodes", len(frequencies), len(nodes)
    )
    return HuffmanTree(nodes, root)


def generate_codes(tree: HuffmanTree) -> Dict[Hashable, str]:
    """Assign a bit-string code to every leaf of ``tree``.

    The walk appends ``'0'`` when descending left and ``'1'`` when
    descending right. A tree whose root is a leaf gets the code ``"0"``.

    :param tree: Tree produced by :func:`build_tree` or
        :func:`single_leaf_tree`.
    :type tree: HuffmanTree
    :returns: Mapping from symbol to its code.
    :rtype: Dict[Hashable, str]
    :raises MalformedTreeError: If an internal node references a child that
        is outside the arena, or a node that is reachable twice.
    """
    root_node = tree.node(tree.root)
    if isinstance(root_node, Leaf):
        return {root_node.symbol: "0"}

    codes: Dict[Hashable, str] = {}
    seen = set()
    stack = [(tree.root, "")]
    while stack:
        node_id, code = stack.pop()
        if node_id in seen:
            raise MalformedTreeError(f"Node {node_id} is shared in the tree")
        seen.add(node_id)
        node = tree.node(node_id)
        if isinstance(node, Leaf):
            codes[node.symbol] = code
            continue
        for child, bit in ((node.right, "1"), (node.left, "0")):
            if not 0 <= child < len(tree):
                raise MalformedTreeError(
                    f"Internal node {node_id} has an invalid child {child}"
                )
            stack.append((child, code + bit))
    return codes


def code_table_rows(
    codes: Dict[Hashable, str], order: str = "code"
) -> List[Tuple[Hashable, str]]:
    """Project a code table into ``(symbol, code)`` pairs for display.

    :param codes: Mapping from symbol to code.
    :type codes: Dict[Hashable, str]
    :param order: ``"code"`` (shortest first, then lexicographic code),
        ``"length"`` (shortest first, then symbol), ``"symbol"``, or
        ``"table"`` (mapping order).
    :type order: str
    :returns: Ordered list of pairs.
    :rtype: List[Tuple[Hashable, str]]
    :raises ValueError: If ``order`` is unknown.
    """
    rows = list(codes.items())
    if order == "table":
        return rows
    if order == "code":
        return sorted(rows, key=lambda r: (len(r[1]), r[1]))
    if order == "length":
        return sorted(rows, key=lambda r: (len(r[1]), str(r[0])))
    if order == "symbol":
        return sorted(rows, key=lambda r: str(r[0]))
    raise ValueError(f"Unknown table order: {order!r}")
