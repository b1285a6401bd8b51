import logging
from typing import Dict, Hashable, List, NamedTuple, Sequence

from errors import IncompleteTrailError, InvalidPathError, UnknownSymbolError
from huffman import HuffmanTree

logger = logging.getLogger(__name__)


class DecodeResult(NamedTuple):
    """Outcome of a decode.

    :ivar symbols: Decoded symbols, in order.
    :ivar truncated: ``True`` when the bitstream ended in the middle of a code.
    :ivar trailing_bits: The unconsumed partial code (empty unless truncated).
    """

    symbols: List[Hashable]
    truncated: bool = False
    trailing_bits: str = ""

    @property
    def text(self) -> str:
        """Decoded symbols joined into a string."""
        return "".join(str(s) for s in self.symbols)


def encode(sequence: Sequence[Hashable], codes: Dict[Hashable, str]) -> str:
    """Concatenate the codes of every symbol of ``sequence``.

    :param sequence: Symbols to encode.
    :type sequence: Sequence[Hashable]
    :param codes: Mapping from symbol to code.
    :type codes: Dict[Hashable, str]
    :returns: Bitstream as a string of ``'0'`` and ``'1'``.
    :rtype: str
    :raises UnknownSymbolError: If a symbol has no code. Nothing is returned
        in that case.
    """
    parts = []
    for position, symbol in enumerate(sequence):
        code = codes.get(symbol)
        if code is None:
            raise UnknownSymbolError(symbol, position)
        parts.append(code)
    return "".join(parts)


def decode(bits: str, tree: HuffmanTree) -> DecodeResult:
    """Walk ``tree`` bit by bit and emit a symbol at every leaf.

    After each emitted symbol the walk restarts at the root. For a tree
    whose root is a leaf every ``'0'`` emits that symbol.

    :param bits: Bitstream of ``'0'`` and ``'1'`` characters.
    :type bits: str
    :param tree: The tree the bitstream was encoded with.
    :type tree: HuffmanTree
    :returns: Decoded symbols and the truncation flag.
    :rtype: DecodeResult
    :raises InvalidPathError: If a bit has no matching edge.
    """
    symbols: List[Hashable] = []
    root = tree.root
    if tree.is_leaf(root):
        symbol = tree.node(root).symbol
        for position, bit in enumerate(bits):
            if bit != "0":
                raise InvalidPathError(position, bit)
            symbols.append(symbol)
        return DecodeResult(symbols)

    current = root
    path_start = 0
    for position, bit in enumerate(bits):
        if current == root:
            path_start = position
        nxt = tree.child(current, bit)
        if nxt is None:
            raise InvalidPathError(position, bit)
        if tree.is_leaf(nxt):
            symbols.append(tree.node(nxt).symbol)
            current = root
        else:
            current = nxt

    if current != root:
        trailing = bits[path_start:]
        logger.warning(str(IncompleteTrailError(trailing)))
        return DecodeResult(symbols, True, trailing)
    return DecodeResult(symbols)


def decode_strict(bits: str, tree: HuffmanTree) -> List[Hashable]:
    """Like :func:`decode`, but reject a truncated bitstream.

    :raises IncompleteTrailError: If the bits end in the middle of a code.
    :raises InvalidPathError: If a bit has no matching edge.
    """
    result = decode(bits, tree)
    if result.truncated:
        raise IncompleteTrailError(result.trailing_bits)
    return result.symbols
