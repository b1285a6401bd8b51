import logging
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Tuple, Union

from bitops import pack_bits
from codec import DecodeResult, decode, decode_strict, encode
from errors import EmptyInputError, HuffmanError, MalformedTreeError
from huffman import (
    HuffmanTree,
    build_tree,
    code_table_rows,
    count_frequencies,
    generate_codes,
    single_leaf_tree,
)

logger = logging.getLogger(__name__)

BITS_PER_SYMBOL = 8  #: Fixed-width baseline used for the original size


@dataclass(frozen=True)
class CompressionResult:
    """Everything produced by one :func:`compress` call.

    The ``tree`` must be handed to :func:`decompress` together with
    ``encoded_bits``; no other tree can decode them.

    :ivar encoded_bits: Bitstream as a string of ``'0'`` and ``'1'``.
    :ivar code_table: Mapping from symbol to code.
    :ivar tree: The Huffman tree.
    :ivar frequencies: Symbol counts of the input.
    :ivar symbol_count: Number of input symbols.
    """

    encoded_bits: str
    code_table: Dict[Hashable, str]
    tree: HuffmanTree
    frequencies: Dict[Hashable, int]
    symbol_count: int

    @property
    def original_bit_count(self) -> int:
        """Size of the input at the fixed-width baseline.

        :returns: ``symbol_count * BITS_PER_SYMBOL``.
        :rtype: int
        """
        return self.symbol_count * BITS_PER_SYMBOL

    @property
    def encoded_bit_count(self) -> int:
        """Length of the Huffman bitstream.

        :returns: Number of bits in ``encoded_bits``.
        :rtype: int
        """
        return len(self.encoded_bits)

    @property
    def compression_ratio(self) -> float:
        """Percentage of bits saved relative to the fixed-width baseline."""
        if self.original_bit_count == 0 or self.encoded_bit_count == 0:
            return 0.0
        return (1 - self.encoded_bit_count / self.original_bit_count) * 100

    @property
    def average_code_length(self) -> float:
        if self.symbol_count == 0:
            return 0.0
        return self.encoded_bit_count / self.symbol_count

    def code_table_rows(self, order: str = "code") -> List[Tuple[Hashable, str]]:
        return code_table_rows(self.code_table, order)

    def packed(self) -> Tuple[bytes, int]:
        """Return the bitstream packed into bytes plus its padding bit count."""
        return pack_bits(self.encoded_bits)


@dataclass(frozen=True)
class Failure:
    """A failed :func:`compress` or :func:`decompress` call.

    :ivar error: The error that caused the failure.
    :type error: HuffmanError
    """

    error: HuffmanError

    @property
    def kind(self) -> str:
        return type(self.error).__name__

    @property
    def message(self) -> str:
        return str(self.error)


def compress(text: Sequence[Hashable]) -> Union[CompressionResult, Failure]:
    """Huffman-compress ``text``.

    Input with a single distinct symbol is handled here rather than by the
    tree builder: the tree is one leaf, its code is ``"0"`` and the
    bitstream is one ``'0'`` per symbol.

    :param text: Input symbols, usually a ``str``.
    :type text: Sequence[Hashable]
    :returns: The result, or a :class:`Failure` (never raises
        :class:`HuffmanError`).
    :rtype: CompressionResult | Failure
    """
    try:
        frequencies = count_frequencies(text)
        if not frequencies:
            raise EmptyInputError()

        if len(frequencies) == 1:
            symbol, freq = next(iter(frequencies.items()))
            tree = single_leaf_tree(symbol, freq)
            codes = {symbol: "0"}
            encoded = "0" * len(text)
        else:
            tree = build_tree(frequencies)
            codes = generate_codes(tree)
            encoded = encode(text, codes)
    except HuffmanError as e:
        logger.debug("Compression failed: %s", e)
        return Failure(e)

    result = CompressionResult(
        encoded_bits=encoded,
        code_table=codes,
        tree=tree,
        frequencies=frequencies,
        symbol_count=len(text),
    )
    logger.debug(
        "Compressed %d symbols into %d bits (%.2f%% saved)",
        result.symbol_count,
        result.encoded_bit_count,
        result.compression_ratio,
    )
    return result


def decompress(
    encoded_bits: str, tree: Optional[HuffmanTree], strict: bool = False
) -> Union[DecodeResult, Failure]:
    """Decode ``encoded_bits`` with the tree from the matching compress call.

    A bitstream that ends mid-code is not a failure: the result is returned
    with ``truncated`` set. With ``strict`` it is an ``IncompleteTrailError``
    failure instead.

    :param encoded_bits: Bitstream of ``'0'`` and ``'1'`` characters.
    :type encoded_bits: str
    :param tree: Tree from the :class:`CompressionResult`.
    :type tree: HuffmanTree | None
    :param strict: Treat a truncated bitstream as a failure.
    :type strict: bool
    :returns: Decoded symbols, or a :class:`Failure`.
    :rtype: DecodeResult | Failure
    """
    if tree is None:
        return Failure(MalformedTreeError("No Huffman tree to decode with"))
    try:
        if strict:
            return DecodeResult(decode_strict(encoded_bits, tree))
        return decode(encoded_bits, tree)
    except HuffmanError as e:
        logger.debug("Decompression failed: %s", e)
        return Failure(e)
