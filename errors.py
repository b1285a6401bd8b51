class HuffmanError(ValueError):
    """Base class for every error raised by the Huffman core."""


class EmptyInputError(HuffmanError):
    """Raised when a tree is requested for zero symbols."""

    def __init__(self, message: str = "Cannot compress empty input"):
        super().__init__(message)


class MalformedTreeError(HuffmanError):
    """Raised when an internal node does not have two valid children."""


class UnknownSymbolError(HuffmanError):
    """A symbol to encode has no entry in the code table.

    :ivar symbol: The symbol that could not be encoded.
    :ivar position: Index of the symbol in the input sequence.
    :type position: int
    """

    def __init__(self, symbol, position: int):
        super().__init__(
            f"Symbol {symbol!r} at position {position} has no Huffman code"
        )
        self.symbol = symbol
        self.position = position


class InvalidPathError(HuffmanError):
    """The decode walk stepped off the tree.

    :ivar position: Index of the offending bit in the bitstream.
    :type position: int
    :ivar bit: The offending bit character.
    :type bit: str
    """

    def __init__(self, position: int, bit: str):
        super().__init__(
            f"Invalid path in Huffman tree at bit {position} ({bit!r}): "
            "malformed input or tree"
        )
        self.position = position
        self.bit = bit


class IncompleteTrailError(HuffmanError):
    """The bitstream ended in the middle of a code.

    :ivar trailing_bits: The partial code left over after the last symbol.
    :type trailing_bits: str
    """

    def __init__(self, trailing_bits: str):
        super().__init__(
            "Decoding ended prematurely, last bits "
            f"{trailing_bits!r} did not form a complete symbol"
        )
        self.trailing_bits = trailing_bits
