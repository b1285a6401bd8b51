import logging
from typing import Hashable, List, Optional, Tuple

from codec import DecodeResult
from compressor import CompressionResult, Failure, compress, decompress

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "EmptyInputError": "Cannot compress empty or whitespace-only text.",
    "MalformedTreeError": (
        "Huffman tree is invalid. Please compress text first to generate "
        "the tree."
    ),
    "UnknownSymbolError": "Error during encoding: a character has no code.",
    "InvalidPathError": (
        "Error during decoding: the bits do not match the Huffman tree."
    ),
    "IncompleteTrailError": (
        "Decoding ended prematurely, last bits did not form a complete "
        "character."
    ),
}  #: User-facing message for every error kind

NO_INPUT_MESSAGE = "Please enter some text to compress."
NO_DATA_MESSAGE = (
    "No compressed data to decompress. Please compress text first."
)

_DISPLAY_NAMES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", " ": "[space]"}


def display_symbol(symbol: Hashable) -> str:
    """Render a symbol for a code table row, making whitespace visible.

    :param symbol: Symbol to render.
    :returns: Printable representation.
    :rtype: str
    """
    return _DISPLAY_NAMES.get(symbol, str(symbol))


def error_message(failure: Failure) -> str:
    """Map a failure to the message shown to the user."""
    return ERROR_MESSAGES.get(failure.kind, failure.message)


class CompressorSession:
    """Holds the state of one compress/decompress workflow.

    Derived state (result, decoded text, messages) is cleared at the start
    of every operation so that a failed compress can never leave an old
    bitstream paired with a new tree.

    :ivar result: Result of the last successful compress, if any.
    :type result: CompressionResult | None
    :ivar decompressed: Text produced by the last decompress, if any.
    :type decompressed: str | None
    :ivar error: User-facing message of the last failure.
    :type error: str
    :ivar warning: User-facing warning of the last operation.
    :type warning: str
    """

    def __init__(self):
        self.result: Optional[CompressionResult] = None
        self.decompressed: Optional[str] = None
        self.error = ""
        self.warning = ""

    def reset(self):
        """Forget the last result, decoded text and messages.

        :returns: None
        :rtype: None
        """
        self.result = None
        self.decompressed = None
        self.error = ""
        self.warning = ""

    def compress(self, text: str) -> bool:
        """Compress ``text``, replacing any previous state.

        :param text: Text to compress.
        :type text: str
        :returns: ``True`` on success.
        :rtype: bool
        """
        self.reset()
        if not text.strip():
            self.error = NO_INPUT_MESSAGE
            return False

        outcome = compress(text)
        if isinstance(outcome, Failure):
            self.error = error_message(outcome)
            logger.info("Compress failed: %s", outcome.message)
            return False
        self.result = outcome
        return True

    def decompress(self) -> bool:
        """Decode the bitstream of the last compress with its tree.

        The stored bitstream came from the same compress call, so leftover
        bits at the end are reported as an error.

        :returns: ``True`` if decoding produced the text.
        :rtype: bool
        """
        if self.result is None or not self.result.encoded_bits:
            self.error = NO_DATA_MESSAGE
            self.warning = ""
            self.decompressed = None
            return False
        return (
            self.decompress_bits(self.result.encoded_bits, strict=True)
            is not None
        )

    def decompress_bits(
        self, bits: str, strict: bool = False
    ) -> Optional[DecodeResult]:
        """Decode caller-supplied ``bits`` with the tree of the last compress.

        :param bits: Bitstream, e.g. an edited copy of the compressed output.
        :type bits: str
        :param strict: Report a truncated bitstream as an error, not a warning.
        :type strict: bool
        :returns: The decode result, or ``None`` on failure (see ``error``).
        :rtype: DecodeResult | None
        """
        self.error = ""
        self.warning = ""
        self.decompressed = None
        if self.result is None:
            self.error = NO_DATA_MESSAGE
            return None
        outcome = decompress(bits, self.result.tree, strict=strict)
        if isinstance(outcome, Failure):
            self.error = error_message(outcome)
            logger.info("Decompress failed: %s", outcome.message)
            return None
        if outcome.truncated:
            self.warning = ERROR_MESSAGES["IncompleteTrailError"]
        self.decompressed = outcome.text
        return outcome

    def table_rows(self, order: str = "code") -> List[Tuple[str, str]]:
        """Code table of the last result with printable symbols."""
        if self.result is None:
            return []
        return [
            (display_symbol(symbol), code)
            for symbol, code in self.result.code_table_rows(order)
        ]
