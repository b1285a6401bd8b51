import argparse
import logging
import sys

from bitops import unpack_bits
from huffman import TABLE_ORDERS
from session import CompressorSession, display_symbol

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman text compressor"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information about tree and table construction",
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    comp = subparsers.add_parser(
        "compress", aliases=["c"], help="Compress text and show the code table"
    )
    comp.add_argument(
        "text",
        nargs="?",
        help="Text to compress (default: read from --file or stdin)",
    )
    comp.add_argument(
        "-f", "--file", help="Read the text from a UTF-8 file"
    )
    comp.add_argument(
        "--order",
        choices=TABLE_ORDERS,
        default="code",
        help="Ordering of the code table (default: code)",
    )
    comp.add_argument(
        "--packed",
        action="store_true",
        help="Also show the bitstream packed into bytes (hex)",
    )
    comp.add_argument(
        "-D",
        "--no-decompress",
        action="store_true",
        help="Skip decompressing the result",
    )
    return parser


def _read_text(args) -> str:
    """Pick the input text from the positional argument, a file or stdin.

    :raises FileNotFoundError: If ``--file`` does not exist.
    """
    if args.text is not None:
        return args.text
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def _fmt_pct(value: float) -> str:
    """Format a percentage like ``43.75%``."""
    return f"{value:.2f}%"


def _fmt_bits(n: int) -> str:
    """Format a bit count, adding its size in bytes.

    :param n: Number of bits.
    :type n: int
    :returns: Human-readable string such as ``"12 bits (1.50 B)"``.
    :rtype: str
    """
    return f"{n} bits ({n / 8:.2f} B)"


def run_compress(args) -> int:
    """Compress, print the results and optionally decompress.

    :returns: Process exit status.
    :rtype: int
    """
    try:
        text = _read_text(args)
    except FileNotFoundError:
        print(f"[!] Input file not found: {args.file}")
        return 1
    except (PermissionError, IsADirectoryError):
        print(f"[!] Cannot read input file: {args.file}")
        return 1
    except UnicodeDecodeError:
        print(f"[!] Input file is not valid UTF-8 text: {args.file}")
        return 1

    session = CompressorSession()
    if not session.compress(text):
        print(f"[!] {session.error}")
        return 1

    result = session.result
    print("Compressed output (bits):")
    print(result.encoded_bits)
    if args.packed:
        packed, padding = result.packed()
        print(f"Packed: {packed.hex()} (padding: {padding} bits)")
        if unpack_bits(packed, padding) != result.encoded_bits:
            print("[!] Packed bits do not unpack to the bitstream")
            return 1
    print("Original size: ", _fmt_bits(result.original_bit_count))
    print("Compressed size: ", _fmt_bits(result.encoded_bit_count))
    print("Compression ratio: ", _fmt_pct(result.compression_ratio))
    print(f"Average code length: {result.average_code_length:.3f} bits/char")
    print(
        f"Tree: {len(result.tree.leaves())} leaves, "
        f"depth {result.tree.depth()}"
    )
    print()
    print("Huffman code table:")
    print(f"{'Char':<10} {'Freq':>6}  Code")
    for symbol, code in result.code_table_rows(args.order):
        print(
            f"{display_symbol(symbol):<10} "
            f"{result.frequencies[symbol]:>6}  {code}"
        )

    if args.no_decompress:
        return 0

    print()
    if not session.decompress():
        print(f"[!] {session.error}")
        return 1
    if session.warning:
        print(f"[!] {session.warning}")
    print("Decompressed output:")
    print(session.decompressed)
    status = "OK" if session.decompressed == text else "MISMATCH"
    print(f"Round trip: {status}")
    return 0 if status == "OK" else 1


def main(argv=None):
    """Entry point for the CLI tool.

    :param argv: Argument list (default: ``sys.argv[1:]``).
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if args.cmd in ["compress", "c"]:
        return run_compress(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
