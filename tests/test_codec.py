import logging
import pytest

from codec import DecodeResult, decode, decode_strict, encode
from errors import IncompleteTrailError, InvalidPathError, UnknownSymbolError
from huffman import build_tree, count_frequencies, generate_codes, single_leaf_tree


def test_encode_known_codes(abc_tree):
    codes = generate_codes(abc_tree)
    assert encode("abc", codes) == "10110"
    assert encode("", codes) == ""


def test_encode_unknown_symbol_raises():
    codes = {"a": "0", "b": "1"}
    with pytest.raises(UnknownSymbolError) as exc:
        encode("abz", codes)
    assert exc.value.symbol == "z"
    assert exc.value.position == 2


def test_roundtrip(sample_text):
    tree = build_tree(count_frequencies(sample_text))
    bits = encode(sample_text, generate_codes(tree))
    result = decode(bits, tree)
    assert result.text == sample_text
    assert not result.truncated


def test_decode_resets_to_root_after_every_symbol(abc_tree):
    assert decode("0100110", abc_tree).symbols == ["c", "a", "c", "b", "c"]


def test_decode_empty_bits(abc_tree):
    assert decode("", abc_tree) == DecodeResult([])


def test_decode_invalid_bit_raises(abc_tree):
    with pytest.raises(InvalidPathError) as exc:
        decode("01x", abc_tree)
    assert exc.value.position == 2


def test_decode_truncated_trail_warns(abc_tree, caplog):
    with caplog.at_level(logging.WARNING, logger="codec"):
        result = decode("011", abc_tree)
    assert result.symbols == ["c", "b"]
    assert not result.truncated

    with caplog.at_level(logging.WARNING, logger="codec"):
        result = decode("01", abc_tree)
    assert result.symbols == ["c"]
    assert result.truncated
    assert result.trailing_bits == "1"
    assert "prematurely" in caplog.text


def test_decode_strict_rejects_truncation(abc_tree):
    assert decode_strict("010", abc_tree) == ["c", "a"]
    with pytest.raises(IncompleteTrailError) as exc:
        decode_strict("0101", abc_tree)
    assert exc.value.trailing_bits == "1"


def test_decode_single_leaf_tree():
    tree = single_leaf_tree("a", 4)
    assert decode("0000", tree).text == "aaaa"
    with pytest.raises(InvalidPathError):
        decode("001", tree)


def test_decode_non_string_symbols():
    data = [3, 1, 3, 3, 2]
    tree = build_tree(count_frequencies(data))
    bits = encode(data, generate_codes(tree))
    assert decode(bits, tree).symbols == data


def test_decode_parent_first_arena_matches_generated_codes():
    from huffman import HuffmanTree, Internal, Leaf

    tree = HuffmanTree([Internal(2, 1, 2), Leaf("a", 1), Leaf("b", 1)], 0)
    codes = generate_codes(tree)
    bits = encode("abba", codes)
    assert bits == "0110"
    assert decode(bits, tree).text == "abba"
