from session import (
    ERROR_MESSAGES,
    NO_DATA_MESSAGE,
    NO_INPUT_MESSAGE,
    CompressorSession,
    display_symbol,
    error_message,
)


def test_display_symbol_makes_whitespace_visible():
    assert display_symbol("\n") == "\\n"
    assert display_symbol(" ") == "[space]"
    assert display_symbol("\t") == "\\t"
    assert display_symbol("a") == "a"
    assert display_symbol(7) == "7"


def test_compress_then_decompress():
    s = CompressorSession()
    assert s.compress("hello world")
    assert s.error == ""
    assert s.result.encoded_bits
    assert s.decompress()
    assert s.decompressed == "hello world"
    assert s.warning == ""


def test_blank_input_rejected_and_state_cleared():
    s = CompressorSession()
    assert s.compress("abc")
    assert not s.compress("   \n")
    assert s.error == NO_INPUT_MESSAGE
    assert s.result is None
    assert not s.decompress()
    assert s.error == NO_DATA_MESSAGE


def test_decompress_before_compress():
    s = CompressorSession()
    assert not s.decompress()
    assert s.error == NO_DATA_MESSAGE
    assert s.decompress_bits("0101") is None
    assert s.error == NO_DATA_MESSAGE


def test_decompress_bits_reports_invalid_path_and_truncation():
    s = CompressorSession()
    assert s.compress("aaaa")
    assert s.decompress_bits("01") is None
    assert s.error == ERROR_MESSAGES["InvalidPathError"]
    assert s.decompressed is None

    assert s.compress("abc")
    out = s.decompress_bits("101")
    assert out.truncated
    assert s.decompressed == "a"
    assert s.warning == ERROR_MESSAGES["IncompleteTrailError"]


def test_table_rows_display():
    s = CompressorSession()
    assert s.table_rows() == []
    assert s.compress("a a\n")
    rows = dict(s.table_rows("symbol"))
    assert set(rows) == {"a", "[space]", "\\n"}
    assert rows["a"] == s.result.code_table["a"]


def test_error_message_maps_every_kind():
    from compressor import Failure
    from errors import EmptyInputError, UnknownSymbolError

    assert error_message(Failure(EmptyInputError())) == (
        ERROR_MESSAGES["EmptyInputError"]
    )
    assert error_message(Failure(UnknownSymbolError("z", 3))) == (
        ERROR_MESSAGES["UnknownSymbolError"]
    )


def test_error_message_falls_back_to_error_text():
    from compressor import Failure
    from errors import HuffmanError

    assert error_message(Failure(HuffmanError("odd failure"))) == "odd failure"


def test_decompress_bits_strict_turns_truncation_into_error():
    s = CompressorSession()
    assert s.compress("abc")
    assert s.decompress_bits("101", strict=True) is None
    assert s.error == ERROR_MESSAGES["IncompleteTrailError"]
    assert s.warning == ""
    assert s.decompressed is None
