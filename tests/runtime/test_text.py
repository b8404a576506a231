"""Tests for text values, the cmp/dmp operations and compressed literals."""

import base64

import pytest

from .conftest import evaluate, eval_and_assert, eval_and_catch, stack_of
from putt import codec
from putt.errors import DecodeError, TypeMismatch
from putt.vm.values import PuttText


class TestCompression:

    def test_compress_then_decompress(self):
        eval_and_assert('"hello, hello, hello" cmp dmp', PuttText("hello, hello, hello"))

    def test_compress_produces_codec_payload(self):
        eval_and_assert('"hello" cmp', PuttText(codec.compress_text("hello")))

    def test_decompress_garbage(self):
        engine, error = eval_and_catch('"not base64!" dmp', DecodeError)
        assert error.operation == "Decompress"
        assert stack_of(engine) == ["not base64!"]

    def test_decompress_valid_base64_but_not_deflate(self):
        engine, _ = eval_and_catch('"aGVsbG8=" dmp', DecodeError)
        assert stack_of(engine) == ["aGVsbG8="]

    def test_compress_requires_text(self):
        engine, error = eval_and_catch("5 cmp", TypeMismatch)
        assert error.expected == "Text"
        assert stack_of(engine) == ["5"]

    def test_decompress_requires_text(self):
        eval_and_catch("5 dmp", TypeMismatch)

    def test_compressed_literal_in_program(self):
        payload = codec.compress_text("Hello")
        eval_and_assert(f'`{payload}` ", world"+', PuttText("Hello, world"))


class TestCodec:

    @pytest.mark.parametrize("text", ["", "a", "Hello!", "unicode: é漢字", "x" * 5000])
    def test_round_trip(self, text):
        assert codec.decompress_text(codec.compress_text(text)) == text

    def test_payload_is_printable(self):
        payload = codec.compress_text("some text\nwith a newline")
        assert payload.isascii()
        assert "`" not in payload and "\n" not in payload

    def test_repetitive_text_shrinks(self):
        text = "abc" * 1000
        assert len(codec.compress(text.encode())) < len(text)

    def test_bytes_level_errors(self):
        with pytest.raises(DecodeError):
            codec.decompress(b"definitely not deflate")

    def test_non_utf8_payload(self):
        payload = base64.b64encode(codec.compress(b"\xff\xfe")).decode()
        with pytest.raises(DecodeError) as info:
            codec.decompress_text(payload)
        assert "UTF-8" in str(info.value)


class TestRender:

    def test_text_renders_as_is(self):
        assert evaluate('"a b"').peek_top().render() == "a b"

    def test_concatenation_keeps_spaces(self):
        eval_and_assert('"a " "b"+', PuttText("a b"))
