import pytest

from taskframe.codec import BytesCodec, Decoder, LinesCodec


class FixedFour(Decoder):
    def decode(self, src):
        if len(src) < 4:
            return None
        frame = bytes(src[:4])
        del src[:4]
        return frame


def test_lines_decoder():
    codec = LinesCodec()
    buf = bytearray(b"\nline 1\nline 2\r\nline 3\n\r\n\r")

    assert codec.decode(buf) == ""
    assert codec.decode(buf) == "line 1"
    assert codec.decode(buf) == "line 2"
    assert codec.decode(buf) == "line 3"
    assert codec.decode(buf) == ""
    assert codec.decode(buf) is None
    assert codec.decode_eof(buf) is None

    buf.extend(b"k")
    assert codec.decode(buf) is None
    assert codec.decode_eof(buf) == "\rk"

    assert codec.decode(buf) is None
    assert codec.decode_eof(buf) is None


def test_lines_encoder():
    codec = LinesCodec()
    buf = bytearray()

    codec.encode("", buf)
    assert buf == b"\n"

    codec.encode("test", buf)
    assert buf == b"\ntest\n"

    codec.encode("a\nb", buf)
    assert buf == b"\ntest\na\nb\n"


@pytest.mark.parametrize(
    "text",
    ["1234567", "12345678", "123456789111213", "1234567891112131"],
)
def test_lines_encoder_no_overflow(text):
    buf = bytearray()
    LinesCodec().encode(text, buf)
    assert buf == text.encode() + b"\n"


def test_lines_decode_eof_drains_text():
    codec = LinesCodec()
    buf = bytearray(b"Lorem ipsum dolor\r\nsit amet,\nconsectetur\n\nadipiscing elit")
    lines = []
    while (line := codec.decode_eof(buf)) is not None:
        lines.append(line)
    assert lines == ["Lorem ipsum dolor", "sit amet,", "consectetur", "", "adipiscing elit"]
    assert buf == b""


def test_lines_encode_then_decode_round_trip():
    codec = LinesCodec()
    buf = bytearray()
    for line in ["alpha", "", "gamma δ"]:
        codec.encode(line, buf)
    assert [codec.decode(buf), codec.decode(buf), codec.decode(buf)] == ["alpha", "", "gamma δ"]
    assert codec.decode(buf) is None


def test_lines_invalid_utf8_raises():
    buf = bytearray(b"\xff\xfe\n")
    with pytest.raises(UnicodeDecodeError):
        LinesCodec().decode(buf)


def test_lines_decode_without_newline_keeps_buffer():
    buf = bytearray(b"partial")
    assert LinesCodec().decode(buf) is None
    assert buf == b"partial"


def test_bytes_codec_decode_takes_everything():
    codec = BytesCodec()
    buf = bytearray(b"abc\x00def")
    assert codec.decode(buf) == b"abc\x00def"
    assert buf == b""
    assert codec.decode(buf) is None


def test_bytes_codec_encode_appends():
    codec = BytesCodec()
    buf = bytearray(b"x")
    codec.encode(b"yz", buf)
    codec.encode(bytearray(b"!"), buf)
    assert buf == b"xyz!"


def test_bytes_codec_decode_eof_empty_is_none():
    assert BytesCodec().decode_eof(bytearray()) is None


def test_default_decode_eof_returns_frame():
    buf = bytearray(b"abcdefg")
    assert Decoder.decode_eof(FixedFour(), buf) == b"abcd"
    assert buf == b"efg"


def test_default_decode_eof_rejects_leftover_bytes():
    buf = bytearray(b"ab")
    with pytest.raises(ValueError, match="bytes remaining on stream"):
        Decoder.decode_eof(FixedFour(), buf)