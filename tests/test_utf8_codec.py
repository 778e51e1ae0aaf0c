import pytest

from unicodeiter.binary.codecs.cursor import Cursor
from unicodeiter.binary.codecs.errors import ErrorKind, InvalidCodePoint, InvalidUtf8Sequence
from unicodeiter.binary.codecs.utf8_codec import U8ToU32Iterator, U32ToU8Iterator
from unicodeiter.binary.codecs.view import utf8_to_utf32, utf32_to_utf8


def test_scenario_encodes_to_utf8():
    assert utf32_to_utf8([0x48, 0x1F600, 0x21]).to_list() == [0x48, 0xF0, 0x9F, 0x98, 0x80, 0x21]


def test_scenario_decodes_from_utf8():
    data = bytes([0x48, 0xF0, 0x9F, 0x98, 0x80, 0x21])
    assert utf8_to_utf32(data).to_list() == [0x48, 0x1F600, 0x21]


@pytest.mark.parametrize("value,count", [
    (0x7F, 1), (0x80, 2), (0x7FF, 2), (0x800, 3), (0xFFFF, 3), (0x10000, 4), (0x10FFFF, 4),
])
def test_byte_count_boundaries(value, count):
    units = utf32_to_utf8([value]).to_list()
    assert len(units) == count
    assert bytes(units) == chr(value).encode("utf-8")


def test_sampled_round_trip():
    values = [v for v in range(0, 0x110000, 0x101) if not 0xD800 <= v <= 0xDFFF]
    encoded = bytes(utf32_to_utf8(values).to_list())
    assert encoded == "".join(map(chr, values)).encode("utf-8")
    assert utf8_to_utf32(encoded).to_list() == values


def test_encoder_rejects_surrogates_and_out_of_range():
    for bad in (0xD800, 0xDFFF, 0x110000):
        with pytest.raises(InvalidCodePoint):
            U32ToU8Iterator(Cursor([bad])).dereference()


def test_units_wider_than_storage_are_reported_not_wrapped():
    for bad in ((1 << 32) + 0x41, -(1 << 32) + 0x41, -1):
        with pytest.raises(InvalidCodePoint):
            utf32_to_utf8([bad]).to_list()
    for data in ([0x141], [-1], [0x41, 0x1C3]):
        with pytest.raises(InvalidUtf8Sequence):
            utf8_to_utf32(data).to_list()


@pytest.mark.parametrize("value", [0x0, 0x7F, 0x80, 0xD7FF, 0xE000, 0xFFFF, 0x10000, 0x10FFFF])
def test_boundary_values_round_trip(value):
    units = utf32_to_utf8([value]).to_list()
    assert utf8_to_utf32(bytes(units)).to_list() == [value]


def test_encoder_forward_then_backward_is_symmetric():
    data = [0x68, 0xE9, 0x20AC, 0x1F600]
    start = U32ToU8Iterator(Cursor(data))
    it = start.copy()
    for _ in range(10):
        it.increment()
    assert it == U32ToU8Iterator(Cursor(data).end())
    for _ in range(10):
        it.decrement()
    assert it == start and it.base() == start.base()


def test_encoder_equality_treats_pending_and_first_byte_alike():
    data = [0x1F600]
    pending = U32ToU8Iterator(Cursor(data))
    first = U32ToU8Iterator(Cursor(data))
    first.dereference()
    second = first.copy().increment()
    fourth = second.copy().increment().increment()
    assert pending == first
    assert second != pending and second != fourth
    assert fourth.dereference() == 0x80
    assert fourth.copy().increment() == U32ToU8Iterator(Cursor(data, 1))


def test_encoder_decrement_from_end():
    data = [0x41, 0xE9]
    it = U32ToU8Iterator(Cursor(data).end())
    it.decrement()
    assert it.dereference() == 0xA9
    it.decrement()
    assert it.dereference() == 0xC3
    it.decrement()
    assert it.dereference() == 0x41
    assert it == U32ToU8Iterator(Cursor(data))


def test_bare_continuation_byte_is_invalid():
    it = U8ToU32Iterator(Cursor(b"\x80abc"))
    with pytest.raises(InvalidUtf8Sequence) as ei:
        it.dereference()
    assert ei.value.kind is ErrorKind.INVALID_UTF8_SEQUENCE


@pytest.mark.parametrize("data", [
    b"\xc3",              # truncated
    b"\xe2\x82",          # truncated
    b"\xc3\x41",          # missing continuation byte
    b"\xf8\x88\x80\x80\x80",  # five-byte form
    b"\xf4\x90\x80\x80",  # above U+10FFFF
    b"\xed\xa0\x80",      # encoded surrogate
    b"\xc0\xaf",          # overlong
    b"\xe0\x80\xaf",      # overlong
])
def test_malformed_sequences_are_rejected(data):
    with pytest.raises(InvalidUtf8Sequence):
        U8ToU32Iterator(Cursor(data)).dereference()


def test_overlong_allowed_when_asked():
    assert U8ToU32Iterator(Cursor(b"\xc0\xaf"), allow_overlong=True).dereference() == 0x2F
    assert utf8_to_utf32(b"\xe0\x80\xaf", allow_overlong=True).to_list() == [0x2F]


def test_increment_past_truncated_tail_fails_and_keeps_base():
    it = U8ToU32Iterator(Cursor(b"a\xe2\x82"))
    it.increment()
    with pytest.raises(InvalidUtf8Sequence):
        it.increment()
    assert it.base().tell() == 1


def test_decrement_checks_trailing_count():
    data = b"a\xe2\x82\xac"
    it = U8ToU32Iterator(Cursor(data).end())
    it.decrement()
    assert it.base().tell() == 1
    assert it.dereference() == 0x20AC

    bad = b"a\xc3\x82\xac"
    it = U8ToU32Iterator(Cursor(bad).end())
    with pytest.raises(InvalidUtf8Sequence):
        it.decrement()
    assert it.base().tell() == len(bad)


def test_decrement_without_leading_byte_fails():
    data = b"\x80\x80"
    with pytest.raises(InvalidUtf8Sequence):
        U8ToU32Iterator(Cursor(data).end()).decrement()


def test_comparison_never_decodes_malformed_data():
    data = b"\x80\xff"
    a, b = U8ToU32Iterator(Cursor(data)), U8ToU32Iterator(Cursor(data))
    assert a == b
    assert a._value is None


def test_forward_then_backward_is_symmetric():
    data = "hé€\U0001F600!".encode("utf-8")
    start = U8ToU32Iterator(Cursor(data))
    it = start.copy()
    for _ in range(5):
        it.increment()
    assert it == U8ToU32Iterator(Cursor(data).end())
    for _ in range(5):
        it.decrement()
    assert it == start and it.base() == start.base()


def test_reversed_view():
    data = "hé\U0001F600".encode("utf-8")
    assert list(reversed(utf8_to_utf32(data))) == [0x1F600, 0xE9, 0x68]


def test_str_source_reads_code_points():
    assert bytes(utf32_to_utf8("hé").to_list()) == "hé".encode("utf-8")
