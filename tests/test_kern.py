import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fontraster.kern import kern_key, parse_kern


def _format0_body(pairs):
    body = struct.pack(">H6x", len(pairs))
    for left, right, value in pairs:
        body += struct.pack(">HHh", left, right, value)
    return body


def _ot_subtable(table_format, coverage, body):
    return struct.pack(">HHBB", 0, 6 + len(body), table_format, coverage) + body


def _ot_table(*subtables):
    return struct.pack(">HH", 0, len(subtables)) + b"".join(subtables)


def _aat_subtable(table_format, coverage, body):
    return struct.pack(">IBBH", 8 + len(body), coverage, table_format, 0) + body


def _aat_table(*subtables):
    return struct.pack(">HHI", 1, 0, len(subtables)) + b"".join(subtables)


@given(st.integers(0, 0xFFFF), st.integers(0, 0xFFFF))
def test_kern_key_packs_both_halves(left, right):
    key = kern_key(left, right)
    assert key >> 16 == left
    assert key & 0xFFFF == right


def test_ot_format0_horizontal():
    table = _ot_table(_ot_subtable(0, 1, _format0_body([(3, 4, -50), (5, 6, 20)])))
    assert parse_kern(table) == {kern_key(3, 4): -50, kern_key(5, 6): 20}


def test_ot_format0_later_pair_wins():
    table = _ot_table(_ot_subtable(0, 1, _format0_body([(1, 2, -5), (1, 2, 9)])))
    assert parse_kern(table) == {kern_key(1, 2): 9}


def test_ot_vertical_only_returns_none():
    table = _ot_table(_ot_subtable(0, 0, _format0_body([(3, 4, -50)])))
    assert parse_kern(table) is None


def test_ot_skips_unsupported_format_by_length():
    unsupported = _ot_subtable(2, 1, b"\xff" * 4)
    supported = _ot_subtable(0, 1, _format0_body([(7, 8, 12)]))
    assert parse_kern(_ot_table(unsupported, supported)) == {kern_key(7, 8): 12}


def test_aat_format0_horizontal():
    table = _aat_table(_aat_subtable(0, 0x00, _format0_body([(10, 11, -3)])))
    assert parse_kern(table) == {kern_key(10, 11): -3}


def test_aat_vertical_returns_none():
    table = _aat_table(_aat_subtable(0, 0x80, _format0_body([(10, 11, -3)])))
    assert parse_kern(table) is None


@pytest.mark.parametrize("data", [b"", b"\x00", struct.pack(">HH", 2, 0), struct.pack(">HH", 0, 0)])
def test_unusable_tables_return_none(data):
    assert parse_kern(data) is None


def test_truncated_pairs_return_none():
    table = _ot_table(_ot_subtable(0, 1, _format0_body([(3, 4, -50), (5, 6, 20)])))
    assert parse_kern(table[:-2]) is None


def _format3_body(values, left_classes, right_classes, left_count, right_count, indices):
    body = struct.pack(">HBBBx", len(left_classes), len(values), left_count, right_count)
    body += struct.pack(f">{len(values)}h", *values)
    body += bytes(left_classes) + bytes(right_classes) + bytes(indices)
    return body


def test_ot_format3_class_matrix():
    body = _format3_body([0, -40], [0, 1], [0, 1], 2, 2, [0, 0, 0, 1])
    result = parse_kern(_ot_table(_ot_subtable(3, 1, body)))
    assert result == {
        kern_key(0, 0): 0,
        kern_key(0, 1): 0,
        kern_key(1, 0): 0,
        kern_key(1, 1): -40,
    }


def test_ot_format3_skips_class_above_count():
    body = _format3_body([-7], [0, 2], [0, 0], 1, 1, [0])
    result = parse_kern(_ot_table(_ot_subtable(3, 1, body)))
    assert result == {kern_key(0, 0): -7, kern_key(0, 1): -7}


def test_ot_format3_index_out_of_range_returns_none():
    body = _format3_body([-7], [0, 1], [0, 1], 1, 1, [0])
    assert parse_kern(_ot_table(_ot_subtable(3, 1, body))) is None