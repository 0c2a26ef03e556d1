import struct

import pytest

from fbkstatics.utils import (
    format_value,
    merge_first_break_files,
    reverse_bytes,
    swath_name,
)


def test_swath_name_pads_to_three():
    assert swath_name(5) == "005"


def test_swath_name_keeps_long_numbers():
    assert swath_name(123) == str(123)
    assert swath_name(12345) == str(12345)


def test_format_value_int_and_float():
    assert format_value(42) == str(42)
    assert format_value(1.5) == "1.500000"


def test_reverse_bytes_known():
    assert reverse_bytes(0x12345678) == 0x78563412


@pytest.mark.parametrize("value", [0, 1, 0x01020304, 123456, -7, -(2**31)])
def test_reverse_bytes_round_trip(value):
    assert reverse_bytes(reverse_bytes(value)) == value


def test_reverse_bytes_is_signed():
    assert reverse_bytes(0xFF) < 0


def _record(number, fbk):
    return struct.pack("<if", number, fbk)


def test_merge_orders_by_first_file_number(tmp_path):
    contents = {
        "a.fbk": _record(30, 1.0) + _record(31, 2.0),
        "b.fbk": _record(10, 3.0),
        "c.fbk": _record(20, 4.0) + _record(21, 5.0),
    }
    for name, data in contents.items():
        (tmp_path / name).write_bytes(data)
    out = tmp_path / "all.fbk"
    order = merge_first_break_files(
        [tmp_path / "a.fbk", tmp_path / "b.fbk", tmp_path / "c.fbk"], out
    )
    assert [p.name for p in order] == ["b.fbk", "c.fbk", "a.fbk"]
    assert out.read_bytes() == contents["b.fbk"] + contents["c.fbk"] + contents["a.fbk"]


def test_merge_skips_huge_file_numbers(tmp_path):
    (tmp_path / "x.fbk").write_bytes(_record(10000000, 1.0))
    (tmp_path / "y.fbk").write_bytes(_record(5, 2.0))
    out = tmp_path / "out.fbk"
    order = merge_first_break_files([tmp_path / "x.fbk", tmp_path / "y.fbk"], out)
    assert [p.name for p in order] == ["y.fbk"]
    assert out.read_bytes() == _record(5, 2.0)


def test_merge_rejects_short_file(tmp_path):
    (tmp_path / "bad.fbk").write_bytes(b"\x01")
    with pytest.raises(ValueError):
        merge_first_break_files([tmp_path / "bad.fbk"], tmp_path / "out.fbk")


def test_merge_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        merge_first_break_files([tmp_path / "nope.fbk"], tmp_path / "out.fbk")