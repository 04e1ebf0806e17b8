import struct

import pytest

from propatten.config import (
    IniConfig,
    ParsedLine,
    float_from_big_endian,
    nearest_synoptic_hour,
    parse_line,
    read_era15_hm,
)


@pytest.mark.parametrize("hour", [-30, -5, 0, 3, 7, 11, 13, 19, 23, 40])
def test_synoptic_hour_is_a_synoptic_label(hour):
    result = nearest_synoptic_hour(hour)
    assert result in {"00", "06", "12", "18"}
    assert len(result) == 2


def test_synoptic_hour_far_below_range_gives_midnight():
    assert nearest_synoptic_hour(-20) == "00"


def test_parse_line_blank_and_comment():
    assert parse_line("") is None
    assert parse_line("# only a comment") is None


def test_parse_line_section():
    assert parse_line("[path]") == ParsedLine(section="path")


def test_parse_line_key_value_trimmed():
    assert parse_line("  sciatt \t=  /data/dir/  ") == ParsedLine(key="sciatt", value="/data/dir/")


def test_parse_line_trailing_comment_removed():
    parsed = parse_line("rain = /rain/ # where rain lives")
    assert parsed == ParsedLine(key="rain", value="/rain/")


def test_parse_line_carriage_return_removed():
    parsed = parse_line("key=value\r")
    assert parsed.value == "value"


def test_parse_line_without_equals_or_key():
    assert parse_line("no equals sign here") is None
    assert parse_line("   = value") is None


def _write(tmp_path, text):
    path = tmp_path / "path.ini"
    path.write_text(text, encoding="utf-8")
    return path


def test_read_and_get(tmp_path):
    cfg = IniConfig()
    cfg.read(_write(tmp_path, "[path]\nsciatt = /data/\nrain=/rain/ # note\n"))
    assert cfg.get("path", "sciatt", "") == "/data/"
    assert cfg.get("path", "rain", "") == "/rain/"
    assert cfg.get("path", "missing", "fallback") == "fallback"
    assert cfg.get("other", "sciatt", "fallback") == "fallback"


def test_dir_path_reads_path_section(tmp_path):
    cfg = IniConfig()
    cfg.read(_write(tmp_path, "[path]\nsciatt=/srv/sci/\n[misc]\nsciatt=/elsewhere/\n"))
    assert cfg.dir_path("sciatt") == "/srv/sci/"
    assert cfg.dir_path("absent") == ""


def test_read_crlf_lines(tmp_path):
    path = tmp_path / "crlf.ini"
    path.write_bytes(b"[path]\r\nsciatt=/d/\r\n")
    cfg = IniConfig()
    cfg.read(path)
    assert cfg.get("path", "sciatt", "") == "/d/"


def test_first_key_before_any_section_is_dropped(tmp_path):
    cfg = IniConfig()
    cfg.read(_write(tmp_path, "a=1\nb=2\n[s]\nc=3\n"))
    assert cfg.get("", "a", "none") == "none"
    assert cfg.get("", "b", "none") == "2"
    assert cfg.get("s", "c", "none") == "3"


def test_read_clears_previous_settings(tmp_path):
    cfg = IniConfig()
    cfg.read(_write(tmp_path, "[path]\nx=1\n"))
    second = tmp_path / "second.ini"
    second.write_text("[other]\ny=2\n", encoding="utf-8")
    cfg.read(second)
    assert cfg.get("path", "x", "gone") == "gone"
    assert cfg.get("other", "y", "") == "2"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        IniConfig().read(tmp_path / "nope.ini")


@pytest.mark.parametrize("value", [1.5, -2.25, 0.0, 1024.0])
def test_float_from_big_endian_round_trip(value):
    assert float_from_big_endian(struct.pack(">f", value)) == value


def test_float_from_big_endian_too_short():
    with pytest.raises(ValueError):
        float_from_big_endian(b"\x00\x01")


def _era_file(tmp_path):
    values = [level * 100 + month for level in range(1, 23) for month in range(1, 13)]
    path = tmp_path / "era.bin"
    path.write_bytes(struct.pack(f">{len(values)}f", *values))
    return path


def test_read_era15_hm_selects_month(tmp_path):
    path = _era_file(tmp_path)
    result = read_era15_hm(path, 3, 0, 0)
    assert result == [level * 100 + 3 for level in range(1, 23)]


def test_read_era15_hm_out_of_range_month_gives_zeros(tmp_path):
    assert read_era15_hm(_era_file(tmp_path), 13, 0, 0) == [0.0] * 22


def test_read_era15_hm_short_file(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(b"\x00" * 40)
    with pytest.raises(ValueError):
        read_era15_hm(path, 1, 0, 0)


def test_read_era15_hm_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_era15_hm(tmp_path / "absent.bin", 1, 0, 0)