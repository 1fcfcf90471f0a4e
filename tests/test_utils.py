"""Tests for the formatting and logging helpers."""
from __future__ import annotations

from sixel_map.utils import (
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)


# ============================================================================
# Formatting
# ============================================================================


def test_key_value_pairs_formats_bools_and_numbers():
    line = key_value_pairs_to_string([("Dither", True), ("Colours", 16), ("Scale", 0.5)])
    assert line == "Dither: on  Colours: 16  Scale: 0.5"


def test_format_seconds_compact():
    assert format_seconds_compact(0.012) == "12.0ms"
    assert format_seconds_compact(2.5) == "2.500s"
    assert format_seconds_compact(75.0) == "1m 15.0s"


# ============================================================================
# Logging
# ============================================================================


def test_print_config_line_is_a_debug_line_on_stderr(capsys):
    print_config_line("encode", [("Palette", 4), ("Dither", False)])
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "[debug] [encode] Palette: 4  Dither: off\n"


def test_error_goes_to_stderr(capsys):
    error("boom")
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "[error] boom\n"
