from __future__ import annotations

import os

import pytest

from main import build_parser, main


def test_parse_png_sizes():
    args = build_parser().parse_args(["icon.png", "-p", "16, 32", "-p", "64"])
    assert args.png == [[16, 32], [64]]
    assert args.ios_color == "#fff"


@pytest.mark.parametrize("value", ["abc", "0", "16,-1"])
def test_invalid_png_size(value):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["-p", value])


def test_custom_run(source_png, tmp_path):
    out_dir = tmp_path / "out"
    assert main([str(source_png), "-o", str(out_dir), "-p", "16,64"]) == 0
    assert sorted(os.listdir(out_dir)) == ["16x16.png", "64x64.png"]


def test_failure_exit_code(non_square_png, tmp_path, caplog):
    assert main([str(non_square_png), "-o", str(tmp_path / "out")]) == 1
    assert "Failed to read source image" in caplog.text
    assert not (tmp_path / "out").exists()
