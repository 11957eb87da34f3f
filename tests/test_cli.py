import runpy
import sys

import pytest

from pymp4_struct.cli import main


def test_prints_selected_fields(sample_path, capsys):
    assert main([str(sample_path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "ftyp.name: ftyp" in out
    assert "ftyp.major_brand: isom" in out
    assert "ftyp.minor_version: 512" in out
    assert "ftyp.compatible_brands: ['iso2', 'mp41']" in out
    assert "moov.name: moov 136" in out
    assert "moov.mvhd.name: mvhd" in out
    assert "moov.mvhd.version: 0" in out
    assert "moov.mvhd.timescale: 1000" in out
    assert "moov.mvhd.duration: 100" in out
    assert "moov.mvhd.rate: 1" in out
    assert "moov.mvhd.volume: 1" in out
    assert "boxes:" not in out


def test_tree_listing(sample_path, capsys):
    assert main([str(sample_path), "--tree"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "  moov offset=32 size=136" in out
    assert "    mvhd offset=40 size=108" in out
    assert "  mdat offset=168 size=12" in out


def test_missing_boxes_reported(tmp_path, make_box, capsys):
    path = tmp_path / "bare.mp4"
    path.write_bytes(make_box(b"free"))
    assert main([str(path)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["ftyp: not found", "moov: not found"]


def test_failed_parse_prints_nothing_partial(tmp_path, make_box, capsys):
    path = tmp_path / "broken.mp4"
    path.write_bytes(make_box(b"ftyp", b"isom\x00\x00\x00\x00") + make_box(b"moov", make_box(b"mvhd", bytes(4))))
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "TruncatedPayloadError" in captured.err
    assert str(path) in captured.err
    assert len(captured.err.splitlines()) == 1
    assert "failed to parse" not in captured.err


def test_missing_file(tmp_path, capsys):
    path = tmp_path / "missing.mp4"
    assert main([str(path)]) == 1
    assert "FileNotFoundError" in capsys.readouterr().err


def test_missing_argument_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_module_entry_point(sample_path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["pymp4_struct", str(sample_path)])
    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("pymp4_struct", run_name="__main__")
    assert excinfo.value.code == 0
    assert "ftyp.major_brand: isom" in capsys.readouterr().out
