"""Tests for 'aacboard export', 'aacboard inspect' and 'aacboard formats'."""

import json
from argparse import Namespace

import pytest

from aacboard.cli.export import export_file, inspect_file, list_formats
from aacboard.errors import AssetError


async def _offline_fetch(url):
    raise AssetError(url, "offline")


@pytest.fixture(autouse=True)
def offline(monkeypatch):
    """Packagers never reach the network; optional assets are skipped."""
    monkeypatch.setattr("aacboard.cli.export.http_fetcher", lambda timeout: _offline_fetch)


def _export_args(board_file, out_dir, **overrides):
    args = dict(file=str(board_file), json=False, config=None, format=None, beta=False, all=False, output=str(out_dir), upload=False)
    args.update(overrides)
    return Namespace(**args)


def test_export_one_format(board_file, tmp_path, capsys):
    out_dir = tmp_path / "out"
    assert export_file(_export_args(board_file, out_dir, format="obz")) == 0
    assert (out_dir / "Test Board.obz").exists()
    out = capsys.readouterr().out
    assert "obz" in out
    assert "bytes" in out


def test_export_beta_json(board_file, tmp_path, capsys):
    assert export_file(_export_args(board_file, tmp_path, format="snap", beta=True, json=True)) == 0
    written = json.loads(capsys.readouterr().out)
    assert [w["format"] for w in written] == ["snap-beta"]
    assert written[0]["path"].endswith("Test Board_beta.snappkg")


def test_export_all(board_file, tmp_path, capsys):
    assert export_file(_export_args(board_file, tmp_path, all=True, json=True)) == 0
    written = json.loads(capsys.readouterr().out)
    assert [w["format"] for w in written] == ["grid3", "snap", "touchchat", "obz"]


def test_export_needs_format(board_file, tmp_path, capsys):
    with pytest.raises(SystemExit, match="1"):
        export_file(_export_args(board_file, tmp_path))
    assert "--format or --all" in capsys.readouterr().err


def test_export_invalid_board(invalid_board_file, tmp_path, capsys):
    with pytest.raises(SystemExit, match="1"):
        export_file(_export_args(invalid_board_file, tmp_path / "out", format="grid3"))
    assert "missing-page" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_inspect(board_file, tmp_path, capsys):
    export_file(_export_args(board_file, tmp_path, format="touchchat"))
    capsys.readouterr()
    args = Namespace(file=str(tmp_path / "Test Board.touchchat"), format="touchchat", json=False)
    assert inspect_file(args) == 0
    assert "touchchat: 2 pages, 3 buttons, grids 2x2, 2x2" in capsys.readouterr().out


def test_inspect_json(board_file, tmp_path, capsys):
    export_file(_export_args(board_file, tmp_path, format="grid3"))
    capsys.readouterr()
    args = Namespace(file=str(tmp_path / "Test Board.gridset"), format="grid3", json=True)
    assert inspect_file(args) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["pages"] == 2
    assert "FileMap.xml" in data["files"]


def test_inspect_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit, match="1"):
        inspect_file(Namespace(file=str(tmp_path / "none.obz"), format="obz", json=False))


def test_formats(capsys):
    assert list_formats(Namespace(json=True)) == 0
    items = json.loads(capsys.readouterr().out)
    assert len(items) == 8
    assert items[0] == {"format": "grid3", "beta": False, "extension": ".gridset", "label": "Grid 3"}


def test_export_upload(board_file, tmp_path, monkeypatch, capsys):
    (tmp_path / "aacboard.yaml").write_text("aacboard:\n  upload-url: https://store.test/upload\n")
    sent = []

    async def fake_upload(result, url, timeout):
        sent.append((result.filename, url))
        return {"ok": True}

    monkeypatch.setattr("aacboard.cli.export.upload_archive", fake_upload)
    assert export_file(_export_args(board_file, tmp_path, format="obz", upload=True, json=True)) == 0
    written = json.loads(capsys.readouterr().out)
    assert written[0]["uploaded"] is True
    assert sent == [("Test Board.obz", "https://store.test/upload")]


def test_export_upload_without_url(board_file, tmp_path, capsys):
    with pytest.raises(SystemExit, match="1"):
        export_file(_export_args(board_file, tmp_path, format="obz", upload=True))
    assert "no upload URL configured" in capsys.readouterr().err
