"""Tests for the command line entry point."""

import pytest

from metaballs.app import main


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestExport:

    def test_writes_requested_frames(self, tmp_path):
        out = tmp_path / "jgrs"
        main(["4", "11", "-o", str(out)])
        assert sorted(p.name for p in out.iterdir()) == [
            "frame00000.jgr", "frame00001.jgr", "frame00002.jgr", "frame00003.jgr",
        ]

    def test_seed_is_reproducible(self, tmp_path):
        main(["2", "5", "-o", str(tmp_path / "a")])
        main(["2", "5", "-o", str(tmp_path / "b")])
        for name in ("frame00000.jgr", "frame00001.jgr"):
            assert (tmp_path / "a" / name).read_bytes() == (tmp_path / "b" / name).read_bytes()

    def test_colour_reaches_output(self, tmp_path):
        out = tmp_path / "jgrs"
        main(["1", "3", "-o", str(out), "--color", "0.5,0.25,0"])
        text = (out / "frame00000.jgr").read_text()
        assert "pcfill 0.500000 0.250000 0.000000 pts" in text

    def test_unwritable_output(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert _run(["1", "3", "-o", str(blocker)]) == 1
        assert "ERROR" in capsys.readouterr().err


class TestValidation:

    def test_zero_frames(self, capsys):
        assert _run(["0"]) == 1
        assert "ERROR" in capsys.readouterr().err

    def test_body_count_range(self):
        assert _run(["--bodies", "1"]) == 1
        assert _run(["--bodies", "13"]) == 1

    def test_bad_colour(self, capsys):
        assert _run(["--color", "nope"]) == 1
        assert "Invalid colour" in capsys.readouterr().err

    def test_list_colors(self, capsys):
        assert _run(["--list-colors"]) == 0
        assert "black" in capsys.readouterr().out
