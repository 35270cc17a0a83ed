"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from songlines.cli import build_parser, main


class TestCli:
    """Tests for argument handling."""

    def test_defaults(self):
        args = build_parser().parse_args(["song.wav"])

        assert args.audio == [Path("song.wav")]
        assert args.size == 800
        assert args.fps == 60
        assert args.sample_rate == 44100
        assert args.seed is None
        assert not args.autoplay
        assert not args.debug

    def test_playlist_of_several_files(self):
        args = build_parser().parse_args(["a.wav", "b.mp3", "c.flac", "--seed", "3"])
        assert [p.name for p in args.audio] == ["a.wav", "b.mp3", "c.flac"]
        assert args.seed == 3

    def test_requires_audio(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_missing_file_exits(self, tmp_path, capsys):
        missing = tmp_path / "nope.wav"

        with pytest.raises(SystemExit) as exc:
            main([str(missing)])

        assert exc.value.code == 1
        assert "Audio file not found" in capsys.readouterr().err

    @pytest.mark.parametrize("option", ["--size", "--fps"])
    def test_non_positive_option_exits(self, temp_audio_file, capsys, option):
        with pytest.raises(SystemExit) as exc:
            main([str(temp_audio_file), option, "0"])

        assert exc.value.code == 1
        assert "must be positive" in capsys.readouterr().err
