from pathlib import Path

from mythos.walk import VIDEO_EXTENSIONS, is_video, video_files


def _relative(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in video_files(root))


def test_picks_up_known_video_extensions_and_skips_sidecars(tmp_path):
    (tmp_path / "a.mkv").write_bytes(b"")
    (tmp_path / "b.MP4").write_bytes(b"")
    (tmp_path / "c.nfo").write_bytes(b"")
    (tmp_path / "d.srt").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "e.mov").write_bytes(b"")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "f.mkv").write_bytes(b"")

    assert _relative(tmp_path) == ["a.mkv", "b.MP4", "sub/e.mov"]


def test_hidden_files_are_skipped(tmp_path):
    (tmp_path / ".secret.mkv").write_bytes(b"")
    (tmp_path / "visible.mkv").write_bytes(b"")
    assert _relative(tmp_path) == ["visible.mkv"]


def test_empty_root_yields_nothing(tmp_path):
    assert video_files(tmp_path) == []


def test_missing_root_yields_nothing(tmp_path):
    assert video_files(tmp_path / "missing") == []


def test_directories_with_video_names_are_not_files(tmp_path):
    (tmp_path / "folder.mkv").mkdir()
    assert video_files(tmp_path) == []


def test_every_listed_extension_is_video():
    assert all(is_video(f"movie.{ext}") for ext in VIDEO_EXTENSIONS)
    assert all(is_video(f"movie.{ext.upper()}") for ext in VIDEO_EXTENSIONS)


def test_non_video_paths():
    assert is_video("notes.txt") is False
    assert is_video("no_extension") is False
    assert is_video("movie.mkv.srt") is False