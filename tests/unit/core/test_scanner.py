"""Unit tests for the directory scanner."""

import os
from unittest.mock import patch

import pytest
from helpers.image_helpers import RED, write_image

from imgconv.core.batch.scanner import DirectoryScanner, scan, walk_files
from imgconv.core.exceptions import DecodeError, ImageIOError
from imgconv.models.image import ImageHandle
from imgconv.services.format_detection_service import FormatDetectionService


class TestWalkFiles:
    def test_lexical_pre_order(self, tmp_path):
        for name in ["b/z.txt", "b/a.txt", "a.txt", "c.txt", "b/sub/m.txt"]:
            (tmp_path / name).parent.mkdir(parents=True, exist_ok=True)
            (tmp_path / name).write_text(name)

        files = [p.relative_to(tmp_path).as_posix() for p in walk_files(tmp_path)]

        assert files == ["a.txt", "b/a.txt", "b/sub/m.txt", "b/z.txt", "c.txt"]

    def test_skips_directories(self, tmp_path):
        (tmp_path / "empty").mkdir()
        (tmp_path / "file.png").write_bytes(b"x")

        assert list(walk_files(tmp_path)) == [tmp_path / "file.png"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    def test_does_not_follow_directory_links(self, tmp_path):
        target = tmp_path / "real"
        target.mkdir()
        (target / "x.txt").write_text("x")
        os.symlink(target, tmp_path / "link", target_is_directory=True)

        files = [p.name for p in walk_files(tmp_path)]

        assert files == ["x.txt"]

    def test_unlistable_directory(self, tmp_path):
        with patch("imgconv.core.batch.scanner.os.scandir", side_effect=PermissionError):
            with pytest.raises(ImageIOError) as exc_info:
                list(walk_files(tmp_path))

        assert exc_info.value.details["operation"] == "scandir"


class TestDirectoryScanner:
    @pytest.fixture
    def scanner(self):
        return DirectoryScanner()

    def test_collects_by_content(self, scanner, mixed_tree):
        handles = scanner.scan(mixed_tree, "gif")

        assert [h.path.relative_to(mixed_tree).as_posix() for h in handles] == [
            "c.jpg",
            "sub/d.gif",
            "sub/deeper/f",
        ]
        assert all(isinstance(h, ImageHandle) for h in handles)
        assert all(h.format == "gif" for h in handles)
        assert not any(h.is_converted for h in handles)

    def test_handles_carry_decoded_pixels(self, scanner, mixed_tree):
        (handle,) = [h for h in scanner.scan(mixed_tree, "gif") if h.path.name == "c.jpg"]

        assert handle.image.size == (16, 16)
        assert handle.image.convert("RGB").getpixel((3, 3)) == RED

    @pytest.mark.parametrize(
        "fmt, expected", [("png", ["a.png"]), ("jpeg", ["e.jpeg"])]
    )
    def test_other_formats(self, scanner, mixed_tree, fmt, expected):
        handles = scanner.scan(mixed_tree, fmt)

        assert [h.path.name for h in handles] == expected

    def test_empty_directory(self, scanner, tmp_path):
        assert scanner.scan(tmp_path, "jpeg") == []

    def test_no_matches(self, scanner, tmp_path):
        write_image(tmp_path / "a.png", "png")
        (tmp_path / "notes.txt").write_text("text")

        assert scanner.scan(tmp_path, "gif") == []

    def test_accepts_string_path(self, mixed_tree):
        assert len(scan(str(mixed_tree), "gif")) == 3

    def test_missing_root(self, scanner, tmp_path):
        with pytest.raises(ImageIOError):
            scanner.scan(tmp_path / "missing", "gif")

    def test_root_is_a_file(self, scanner, tmp_path):
        path = write_image(tmp_path / "a.gif", "gif")

        with pytest.raises(ImageIOError):
            scanner.scan(path, "gif")

    def test_unreadable_file_is_skipped(self, scanner, mixed_tree):
        real_probe = scanner.detector.probe

        def probe(path):
            if path.name == "c.jpg":
                raise ImageIOError("denied", details={"path": str(path)})
            return real_probe(path)

        with patch.object(scanner.detector, "probe", side_effect=probe):
            handles = scanner.scan(mixed_tree, "gif")

        assert [h.path.name for h in handles] == ["d.gif", "f"]

    def test_decode_failure_after_probe_aborts(self, mixed_tree):
        detector = FormatDetectionService()
        scanner = DirectoryScanner(detector)
        real_load = detector.load_image

        def load_image(path):
            if path.name == "d.gif":
                raise DecodeError("corrupt", details={"path": str(path)})
            return real_load(path)

        with patch.object(detector, "load_image", side_effect=load_image):
            with pytest.raises(DecodeError):
                scanner.scan(mixed_tree, "gif")

    def test_format_changed_between_probe_and_decode(self, mixed_tree):
        detector = FormatDetectionService()
        scanner = DirectoryScanner(detector)
        real_load = detector.load_image

        def load_image(path):
            image, _ = real_load(path)
            return image, "png"

        with patch.object(detector, "load_image", side_effect=load_image):
            with pytest.raises(DecodeError):
                scanner.scan(mixed_tree, "gif")

    def test_scan_leaves_files_untouched(self, scanner, mixed_tree):
        before = {
            p: p.read_bytes() for p in mixed_tree.rglob("*") if p.is_file()
        }

        scanner.scan(mixed_tree, "gif")

        after = {p: p.read_bytes() for p in mixed_tree.rglob("*") if p.is_file()}
        assert after == before
