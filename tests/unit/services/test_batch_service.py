"""Unit tests for the batch service state machine."""

from unittest.mock import MagicMock, patch

import pytest
from helpers.image_helpers import write_image

from imgconv.core.conversion.converter import FormatConverter
from imgconv.core.exceptions import (
    DecodeError,
    ImageIOError,
    InvalidArgumentError,
)
from imgconv.models.batch import BatchRequest, BatchStatus
from imgconv.services.batch_service import BatchService


@pytest.fixture
def service(status_lines, conversion_settings):
    return BatchService(
        converter=FormatConverter(
            settings=conversion_settings, reporter=status_lines.append, language="ja"
        )
    )


def snapshot(root):
    return {p: p.read_bytes() for p in root.rglob("*") if p.is_file()}


class TestValidation:
    @pytest.mark.parametrize(
        "directory, source, target, field_name",
        [
            ("", "jpeg", "png", "directory"),
            (None, "jpeg", "png", "directory"),
            ("DIR", "", "png", "source_format"),
            ("DIR", None, "png", "source_format"),
            ("DIR", "jpeg", "", "target_format"),
            ("DIR", "bogus", "png", "source_format"),
            ("DIR", "jpeg", "bogus", "target_format"),
            ("DIR", "jpg", "png", "source_format"),
            ("DIR", "gif", "PNG", "target_format"),
        ],
    )
    def test_invalid_arguments(
        self, service, mixed_tree, directory, source, target, field_name
    ):
        if directory == "DIR":
            directory = mixed_tree
        before = snapshot(mixed_tree)

        with pytest.raises(InvalidArgumentError) as exc_info:
            service.run(directory, source, target)

        assert exc_info.value.error_code == "CONV002"
        assert exc_info.value.details["field_name"] == field_name
        assert snapshot(mixed_tree) == before

    def test_validation_happens_before_io(self, status_lines):
        scanner = MagicMock()
        converter = MagicMock()
        service = BatchService(scanner=scanner, converter=converter)

        with pytest.raises(InvalidArgumentError):
            service.run("/does/not/matter", "bogus", "png")

        scanner.scan.assert_not_called()
        converter.convert.assert_not_called()

    def test_validate_builds_request(self, service, tmp_path):
        request = service.validate(str(tmp_path), "gif", "png")

        assert request == BatchRequest(
            directory=tmp_path, source_format="gif", target_format="png"
        )


class TestRun:
    def test_empty_directory(self, service, status_lines, tmp_path):
        result = service.run(tmp_path, "jpeg", "png")

        assert result.status == BatchStatus.DONE
        assert result.converted_count == 0
        assert result.scanned == []
        assert status_lines == []

    def test_converts_in_scan_order(self, service, status_lines, mixed_tree):
        result = service.run(mixed_tree, "gif", "png")

        assert result.status == BatchStatus.DONE
        assert [h.path.relative_to(mixed_tree).as_posix() for h in result.converted] == [
            "c.png",
            "sub/d.png",
            "sub/deeper/f.png",
        ]
        assert len(status_lines) == 3
        assert status_lines[0].startswith(str(mixed_tree / "c.jpg"))

    def test_scan_failure(self, mixed_tree):
        scanner = MagicMock()
        scanner.scan.side_effect = DecodeError("corrupt")
        converter = MagicMock()
        service = BatchService(scanner=scanner, converter=converter)

        with pytest.raises(DecodeError) as exc_info:
            service.run(mixed_tree, "gif", "png")

        result = exc_info.value.result
        assert result.status == BatchStatus.FAILED
        assert result.error is exc_info.value
        converter.convert.assert_not_called()

    def test_missing_directory(self, service, tmp_path):
        with pytest.raises(ImageIOError) as exc_info:
            service.run(tmp_path / "missing", "gif", "png")

        assert exc_info.value.result.status == BatchStatus.FAILED

    def test_stops_at_first_conversion_error(self, service, status_lines, tmp_path):
        for name in ("1.gif", "2.gif", "3.gif"):
            write_image(tmp_path / name, "gif")
        real_convert = service.converter.convert
        attempted = []

        def convert(handle, target_format):
            attempted.append(handle.path.name)
            if handle.path.name == "2.gif":
                raise ImageIOError("disk full", details={"path": str(handle.path)})
            return real_convert(handle, target_format)

        with patch.object(service.converter, "convert", side_effect=convert):
            with pytest.raises(ImageIOError) as exc_info:
                service.run(tmp_path, "gif", "jpeg")

        result = exc_info.value.result
        assert attempted == ["1.gif", "2.gif"]
        assert result.status == BatchStatus.FAILED
        assert result.converted_count == 1
        assert [h.path.name for h in result.pending] == ["2.gif", "3.gif"]
        assert (tmp_path / "1.jpeg").exists()
        assert not (tmp_path / "1.gif").exists()
        assert (tmp_path / "3.gif").exists()
        assert len(status_lines) == 1
