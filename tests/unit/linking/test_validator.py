"""Unit tests for the link validity policy."""

import os
from pathlib import Path

from llamalink.linking.validator import is_valid_link, is_valid_link_at, read_link_target


class TestReadLinkTarget:
    """Tests for read_link_target function."""

    def test_absolute_target(self, tmp_path: Path) -> None:
        target = tmp_path / "blob"
        target.write_bytes(b"x")
        link = tmp_path / "model.gguf"
        link.symlink_to(target)

        assert read_link_target(link) == target

    def test_relative_target_resolved_against_link_dir(self, tmp_path: Path) -> None:
        (tmp_path / "blobs").mkdir()
        (tmp_path / "dest").mkdir()
        link = tmp_path / "dest" / "model.gguf"
        os.symlink("../blobs/blob", link)

        assert read_link_target(link) == tmp_path / "blobs" / "blob"

    def test_not_a_link(self, tmp_path: Path) -> None:
        regular = tmp_path / "file"
        regular.write_text("x")
        assert read_link_target(regular) is None

    def test_missing(self, tmp_path: Path) -> None:
        assert read_link_target(tmp_path / "missing") is None


class TestIsValidLink:
    """Tests for is_valid_link and is_valid_link_at."""

    def test_valid_link(self, tmp_path: Path) -> None:
        target = tmp_path / "blob"
        target.write_bytes(b"x")
        link = tmp_path / "model.gguf"
        link.symlink_to(target)

        assert is_valid_link(link, target) is True
        assert is_valid_link_at(link) is True

    def test_wrong_extension(self, tmp_path: Path) -> None:
        target = tmp_path / "blob"
        target.write_bytes(b"x")
        link = tmp_path / "model.bin"
        link.symlink_to(target)

        assert is_valid_link_at(link) is False
        assert is_valid_link_at(link, ".bin") is True

    def test_dangling_target(self, tmp_path: Path) -> None:
        link = tmp_path / "model.gguf"
        link.symlink_to(tmp_path / "gone")

        assert is_valid_link_at(link) is False

    def test_directory_target(self, tmp_path: Path) -> None:
        (tmp_path / "dir").mkdir()
        link = tmp_path / "model.gguf"
        link.symlink_to(tmp_path / "dir")

        assert is_valid_link_at(link) is False

    def test_chained_link(self, tmp_path: Path) -> None:
        """A link to another link is not valid, even if the chain ends in a file."""
        blob = tmp_path / "blob"
        blob.write_bytes(b"x")
        hop = tmp_path / "hop"
        hop.symlink_to(blob)
        link = tmp_path / "model.gguf"
        link.symlink_to(hop)

        assert is_valid_link_at(link) is False

    def test_regular_file_is_not_a_valid_link(self, tmp_path: Path) -> None:
        regular = tmp_path / "model.gguf"
        regular.write_bytes(b"x")

        assert is_valid_link_at(regular) is False
