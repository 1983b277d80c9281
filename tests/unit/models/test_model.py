"""Unit tests for the Model record and size helpers."""

import pytest
from llamalink.models.model import (
    Model,
    filter_by_size,
    format_size,
    parse_listing_size,
    parse_size,
    parse_size_option,
)

GB = 1024**3
MB = 1024**2


class TestModel:
    """Tests for Model dataclass."""

    def test_create_model(self) -> None:
        """Model stores name and size."""
        model = Model(name="llama3:8b", size_bytes=4 * GB)
        assert model.name == "llama3:8b"
        assert model.size_bytes == 4 * GB

    def test_size_is_optional(self) -> None:
        """Size defaults to None and renders as unknown."""
        model = Model(name="llama3:8b")
        assert model.size_bytes is None
        assert model.size_human == "unknown"

    def test_model_is_immutable(self) -> None:
        """Model is frozen."""
        model = Model(name="llama3:8b")
        with pytest.raises(AttributeError):
            model.name = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_raises(self, name: str) -> None:
        """Empty names are rejected."""
        with pytest.raises(ValueError, match="name cannot be empty"):
            Model(name=name)

    def test_negative_size_raises(self) -> None:
        """Negative sizes are rejected."""
        with pytest.raises(ValueError, match="negative"):
            Model(name="llama3:8b", size_bytes=-1)


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "unknown"),
            (512, "512 B"),
            (2048, "2.0 KB"),
            (700 * MB, "700.0 MB"),
            (int(4.7 * GB), "4.7 GB"),
            (2 * 1024**4, "2.0 TB"),
        ],
    )
    def test_format(self, size: int | None, expected: str) -> None:
        assert format_size(size) == expected


class TestParseSize:
    """Tests for parse_size and parse_listing_size."""

    def test_spaced_unit(self) -> None:
        assert parse_size("4.7 GB") == int(4.7 * GB)

    def test_fused_unit(self) -> None:
        assert parse_size("700MB") == 700 * MB

    def test_lowercase_unit(self) -> None:
        assert parse_size("2gb") == 2 * GB

    def test_not_a_size(self) -> None:
        assert parse_size("2 weeks") is None
        assert parse_size("GB") is None

    def test_listing_two_fields(self) -> None:
        """Size split over number and unit fields is found."""
        fields = ["365c0bd3c000", "4.7", "GB", "2", "weeks", "ago"]
        assert parse_listing_size(fields) == int(4.7 * GB)

    def test_listing_fused_field(self) -> None:
        fields = ["365c0bd3c000", "637MB", "7", "weeks", "ago"]
        assert parse_listing_size(fields) == 637 * MB

    def test_listing_without_size(self) -> None:
        assert parse_listing_size(["365c0bd3c000", "2", "weeks", "ago"]) is None

    def test_listing_empty(self) -> None:
        assert parse_listing_size([]) is None


class TestParseSizeOption:
    """Tests for parse_size_option."""

    def test_bare_number_is_gigabytes(self) -> None:
        assert parse_size_option("4") == 4 * GB

    def test_fractional_gigabytes(self) -> None:
        assert parse_size_option("0.5") == GB // 2

    def test_explicit_megabytes(self) -> None:
        assert parse_size_option("700MB") == 700 * MB

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size_option("big")


class TestFilterBySize:
    """Tests for filter_by_size."""

    @pytest.fixture
    def models(self) -> list[Model]:
        return [
            Model("small:1b", 700 * MB),
            Model("mid:7b", 4 * GB),
            Model("large:70b", 40 * GB),
            Model("mystery:latest", None),
        ]

    def test_no_range_keeps_everything(self, models: list[Model]) -> None:
        """Without bounds even unknown sizes are kept."""
        assert filter_by_size(models) == models

    def test_min_bound(self, models: list[Model]) -> None:
        names = [m.name for m in filter_by_size(models, min_bytes=1 * GB)]
        assert names == ["mid:7b", "large:70b"]

    def test_max_bound(self, models: list[Model]) -> None:
        names = [m.name for m in filter_by_size(models, max_bytes=4 * GB)]
        assert names == ["small:1b", "mid:7b"]

    def test_bounds_are_inclusive(self, models: list[Model]) -> None:
        names = [m.name for m in filter_by_size(models, 4 * GB, 4 * GB)]
        assert names == ["mid:7b"]

    def test_unknown_size_dropped_with_range(self, models: list[Model]) -> None:
        names = [m.name for m in filter_by_size(models, min_bytes=1)]
        assert "mystery:latest" not in names
