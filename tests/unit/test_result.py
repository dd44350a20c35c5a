# ABOUTME: Unit tests for the Ok/Empty result type.
# ABOUTME: Verifies emptiness flags and default unwrapping.

from readdit.result import Empty, Ok


class TestResult:
    """Tests for Ok and Empty."""

    def test_ok_holds_value(self) -> None:
        result = Ok([1, 2])
        assert not result.is_empty
        assert result.unwrap_or([]) == [1, 2]

    def test_ok_with_empty_value_is_not_empty(self) -> None:
        assert not Ok([]).is_empty

    def test_empty_falls_back(self) -> None:
        result = Empty("provider down")
        assert result.is_empty
        assert result.reason == "provider down"
        assert result.unwrap_or("default") == "default"
