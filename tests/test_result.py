"""Tests for the result envelope and error taxonomy."""

from pctf.errors import (
    CertificationError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    PCTFError,
    ValidationError,
)
from pctf.models.result import ProcessResult


class TestErrors:
    def test_default_message_becomes_issue(self) -> None:
        err = NotFoundError()
        assert str(err) == "Participant not found"
        assert err.issues == ["Participant not found"]

    def test_detail_becomes_issue(self) -> None:
        err = DuplicateError("Participant already registered: ASP-001")
        assert err.issues == ["Participant already registered: ASP-001"]

    def test_issues_kept_in_full(self) -> None:
        err = CertificationError(issues=["a", "b"])
        assert err.issues == ["a", "b"]
        assert str(err) == "a"

    def test_taxonomy(self) -> None:
        for cls in (ValidationError, DuplicateError, NotFoundError,
                    CertificationError, IntegrityError):
            assert issubclass(cls, PCTFError)


class TestProcessResult:
    def test_ok(self) -> None:
        result = ProcessResult.ok("Done", participant_id="ASP-001")
        assert result.success
        assert result.data == {"participant_id": "ASP-001"}
        assert result.errors == []
        assert result.error_type is None
        assert result.timestamp.tzinfo is not None

    def test_from_taxonomy_error(self) -> None:
        result = ProcessResult.from_error(IntegrityError(issues=["x", "y"]))
        assert not result.success
        assert result.message == "Registry integrity validation failed"
        assert result.errors == ["x", "y"]
        assert result.error_type == "IntegrityError"

    def test_message_override(self) -> None:
        result = ProcessResult.from_error(NotFoundError(), "Participant not found in trust registry")
        assert result.message == "Participant not found in trust registry"

    def test_from_unexpected_error(self) -> None:
        result = ProcessResult.from_error(TypeError("bad input"))
        assert result.message == "Operation failed"
        assert result.errors == ["bad input"]
        assert result.error_type == "TypeError"

    def test_unexpected_error_without_text(self) -> None:
        result = ProcessResult.from_error(AttributeError(), "Failed")
        assert result.errors == ["AttributeError"]
