"""Tests for the submission result value and adapter protocol."""

from paper_toolkit.assembler.submission import SubmissionAdapter, SubmissionResult
from paper_toolkit.storage import LocalPaperStore


class TestSubmissionResult:

    def test_success_when_reference_then_ok(self):
        result = SubmissionResult.success(reference="abc")
        assert result.ok
        assert result.reason == ""
        assert result.reference == "abc"

    def test_failure_when_reason_then_not_ok(self):
        result = SubmissionResult.failure("Paper name already exists")
        assert not result.ok
        assert result.reason == "Paper name already exists"


class TestSubmissionAdapter:

    def test_isinstance_when_local_store_then_adapter(self, tmp_path):
        assert isinstance(LocalPaperStore(tmp_path / "papers.json"), SubmissionAdapter)

    def test_isinstance_when_no_submit_then_not_adapter(self):
        assert not isinstance(object(), SubmissionAdapter)
