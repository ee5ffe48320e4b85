"""
Unit Tests for DraftCache

Tests for saving, resuming and deleting drafts keyed by paper name.
"""

import json

import pytest

from paper_toolkit.assembler import AssemblerConfig, PaperAssembler
from paper_toolkit.core.schemas.validator import ValidationError
from paper_toolkit.storage import DraftCache, DraftCacheError


@pytest.fixture
def cache(tmp_path) -> DraftCache:
    return DraftCache(tmp_path / "drafts.json")


@pytest.fixture
def draft(mixed_bank) -> PaperAssembler:
    assembler = PaperAssembler(mixed_bank, AssemblerConfig(seed=5))
    assembler.update_metadata(template_name="Midterm", paper_name="AI-101")
    assembler.add_section()
    assembler.update_section(0, "difficulty", "Hard")
    assembler.generate_section(0)
    return assembler


class TestDraftCacheSave:

    def test_save_when_named_draft_then_listed(self, cache, draft):
        assert cache.save(draft) == "AI-101"
        assert cache.names() == ["AI-101"]

    def test_save_when_same_name_twice_then_replaced(self, cache, draft):
        cache.save(draft)
        draft.add_section()
        cache.save(draft)

        assert cache.names() == ["AI-101"]
        assert len(cache.load("AI-101")["sections"]) == 2

    def test_save_when_paper_name_blank_then_raises_error(self, cache, mixed_bank):
        assembler = PaperAssembler(mixed_bank)
        with pytest.raises(ValidationError, match="paper name"):
            cache.save(assembler)
        assert not cache.path.exists()

    def test_save_when_snapshot_invalid_then_raises_error(self, cache):
        with pytest.raises(ValidationError):
            cache.save({"schema_version": 1, "metadata": {"paper_name": "X"}})


class TestDraftCacheLoad:

    def test_load_when_absent_then_none(self, cache):
        assert cache.load("nothing") is None
        assert cache.resume("nothing", []) is None

    def test_resume_when_saved_then_same_selection_and_total(self, cache, draft, mixed_bank):
        cache.save(draft)

        resumed = cache.resume("AI-101", mixed_bank)

        assert resumed.total_marks == draft.total_marks == 16
        assert resumed.section(0).selected_questions == draft.section(0).selected_questions

    def test_load_when_stored_draft_corrupt_then_raises_cache_error(self, cache):
        cache.path.write_text(
            json.dumps({"version": 1, "drafts": {"Bad": {"schema_version": 1}}}),
            encoding="utf-8",
        )
        with pytest.raises(DraftCacheError, match="invalid"):
            cache.load("Bad")

    def test_names_when_file_not_json_then_raises_cache_error(self, cache):
        cache.path.write_text("{oops", encoding="utf-8")
        with pytest.raises(DraftCacheError, match="unreadable"):
            cache.names()


    def test_resume_when_name_has_surrounding_whitespace_then_found(self, cache, draft, mixed_bank):
        draft.update_metadata(paper_name="  AI-101 ")
        cache.save(draft)

        resumed = cache.resume(draft.metadata.paper_name, mixed_bank)

        assert cache.names() == ["AI-101"]
        assert resumed is not None
        assert resumed.total_marks == 16
        assert cache.load("AI-101") is not None


class TestDraftCacheDelete:

    def test_delete_when_present_then_removed(self, cache, draft):
        cache.save(draft)
        assert cache.delete("AI-101") is True
        assert cache.names() == []

    def test_delete_when_name_has_whitespace_then_removed(self, cache, draft):
        cache.save(draft)
        assert cache.delete(" AI-101  ") is True
        assert cache.names() == []

    def test_delete_when_absent_then_false(self, cache):
        assert cache.delete("AI-101") is False
