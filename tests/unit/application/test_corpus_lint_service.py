"""Unit tests for CorpusLintService."""

import pytest

from skilldocs.application.services.corpus_lint_service import CorpusLintService
from skilldocs.configuration.config import Settings
from skilldocs.infrastructure.skill.validator import SkillValidationError


@pytest.fixture
def service():
    return CorpusLintService(settings=Settings())


class TestCorpusLintService:
    """Tests for CorpusLintService.lint."""

    def test_lint_valid_corpus(self, corpus_root, service):
        """Test that a corpus of valid skills passes."""
        report = service.lint(corpus_root)

        assert report.count == 2
        assert report.passed == 2
        assert report.failed == 0
        assert report.is_valid
        report.raise_for_errors()

    def test_duplicate_names_fail_every_copy(self, tmp_path, write_skill, service):
        """Test that every document sharing a name gets an error."""
        skills = tmp_path / "skills"
        write_skill(skills, "debug-example")
        write_skill(skills, "debug-example-copy")

        report = service.lint(tmp_path)

        assert report.failed == 2
        for skill_id, other in (
            ("debug-example", "debug-example-copy"),
            ("debug-example-copy", "debug-example"),
        ):
            errors = report.get(skill_id).result.errors
            duplicate = [e for e in errors if "also used by" in e.message]
            assert len(duplicate) == 1
            assert other in duplicate[0].message

    def test_invalid_skill_fails(self, tmp_path, write_skill, service):
        """Test that a skill with an unclosed fence fails the corpus."""
        skills = tmp_path / "skills"
        write_skill(skills, "debug-example")
        write_skill(
            skills,
            "debug-broken",
            "---\nname: debug:broken\ndescription: Broken\n---\n```python\nx = 1\n",
        )

        report = service.lint(tmp_path)

        assert not report.is_valid
        assert report.passed == 1
        assert report.get("debug-broken").result.errors[0].field == "code_fence"
        with pytest.raises(SkillValidationError, match="debug:broken"):
            report.raise_for_errors()

    def test_missing_description_key_fails(self, tmp_path, write_skill, service):
        """Test that a skill with only a desc field fails the corpus."""
        write_skill(
            tmp_path / "skills",
            "debug-example",
            "---\nname: debug:example\ndesc: D\n---\n# Body\n",
        )

        report = service.lint(tmp_path)

        assert not report.is_valid
        assert report.get("debug-example").result.errors[0].field == "description"

    def test_linked_skill_is_not_its_own_duplicate(self, tmp_path, write_skill, service):
        """Test that a symlinked skill directory does not trip name uniqueness."""
        skill_dir = write_skill(tmp_path / "skills", "debug-example")
        (tmp_path / "skills" / "example-alias").symlink_to(skill_dir, target_is_directory=True)

        report = service.lint(tmp_path)

        assert report.count == 1
        assert report.is_valid

    def test_scan_errors_invalidate_report(self, tmp_path, service):
        """Test that scanner errors are carried into the report."""
        report = service.lint(tmp_path / "missing")

        assert report.count == 0
        assert report.errors
        assert not report.is_valid

    def test_strict_settings(self, tmp_path, write_skill, valid_skill):
        """Test that SKILL_STRICT turns warnings into failures."""
        write_skill(tmp_path / "skills", "debug-example", valid_skill.replace("```python", "```"))

        lenient = CorpusLintService(settings=Settings()).lint(tmp_path)
        strict = CorpusLintService(settings=Settings(skill_strict=True)).lint(tmp_path)

        assert lenient.is_valid
        assert not strict.is_valid

    def test_max_lines_setting(self, tmp_path, write_skill):
        """Test that SKILL_MAX_LINES is passed to the validator."""
        write_skill(tmp_path / "skills", "debug-example")

        report = CorpusLintService(settings=Settings(skill_max_lines=3)).lint(tmp_path)

        warnings = report.get("debug-example").result.warnings
        assert any(w.field == "length" for w in warnings)

    def test_skill_dirs_setting(self, tmp_path, write_skill):
        """Test that SKILL_DIRS selects the scanned directories."""
        write_skill(tmp_path / "docs" / "skills", "debug-example")

        report = CorpusLintService(settings=Settings(skill_dirs=["docs/skills"])).lint(tmp_path)

        assert report.count == 1

    def test_lint_directory(self, corpus_root, service):
        """Test linting a directory that holds skills directly."""
        report = service.lint_directory(corpus_root / "skills")

        assert report.count == 2
        assert report.is_valid


class TestCatalog:
    """Tests for CorpusLintService.catalog."""

    def test_catalog_sorted_by_name(self, corpus_root, service):
        """Test that the catalog lists name, description and path."""
        entries = service.catalog(corpus_root)

        assert [e.name for e in entries] == ["debug:example", "refactor:example"]
        assert entries[0].description == "Debug the example framework."
        assert entries[0].path.name == "SKILL.md"
        assert entries[0].to_dict()["name"] == "debug:example"

    def test_catalog_skips_unparseable_documents(self, corpus_root, write_skill, service):
        """Test that documents without parseable frontmatter are left out."""
        write_skill(corpus_root / "skills", "debug-broken", "no frontmatter")

        entries = service.catalog(corpus_root)

        assert len(entries) == 2


class TestCorpusReport:
    """Tests for CorpusReport formatting."""

    def test_format_and_to_dict(self, tmp_path, write_skill, service):
        """Test text and dict output of a mixed report."""
        skills = tmp_path / "skills"
        write_skill(skills, "debug-example")
        write_skill(skills, "debug-broken", "no frontmatter")

        report = service.lint(tmp_path)
        text = report.format()
        data = report.to_dict()

        assert "[PASS] debug-example" in text
        assert "[FAIL] debug-broken" in text
        assert "Passed:  1" in text
        assert "Failed:  1" in text
        assert data["passed"] == 1
        assert data["failed"] == 1
        assert data["is_valid"] is False
        assert {s["skill_id"] for s in data["skills"]} == {"debug-example", "debug-broken"}
