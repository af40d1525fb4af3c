"""Application services for the skill corpus."""

from skilldocs.application.services.corpus_lint_service import (
    CatalogEntry,
    CorpusLintService,
    CorpusReport,
    SkillReport,
)

__all__ = [
    "CatalogEntry",
    "CorpusLintService",
    "CorpusReport",
    "SkillReport",
]
