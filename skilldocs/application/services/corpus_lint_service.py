"""
Corpus lint service.

Lints every skill document in a corpus and enforces the rules that need
the whole corpus at once, such as unique skill names. Combines the
scanner and validator.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skilldocs.configuration.config import Settings, get_settings
from skilldocs.infrastructure.skill.filesystem_scanner import (
    FileSystemSkillScanner,
    ScanResult,
    SkillFileInfo,
)
from skilldocs.infrastructure.skill.validator import (
    SkillDocumentValidator,
    SkillValidationError,
    ValidationError,
    ValidationResult,
)

logger = logging.getLogger(__name__)


@dataclass
class SkillReport:
    """Validation outcome for one discovered skill."""

    info: SkillFileInfo
    result: ValidationResult

    def to_dict(self) -> dict[str, Any]:
        data = self.result.to_dict()
        data["skill_id"] = self.info.skill_id
        data["path"] = str(self.info.file_path)
        return data


@dataclass(frozen=True)
class CatalogEntry:
    """Front-matter metadata of one skill, as a host agent would read it."""

    name: str
    description: str
    path: Path

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "description": self.description, "path": str(self.path)}


@dataclass
class CorpusReport:
    """
    Result of linting a whole corpus.

    Attributes:
        skills: Per-skill reports, in path order
        errors: Errors raised while scanning (unreadable directories etc.)
    """

    skills: list[SkillReport] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.skills)

    @property
    def passed(self) -> int:
        return sum(1 for report in self.skills if report.result.is_valid)

    @property
    def failed(self) -> int:
        return self.count - self.passed

    @property
    def is_valid(self) -> bool:
        return self.failed == 0 and not self.errors

    def get(self, skill_id: str) -> SkillReport | None:
        """Find a report by skill directory name."""
        for report in self.skills:
            if report.info.skill_id == skill_id:
                return report
        return None

    def raise_for_errors(self) -> None:
        """
        Raise SkillValidationError for the first failing skill.

        Raises:
            SkillValidationError: If any skill has errors
        """
        for report in self.skills:
            if report.result.has_errors:
                raise SkillValidationError(
                    report.result.skill_name or report.info.skill_id, report.result.errors
                )

    def format(self) -> str:
        """Format the report as human-readable text."""
        lines = []
        for report in self.skills:
            status = "PASS" if report.result.is_valid else "FAIL"
            lines.append(f"  [{status}] {report.info.skill_id}")
            for err in report.result.errors:
                lines.append(f"      Error: {err.describe()}")
            for warn in report.result.warnings:
                lines.append(f"      Warning: {warn.describe()}")

        for error in self.errors:
            lines.append(f"  [SCAN] {error}")

        lines.append("")
        lines.append("Summary:")
        lines.append(f"  Passed:  {self.passed}")
        lines.append(f"  Failed:  {self.failed}")
        if self.errors:
            lines.append(f"  Scan errors: {len(self.errors)}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "is_valid": self.is_valid,
            "passed": self.passed,
            "failed": self.failed,
            "skills": [report.to_dict() for report in self.skills],
            "errors": list(self.errors),
        }


class CorpusLintService:
    """
    Lints a corpus of SKILL.md documents.

    Example:
        service = CorpusLintService()
        report = service.lint(Path("."))
        print(report.format())
    """

    def __init__(
        self,
        settings: Settings | None = None,
        scanner: FileSystemSkillScanner | None = None,
        validator: SkillDocumentValidator | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.scanner = scanner or FileSystemSkillScanner(skill_dirs=self.settings.skill_dir_list)
        self.validator = validator or SkillDocumentValidator(
            strict=self.settings.skill_strict,
            max_lines=self.settings.skill_max_lines,
        )

    def lint(self, base_path: Path) -> CorpusReport:
        """
        Lint every skill under the configured directories of a corpus root.

        Args:
            base_path: Corpus root (the directory containing skills/)

        Returns:
            CorpusReport with one entry per discovered skill
        """
        return self._lint_scan(self.scanner.scan(base_path))

    def lint_directory(self, skills_dir: Path) -> CorpusReport:
        """
        Lint every skill below a directory that holds skills directly.

        Args:
            skills_dir: Directory such as ./skills

        Returns:
            CorpusReport with one entry per discovered skill
        """
        return self._lint_scan(self.scanner.scan_directory(skills_dir))

    def catalog(self, base_path: Path) -> list[CatalogEntry]:
        """
        List name, description and path for every parseable skill.

        Args:
            base_path: Corpus root

        Returns:
            Catalog entries sorted by skill name
        """
        return self.build_catalog(self.lint(base_path))

    @staticmethod
    def build_catalog(report: CorpusReport) -> list[CatalogEntry]:
        """Catalog entries for every skill in a report whose frontmatter parsed."""
        entries = [
            CatalogEntry(
                name=r.result.skill_name,
                description=r.result.description or "",
                path=r.info.file_path,
            )
            for r in report.skills
            if r.result.skill_name
        ]
        return sorted(entries, key=lambda entry: entry.name)

    def _lint_scan(self, scan: ScanResult) -> CorpusReport:
        report = CorpusReport(errors=list(scan.errors))
        logger.debug(f"Linting {scan.count} skills from {sorted(scan.scanned_dirs)}")

        for info in scan.skills:
            result = self.validator.validate_file(info.skill_dir)
            report.skills.append(SkillReport(info=info, result=result))

        self._check_unique_names(report)

        for error in report.errors:
            logger.warning(error)
        return report

    def _check_unique_names(self, report: CorpusReport) -> None:
        """Every skill sharing a name with another one gets an error."""
        by_name: dict[str, list[SkillReport]] = defaultdict(list)
        for skill_report in report.skills:
            if skill_report.result.skill_name:
                by_name[skill_report.result.skill_name].append(skill_report)

        for name, reports in by_name.items():
            if len(reports) < 2:
                continue
            logger.debug(f"Duplicate skill name '{name}' in {len(reports)} documents")
            for skill_report in reports:
                others = [
                    str(other.info.file_path) for other in reports if other is not skill_report
                ]
                skill_report.result.add_error(
                    ValidationError(
                        severity="error",
                        field="name",
                        message=f"name '{name}' is also used by {', '.join(others)}",
                        suggestion="Give every skill a unique name",
                    )
                )
