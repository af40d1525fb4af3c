"""
Skill document validator.

Lints a single SKILL.md against the corpus conventions:

- Frontmatter parses as YAML and carries non-empty name/description strings
- name is a colon-namespaced identifier, e.g. "debug:django"
- Every fenced code block is closed
- Documents stay within a reasonable length
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skilldocs.infrastructure.skill.code_fences import scan_code_fences
from skilldocs.infrastructure.skill.markdown_parser import (
    MarkdownParseError,
    MarkdownParser,
    SkillMarkdown,
)


@dataclass
class ValidationError:
    """
    A single validation error or warning.

    Attributes:
        severity: "error" or "warning"
        field: The field or rule that failed validation
        message: Human-readable error message
        suggestion: Optional suggestion for fixing the error
        line: Optional 1-based line number in the SKILL.md file
    """

    severity: str  # "error" | "warning"
    field: str
    message: str
    suggestion: str | None = None
    line: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "severity": self.severity,
            "field": self.field,
            "message": self.message,
            "suggestion": self.suggestion,
            "line": self.line,
        }

    def describe(self) -> str:
        location = f"line {self.line}: " if self.line is not None else ""
        return f"[{self.field}] {location}{self.message}"


@dataclass
class ValidationResult:
    """
    Result of validating a skill document.

    Attributes:
        is_valid: Whether the skill passes validation (no errors)
        errors: List of validation errors
        warnings: List of validation warnings
        skill_name: Name of the validated skill (if parsed)
    """

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)
    skill_name: str | None = None
    description: str | None = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    def add_error(self, error: ValidationError) -> None:
        """Record an error found after the initial validation pass."""
        self.errors.append(error)
        self.is_valid = False

    def format(self) -> str:
        """
        Format validation result as human-readable string.

        Returns:
            Formatted validation result
        """
        lines = []

        if self.skill_name:
            lines.append(f"Validating: {self.skill_name}")

        if self.has_errors:
            lines.append("Errors:")
            for err in self.errors:
                lines.append(f"  {err.describe()}")
                if err.suggestion:
                    lines.append(f"    Suggestion: {err.suggestion}")

        if self.has_warnings:
            lines.append("Warnings:")
            for warn in self.warnings:
                lines.append(f"  {warn.describe()}")
                if warn.suggestion:
                    lines.append(f"    Suggestion: {warn.suggestion}")

        if not self.has_errors and not self.has_warnings:
            lines.append("Valid")
        elif self.has_errors:
            lines.append(
                f"Result: Invalid ({len(self.errors)} errors, {len(self.warnings)} warnings)"
            )
        else:
            lines.append(f"Result: Valid with warnings ({len(self.warnings)} warnings)")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "is_valid": self.is_valid,
            "skill_name": self.skill_name,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
        }


class SkillValidationError(Exception):
    """
    Exception raised when skill validation fails in strict mode.

    Attributes:
        skill_id: The ID or name of the skill that failed
        errors: List of validation errors
    """

    def __init__(self, skill_id: str, errors: list[ValidationError]) -> None:
        self.skill_id = skill_id
        self.errors = errors
        error_messages = [f"[{e.field}] {e.message}" for e in errors]
        super().__init__(f"Skill '{skill_id}' failed validation: {'; '.join(error_messages)}")


class SkillDocumentValidator:
    """
    Validator for skill documents.

    Rules:
    - name: 1-64 characters, lowercase hyphenated segments joined by ':'
    - description: 1-1024 characters, required
    - compatibility: optional, <=500 characters
    - code fences: every opening fence has a closing fence
    - length: at most ``max_lines`` lines (warning)

    Example:
        validator = SkillDocumentValidator()
        result = validator.validate_file(Path("./skills/debug-django"))
        if not result.is_valid:
            print(result.format())
    """

    # Lowercase alphanumeric segments with single inner hyphens, joined by ':'
    NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*(?::[a-z0-9]+(?:-[a-z0-9]+)*)*$")

    NAME_MAX_LENGTH = 64
    DESCRIPTION_MAX_LENGTH = 1024
    COMPATIBILITY_MAX_LENGTH = 500
    DEFAULT_MAX_LINES = 500

    KNOWN_FIELDS = frozenset(
        {"name", "description", "license", "compatibility", "metadata", "version"}
    )

    def __init__(self, strict: bool = False, max_lines: int = DEFAULT_MAX_LINES) -> None:
        """
        Initialize the validator.

        Args:
            strict: If True, warnings are treated as errors
            max_lines: Length bound for a single document
        """
        self.strict = strict
        self.max_lines = max_lines
        self.parser = MarkdownParser()

    def validate_file(self, skill_path: Path) -> ValidationResult:
        """
        Validate a skill directory.

        Args:
            skill_path: Path to skill directory (containing SKILL.md)

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []

        skill_md = skill_path / "SKILL.md"
        if not skill_md.exists():
            errors.append(
                ValidationError(
                    severity="error",
                    field="file",
                    message="SKILL.md not found",
                    suggestion="Create a SKILL.md file in the skill directory",
                )
            )
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            parsed = self.parser.parse_file(str(skill_md))
        except MarkdownParseError as e:
            errors.append(ValidationError(severity="error", field="format", message=str(e)))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        self._validate_document(parsed, errors, warnings)
        self._validate_directory_name(parsed.name, skill_path, warnings)
        self._validate_directory_structure(skill_path, warnings)

        return self._build_result(parsed, errors, warnings)

    def validate_content(self, content: str, skill_name: str | None = None) -> ValidationResult:
        """
        Validate SKILL.md content directly (without file).

        Args:
            content: Raw SKILL.md content
            skill_name: Optional skill name for error messages

        Returns:
            ValidationResult
        """
        errors: list[ValidationError] = []
        warnings: list[ValidationError] = []

        try:
            parsed = self.parser.parse(content, skill_name)
        except MarkdownParseError as e:
            errors.append(ValidationError(severity="error", field="format", message=str(e)))
            return ValidationResult(
                is_valid=False, errors=errors, warnings=warnings, skill_name=skill_name
            )

        self._validate_document(parsed, errors, warnings)
        return self._build_result(parsed, errors, warnings)

    def _build_result(
        self,
        parsed: SkillMarkdown,
        errors: list[ValidationError],
        warnings: list[ValidationError],
    ) -> ValidationResult:
        # In strict mode, warnings become errors
        if self.strict:
            errors.extend(warnings)
            warnings = []

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            skill_name=parsed.name,
            description=parsed.description,
        )

    def _validate_document(
        self,
        parsed: SkillMarkdown,
        errors: list[ValidationError],
        warnings: list[ValidationError],
    ) -> None:
        """Run the rules that only need the parsed document."""
        self._validate_name(parsed.frontmatter, parsed.name, errors)
        self._validate_description(parsed.frontmatter, errors)

        compatibility = parsed.frontmatter.get("compatibility")
        if compatibility:
            self._validate_compatibility(str(compatibility), errors)

        self._validate_code_fences(parsed, errors, warnings)
        self._validate_length(parsed, warnings)

        if not parsed.content.strip():
            warnings.append(
                ValidationError(
                    severity="warning",
                    field="content",
                    message="document body is empty",
                    suggestion="Add the instructions the agent should follow",
                )
            )

        self._check_unknown_fields(parsed.frontmatter, warnings)

    def _validate_name(
        self, frontmatter: dict[str, Any], name: str, errors: list[ValidationError]
    ) -> None:
        """Validate the name field."""
        raw = frontmatter.get("name")
        if raw is not None and not isinstance(raw, str):
            errors.append(
                ValidationError(
                    severity="error",
                    field="name",
                    message=f"name must be a string, got {type(raw).__name__}",
                    suggestion="Quote the name so YAML reads it as text",
                )
            )
            return

        if not name:
            errors.append(
                ValidationError(severity="error", field="name", message="name is required")
            )
            return

        if len(name) > self.NAME_MAX_LENGTH:
            errors.append(
                ValidationError(
                    severity="error",
                    field="name",
                    message=f"name must be 1-{self.NAME_MAX_LENGTH} characters, got {len(name)}",
                    suggestion=f"Shorten the name to max {self.NAME_MAX_LENGTH} characters",
                )
            )

        if not self.NAME_PATTERN.match(name):
            errors.append(
                ValidationError(
                    severity="error",
                    field="name",
                    message=f"name '{name}' must be lowercase hyphenated segments "
                    "joined by ':', no leading/trailing/consecutive hyphens",
                    suggestion="Use format: 'debug:django' or 'refactor:react-hooks'",
                )
            )

    def _validate_description(
        self, frontmatter: dict[str, Any], errors: list[ValidationError]
    ) -> None:
        """Validate the description field as written, ignoring desc/summary."""
        if "description" not in frontmatter:
            errors.append(
                ValidationError(
                    severity="error",
                    field="description",
                    message="frontmatter has no 'description' field",
                    suggestion="Add a 'description' field; 'desc' and 'summary' are not read",
                )
            )
            return

        description = frontmatter["description"]
        if description is not None and not isinstance(description, str):
            errors.append(
                ValidationError(
                    severity="error",
                    field="description",
                    message=f"description must be a string, got {type(description).__name__}",
                    suggestion="Quote the description so YAML reads it as text",
                )
            )
            return

        if not description or not description.strip():
            errors.append(
                ValidationError(
                    severity="error",
                    field="description",
                    message="description is required and cannot be empty",
                    suggestion="Add a clear description explaining when to use the skill",
                )
            )
            return

        if len(description) > self.DESCRIPTION_MAX_LENGTH:
            errors.append(
                ValidationError(
                    severity="error",
                    field="description",
                    message=f"description must be 1-{self.DESCRIPTION_MAX_LENGTH} characters, "
                    f"got {len(description)}",
                    suggestion=f"Keep description concise (max {self.DESCRIPTION_MAX_LENGTH} characters)",
                )
            )

    def _validate_compatibility(self, compatibility: str, errors: list[ValidationError]) -> None:
        """Validate the compatibility field."""
        if len(compatibility) > self.COMPATIBILITY_MAX_LENGTH:
            errors.append(
                ValidationError(
                    severity="error",
                    field="compatibility",
                    message=f"compatibility must be <={self.COMPATIBILITY_MAX_LENGTH} characters, "
                    f"got {len(compatibility)}",
                    suggestion="Simplify environment requirements description",
                )
            )

    def _validate_code_fences(
        self,
        parsed: SkillMarkdown,
        errors: list[ValidationError],
        warnings: list[ValidationError],
    ) -> None:
        """Check that every fenced code block is closed."""
        scan = scan_code_fences(parsed.content, first_line=parsed.body_line)

        if scan.unclosed is not None:
            errors.append(
                ValidationError(
                    severity="error",
                    field="code_fence",
                    message=f"code fence '{scan.unclosed.marker}' opened here is never closed",
                    suggestion=f"Close the block with a line containing '{scan.unclosed.marker}'",
                    line=scan.unclosed.start_line,
                )
            )

        for block in scan.unlabelled:
            warnings.append(
                ValidationError(
                    severity="warning",
                    field="code_fence",
                    message="code block does not declare a language",
                    suggestion="Add an info string, e.g. ```python",
                    line=block.start_line,
                )
            )

    def _validate_length(self, parsed: SkillMarkdown, warnings: list[ValidationError]) -> None:
        line_count = parsed.line_count
        if line_count > self.max_lines:
            warnings.append(
                ValidationError(
                    severity="warning",
                    field="length",
                    message=f"document has {line_count} lines, limit is {self.max_lines}",
                    suggestion="Move reference material into references/ files",
                )
            )

    def _validate_directory_name(
        self, name: str, skill_path: Path, warnings: list[ValidationError]
    ) -> None:
        """The directory encodes the skill identifier: debug:django -> debug-django."""
        expected = name.replace(":", "-")
        if skill_path.name != expected:
            warnings.append(
                ValidationError(
                    severity="warning",
                    field="name",
                    message=f"directory '{skill_path.name}' does not match name '{name}'",
                    suggestion=f"Rename the directory to '{expected}'",
                )
            )

    def _validate_directory_structure(
        self, skill_path: Path, warnings: list[ValidationError]
    ) -> None:
        """Validate the skill directory structure."""
        if (skill_path / "resources").exists():
            warnings.append(
                ValidationError(
                    severity="warning",
                    field="directory",
                    message="'resources/' directory is deprecated",
                    suggestion="Rename to 'references/' or 'assets/'",
                )
            )

    def _check_unknown_fields(
        self, frontmatter: dict[str, Any], warnings: list[ValidationError]
    ) -> None:
        for field_name in frontmatter:
            if field_name not in self.KNOWN_FIELDS:
                warnings.append(
                    ValidationError(
                        severity="warning",
                        field="frontmatter",
                        message=f"unknown frontmatter field '{field_name}'",
                        suggestion="Keep frontmatter to name, description and optional "
                        "license, compatibility, metadata, version",
                    )
                )
