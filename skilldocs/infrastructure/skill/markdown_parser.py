"""
SKILL.md file parser.

Parses SKILL.md files with YAML Frontmatter and Markdown content.

Example SKILL.md:
```markdown
---
name: debug:fastapi
description: "Diagnose failing FastAPI endpoints, dependencies and startup errors"
---

# Debugging FastAPI

## Workflow
1. Reproduce the failing request
2. Read the traceback from the bottom up
```
"""

import re
from dataclasses import dataclass, field
from typing import Any, cast

import yaml


class MarkdownParseError(Exception):
    """Exception raised when SKILL.md parsing fails."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        super().__init__(f"{message}" + (f" in {file_path}" if file_path else ""))


@dataclass(frozen=True)
class SkillMarkdown:
    """
    Parsed SKILL.md file content.

    Attributes:
        frontmatter: YAML Frontmatter as a dictionary
        content: Markdown body (everything after the frontmatter)
        name: Skill name from frontmatter, e.g. "debug:django"
        description: Skill description from frontmatter
        body_line: 1-based line number in the file where the body starts
        raw: The document exactly as read

        license: License identifier (e.g., "MIT", "Apache-2.0")
        compatibility: Environment requirements (e.g., "Django 4.2+")
        metadata: Key-value metadata (e.g., author, tags)
        version: Document version, if declared
    """

    frontmatter: dict[str, Any]
    content: str
    name: str
    description: str
    body_line: int = 1
    raw: str = ""
    license: str | None = None
    compatibility: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    version: str | None = None

    @property
    def full_content(self) -> str:
        """Return the full markdown content including frontmatter."""
        yaml_str = yaml.dump(self.frontmatter, default_flow_style=False, allow_unicode=True)
        return f"---\n{yaml_str}---\n\n{self.content}"

    @property
    def line_count(self) -> int:
        """Number of lines in the document as read."""
        source = self.raw or self.full_content
        return len(source.splitlines())


class MarkdownParser:
    """
    Parser for SKILL.md files.

    Supports the standard format:
    - YAML Frontmatter delimited by ---
    - Markdown content after the frontmatter
    """

    # Regex to match YAML frontmatter: starts with ---, content, ends with ---
    FRONTMATTER_PATTERN = re.compile(
        r"^---[ \t]*\n(.*?)\n---[ \t]*\n?(.*)$",
        re.DOTALL,
    )

    def parse(self, content: str, file_path: str | None = None) -> SkillMarkdown:
        """
        Parse a SKILL.md file content.

        Args:
            content: Raw file content as string
            file_path: Optional file path for error messages

        Returns:
            SkillMarkdown object with parsed frontmatter and content

        Raises:
            MarkdownParseError: If parsing fails
        """
        if not content or not content.strip():
            raise MarkdownParseError("Empty content", file_path)

        # Windows checkouts must not break the frontmatter regex
        content = content.replace("\r\n", "\n")

        frontmatter, markdown_content, body_line = self._extract_frontmatter(content, file_path)

        name = frontmatter.get("name")
        if not name:
            raise MarkdownParseError(
                "Missing required field 'name' in frontmatter",
                file_path,
            )

        description = self._extract_description(frontmatter)
        license_field, compatibility, metadata, version_str = self._extract_optional_fields(
            frontmatter
        )

        return SkillMarkdown(
            frontmatter=frontmatter,
            content=markdown_content,
            name=str(name),
            description=description,
            body_line=body_line,
            raw=content,
            license=str(license_field) if license_field else None,
            compatibility=str(compatibility) if compatibility else None,
            metadata=metadata,
            version=version_str,
        )

    def _extract_frontmatter(
        self, content: str, file_path: str | None
    ) -> tuple[dict[str, Any], str, int]:
        """Parse the YAML frontmatter, returning (frontmatter_dict, body, body_line)."""
        match = self.FRONTMATTER_PATTERN.match(content)
        if not match:
            raise MarkdownParseError(
                "Invalid SKILL.md format: missing or malformed YAML frontmatter. "
                "File must start with '---' followed by YAML and closing '---'",
                file_path,
            )

        frontmatter_yaml = match.group(1)
        body = match.group(2)

        # Leading blank lines are stripped from the body, so count them
        # to keep line numbers pointing into the original file.
        stripped_body = body.lstrip("\n")
        skipped = len(body) - len(stripped_body)
        body_line = content[: match.start(2)].count("\n") + 1 + skipped

        try:
            frontmatter = yaml.safe_load(frontmatter_yaml)
        except yaml.YAMLError as e:
            raise MarkdownParseError(f"Invalid YAML frontmatter: {e}", file_path) from e

        if not isinstance(frontmatter, dict):
            raise MarkdownParseError(
                "YAML frontmatter must be a dictionary/object",
                file_path,
            )

        return frontmatter, stripped_body.rstrip(), body_line

    def _extract_description(self, frontmatter: dict[str, Any]) -> str:
        """Extract description from frontmatter, trying alternative field names."""
        description = frontmatter.get("description", "")
        if not description:
            description = frontmatter.get("desc", "") or frontmatter.get("summary", "")
        if description is None:
            return ""
        return cast(str, description) if isinstance(description, str) else str(description)

    def _extract_optional_fields(
        self, frontmatter: dict[str, Any]
    ) -> tuple[Any, Any, dict[str, Any], str | None]:
        """Extract optional fields (license, compatibility, metadata, version)."""
        license_field = frontmatter.get("license")
        compatibility = frontmatter.get("compatibility")
        metadata = frontmatter.get("metadata", {})
        if not isinstance(metadata, dict):
            metadata = {}

        version_field = frontmatter.get("version")
        version_str = str(version_field).strip() if version_field is not None else None

        return license_field, compatibility, metadata, version_str

    def parse_file(self, file_path: str) -> SkillMarkdown:
        """
        Parse a SKILL.md file from disk.

        Args:
            file_path: Path to the SKILL.md file

        Returns:
            SkillMarkdown object

        Raises:
            MarkdownParseError: If the file is missing, unreadable or malformed
        """
        try:
            with open(file_path, encoding="utf-8-sig") as f:
                content = f.read()
        except FileNotFoundError:
            raise MarkdownParseError(f"File not found: {file_path}", file_path) from None
        except UnicodeDecodeError as e:
            raise MarkdownParseError(f"File is not valid UTF-8: {e}", file_path) from e
        except OSError as e:
            raise MarkdownParseError(f"Error reading file: {e}", file_path) from e

        return self.parse(content, file_path)
