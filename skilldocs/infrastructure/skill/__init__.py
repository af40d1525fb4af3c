"""
Skill infrastructure components.

This module provides infrastructure-level components for the skill corpus:
- MarkdownParser: Parse SKILL.md files (YAML Frontmatter + Markdown)
- scan_code_fences: Find fenced code blocks and report unclosed ones
- FileSystemSkillScanner: Scan directories for SKILL.md files
- SkillDocumentValidator: Lint a single skill document
"""

from skilldocs.infrastructure.skill.code_fences import CodeFence, FenceScan, scan_code_fences
from skilldocs.infrastructure.skill.filesystem_scanner import (
    FileSystemSkillScanner,
    ScanResult,
    SkillFileInfo,
)
from skilldocs.infrastructure.skill.markdown_parser import (
    MarkdownParseError,
    MarkdownParser,
    SkillMarkdown,
)
from skilldocs.infrastructure.skill.validator import (
    SkillDocumentValidator,
    SkillValidationError,
    ValidationError,
    ValidationResult,
)

__all__ = [
    "CodeFence",
    "FenceScan",
    "scan_code_fences",
    "MarkdownParser",
    "MarkdownParseError",
    "SkillMarkdown",
    "FileSystemSkillScanner",
    "ScanResult",
    "SkillFileInfo",
    "SkillDocumentValidator",
    "SkillValidationError",
    "ValidationError",
    "ValidationResult",
]
