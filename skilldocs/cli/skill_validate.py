#!/usr/bin/env python3
"""
Skill corpus validation CLI tool.

Lints SKILL.md documents: frontmatter, unique names, closed code fences
and document length.

Usage:
    python -m skilldocs.cli.skill_validate ./skills/debug-django
    python -m skilldocs.cli.skill_validate --strict ./skills/debug-django
    python -m skilldocs.cli.skill_validate --all .

Examples:
    # Validate a single skill
    skilldocs-validate ./skills/debug-fastapi

    # Validate the whole corpus (root or skills directory)
    skilldocs-validate --all .
    skilldocs-validate --all ./skills

    # Strict mode (warnings treated as errors), JSON output
    skilldocs-validate --all --strict --format json .

    # Print name/description of every skill
    skilldocs-validate --list .
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from skilldocs.application.services.corpus_lint_service import CorpusLintService, CorpusReport
from skilldocs.configuration.config import get_settings
from skilldocs.infrastructure.skill.validator import SkillDocumentValidator

logger = logging.getLogger("skilldocs.cli")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def validate_single(
    skill_path: Path, validator: SkillDocumentValidator, output_format: str = "text"
) -> bool:
    """
    Validate a single skill directory.

    Returns:
        True if validation passed
    """
    result = validator.validate_file(skill_path)

    if output_format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"\n{'=' * 60}")
        print(f"Skill: {skill_path.name}")
        print(f"{'=' * 60}")
        print(result.format())

    return result.is_valid


def lint_corpus(path: Path, service: CorpusLintService) -> CorpusReport:
    """Lint a corpus root, or a skills directory when the root layout is absent."""
    report = service.lint(path)
    if report.count == 0 and not report.errors:
        logger.debug(f"No configured skill directories under {path}, scanning it directly")
        report = service.lint_directory(path)
    return report


def validate_all(
    path: Path,
    service: CorpusLintService,
    output_format: str = "text",
    quiet: bool = False,
) -> bool:
    """
    Validate all skills below a directory.

    Returns:
        True if every skill passed
    """
    report = lint_corpus(path, service)

    if output_format == "json":
        print(json.dumps(report.to_dict(), indent=2))
        return report.is_valid

    if report.count == 0:
        print(f"No skills found in {path}")
        return report.is_valid

    print(f"\nFound {report.count} skills to validate\n")
    if quiet:
        print("Summary:")
        print(f"  Passed:  {report.passed}")
        print(f"  Failed:  {report.failed}")
    else:
        print(report.format())

    return report.is_valid


def print_catalog(path: Path, service: CorpusLintService, output_format: str = "text") -> None:
    entries = service.build_catalog(lint_corpus(path, service))

    if output_format == "json":
        print(json.dumps([entry.to_dict() for entry in entries], indent=2))
        return

    for entry in entries:
        print(f"{entry.name}\t{entry.description}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skilldocs-validate",
        description="Validate SKILL.md documents in a skill corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ./skills/debug-django
  %(prog)s --all .
  %(prog)s --strict --all ./skills
  %(prog)s --list .
        """,
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to skill directory (or corpus root with --all/--list). "
        "Defaults to SKILLS_ROOT",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Strict mode (treat warnings as errors)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Validate all skills in directory",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the name and description of every skill",
    )
    parser.add_argument(
        "--max-lines",
        type=int,
        default=None,
        help="Maximum document length in lines (default: SKILL_MAX_LINES)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode (only show summary)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}")
        return 1

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    path: Path = args.path if args.path is not None else settings.skills_root
    strict = settings.skill_strict if args.strict is None else args.strict
    max_lines = args.max_lines if args.max_lines is not None else settings.skill_max_lines

    if max_lines <= 0:
        print(f"Error: --max-lines must be positive, got {max_lines}")
        return 1

    if not path.exists():
        print(f"Error: Path not found: {path}")
        return 1

    if not path.is_dir():
        print(f"Error: {path} is not a directory")
        return 1

    validator = SkillDocumentValidator(strict=strict, max_lines=max_lines)
    service = CorpusLintService(settings=settings, validator=validator)

    if args.list:
        print_catalog(path, service, args.format)
        return 0

    if args.format == "text":
        print("Skill Document Validator")
        print(f"Mode: {'Strict' if strict else 'Normal'}")

    if args.all:
        return 0 if validate_all(path, service, args.format, args.quiet) else 1

    skill_md = path / "SKILL.md"
    if not skill_md.exists():
        print(f"Error: SKILL.md not found in {path}")
        return 1

    return 0 if validate_single(path, validator, args.format) else 1


if __name__ == "__main__":
    sys.exit(main())
