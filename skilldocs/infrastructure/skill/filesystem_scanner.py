"""
File system skill scanner.

Scans a corpus for SKILL.md files. Each skill lives in its own directory
and the directory name is the skill identifier:

- skills/{skill-id}/SKILL.md (corpus layout)
- {directory}/SKILL.md (a directory that is itself a skill)
- Custom paths
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class SkillFileInfo:
    """
    Information about a discovered SKILL.md file.

    Attributes:
        file_path: Absolute path to the SKILL.md file
        skill_dir: Directory containing the skill (parent of SKILL.md)
        skill_id: Derived skill identifier from directory name
        source_type: Which configured directory the skill came from
    """

    file_path: Path
    skill_dir: Path
    skill_id: str
    source_type: str = "custom"

    @property
    def scripts_dir(self) -> Path:
        """Return the scripts directory path (may not exist)."""
        return self.skill_dir / "scripts"

    @property
    def resources_dir(self) -> Path:
        """Return the resources directory path (deprecated, use references/)."""
        return self.skill_dir / "resources"

    @property
    def references_dir(self) -> Path:
        return self.skill_dir / "references"

    @property
    def assets_dir(self) -> Path:
        return self.skill_dir / "assets"

    def has_scripts(self) -> bool:
        return self.scripts_dir.is_dir()

    def has_resources(self) -> bool:
        return self.resources_dir.is_dir()

    def has_references(self) -> bool:
        return self.references_dir.is_dir()

    def has_assets(self) -> bool:
        return self.assets_dir.is_dir()


@dataclass
class ScanResult:
    """
    Result of scanning directories for skills.

    Attributes:
        skills: List of discovered skill files
        errors: List of paths that failed to scan
        scanned_dirs: Set of directories that were scanned
    """

    skills: list[SkillFileInfo] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    scanned_dirs: set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        """Return the number of skills found."""
        return len(self.skills)

    def get_skill_names(self) -> list[str]:
        """Return list of skill IDs."""
        return [s.skill_id for s in self.skills]


class FileSystemSkillScanner:
    """
    Scanner for SKILL.md files in the file system.

    Example:
        scanner = FileSystemSkillScanner()
        result = scanner.scan(Path("/repo"))
        for skill in result.skills:
            print(f"Found skill: {skill.skill_id} at {skill.file_path}")
    """

    # Default skill directory patterns relative to the corpus root
    DEFAULT_SKILL_DIRS = [
        "skills",
    ]

    # Name of the skill definition file
    SKILL_FILE_NAME = "SKILL.md"

    def __init__(
        self,
        skill_dirs: list[str] | None = None,
        follow_symlinks: bool = True,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            skill_dirs: Directories to scan, relative to the base path.
                Defaults to DEFAULT_SKILL_DIRS.
            follow_symlinks: Whether to resolve symbolic links
        """
        self.skill_dirs = list(skill_dirs) if skill_dirs else list(self.DEFAULT_SKILL_DIRS)
        self.follow_symlinks = follow_symlinks

    def scan(self, base_path: Path) -> ScanResult:
        """
        Scan for SKILL.md files under every configured directory of base path.

        Args:
            base_path: Corpus root to start scanning from

        Returns:
            ScanResult with discovered skills and any errors
        """
        result = ScanResult()

        if not base_path.exists():
            result.errors.append(f"Base path does not exist: {base_path}")
            return result

        base_path = base_path.resolve()

        for skill_dir_pattern in self.skill_dirs:
            skill_dir = base_path / skill_dir_pattern

            if not skill_dir.exists():
                logger.debug(f"Skill directory does not exist: {skill_dir}")
                continue

            if not skill_dir.is_dir():
                result.errors.append(f"Not a directory: {skill_dir}")
                continue

            result.scanned_dirs.add(str(skill_dir))

            try:
                self._scan_directory(skill_dir, skill_dir_pattern, result)
                logger.debug(f"Scanned skill directory: {skill_dir}")
            except PermissionError as e:
                result.errors.append(f"Permission denied: {skill_dir} - {e}")
            except OSError as e:
                result.errors.append(f"Error scanning {skill_dir}: {e}")

        result.skills.sort(key=lambda s: str(s.file_path))
        return result

    def scan_directory(self, directory: Path, source_type: str = "custom") -> ScanResult:
        """
        Scan a specific directory for SKILL.md files.

        Args:
            directory: Directory to scan
            source_type: Type identifier for the source

        Returns:
            ScanResult with discovered skills
        """
        result = ScanResult()

        if not directory.exists() or not directory.is_dir():
            result.errors.append(f"Invalid directory: {directory}")
            return result

        result.scanned_dirs.add(str(directory))
        try:
            self._scan_directory(directory, source_type, result)
        except OSError as e:
            result.errors.append(f"Error scanning {directory}: {e}")

        result.skills.sort(key=lambda s: str(s.file_path))
        return result

    def _scan_directory(
        self,
        directory: Path,
        source_type: str,
        result: ScanResult,
        visited: set[Path] | None = None,
    ) -> None:
        """
        Internal method to scan a directory for skills.

        Looks for:
        - {directory}/SKILL.md (directory itself is a skill)
        - {directory}/{skill-name}/SKILL.md

        Each real directory is scanned once, so symlink cycles terminate and
        a skill reachable through several links is reported once.
        """
        if visited is None:
            visited = set()
        real_dir = directory.resolve()
        if real_dir in visited:
            return
        visited.add(real_dir)

        direct_skill = directory / self.SKILL_FILE_NAME
        if direct_skill.is_file():
            self._add_skill(direct_skill, source_type, result)

        try:
            for item in directory.iterdir():
                if not item.is_dir():
                    continue

                if item.name.startswith("."):
                    continue

                if item.is_symlink() and not self.follow_symlinks:
                    continue

                skill_file = item / self.SKILL_FILE_NAME
                if skill_file.is_file():
                    self._add_skill(skill_file, source_type, result)
                else:
                    # Nested skill groups, e.g. skills/web/debug-flask/SKILL.md
                    self._scan_directory(item, source_type, result, visited)

        except PermissionError as e:
            result.errors.append(f"Permission denied accessing {directory}: {e}")

    def _add_skill(self, skill_file: Path, source_type: str, result: ScanResult) -> None:
        """Append a skill unless the same file was already found."""
        skill_info = self._create_skill_info(skill_file, source_type)
        if skill_info is None:
            return
        if any(s.file_path == skill_info.file_path for s in result.skills):
            logger.debug(f"Skipping duplicate path to {skill_info.file_path}")
            return
        result.skills.append(skill_info)

    def _create_skill_info(self, file_path: Path, source_type: str) -> SkillFileInfo | None:
        """
        Create a SkillFileInfo from a file path.

        Args:
            file_path: Path to SKILL.md file
            source_type: Source type identifier

        Returns:
            SkillFileInfo or None if the path cannot be resolved
        """
        try:
            skill_dir = file_path.parent
            skill_id = skill_dir.name

            if self.follow_symlinks:
                file_path = file_path.resolve()
                skill_dir = skill_dir.resolve()

            return SkillFileInfo(
                file_path=file_path,
                skill_dir=skill_dir,
                skill_id=skill_id,
                source_type=source_type,
            )
        except OSError as e:
            logger.warning(f"Failed to create skill info for {file_path}: {e}")
            return None

    def find_skill(self, base_path: Path, skill_id: str) -> SkillFileInfo | None:
        """
        Find a specific skill by its directory name.

        When several directories hold the same skill id, the last match in
        path order is returned.

        Args:
            base_path: Corpus root to search from
            skill_id: Directory name of the skill to find

        Returns:
            SkillFileInfo if found, None otherwise
        """
        result = self.scan(base_path)

        found_skill = None
        for skill in result.skills:
            if skill.skill_id == skill_id:
                found_skill = skill

        return found_skill
