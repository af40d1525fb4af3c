"""
Fenced code block scanner for skill documents.

Follows the CommonMark fence rules closely enough to tell whether every
code block in a SKILL.md body is closed:

- An opening fence is up to 3 spaces of indentation followed by at least
  three backticks or three tildes, then an optional info string.
- Backtick fences cannot carry backticks in their info string.
- A closing fence uses the same character, is at least as long as the
  opening run and carries nothing but trailing whitespace.
"""

import re
from dataclasses import dataclass, field

FENCE_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})(.*)$")


@dataclass(frozen=True)
class CodeFence:
    """
    A fenced code block.

    Attributes:
        start_line: Line number of the opening fence
        end_line: Line number of the closing fence (None while unclosed)
        marker: The opening run, e.g. "```" or "~~~~"
        info: Info string following the opening run
    """

    start_line: int
    marker: str
    info: str = ""
    end_line: int | None = None

    @property
    def language(self) -> str | None:
        """First word of the info string, if any."""
        parts = self.info.split()
        return parts[0] if parts else None

    def closes_with(self, line: str) -> bool:
        """Check whether ``line`` is a valid closing fence for this block."""
        match = FENCE_PATTERN.match(line)
        if not match:
            return False
        run, rest = match.group(2), match.group(3)
        return run[0] == self.marker[0] and len(run) >= len(self.marker) and not rest.strip()


@dataclass
class FenceScan:
    """Result of scanning a document for fenced code blocks."""

    blocks: list[CodeFence] = field(default_factory=list)
    unclosed: CodeFence | None = None

    @property
    def is_balanced(self) -> bool:
        return self.unclosed is None

    @property
    def unlabelled(self) -> list[CodeFence]:
        """Closed blocks that declare no language."""
        return [block for block in self.blocks if block.language is None]


def _open_fence(line: str, line_no: int) -> CodeFence | None:
    match = FENCE_PATTERN.match(line)
    if not match:
        return None
    run, info = match.group(2), match.group(3).strip()
    if run[0] == "`" and "`" in info:
        # Inline code such as ```foo``` is not a fence
        return None
    return CodeFence(start_line=line_no, marker=run, info=info)


def scan_code_fences(text: str, first_line: int = 1) -> FenceScan:
    """
    Scan Markdown text for fenced code blocks.

    Args:
        text: Markdown text (typically a SKILL.md body)
        first_line: Line number of the first line of ``text`` in its file

    Returns:
        FenceScan with closed blocks and the block left open, if any
    """
    result = FenceScan()
    current: CodeFence | None = None

    for offset, line in enumerate(text.splitlines()):
        line_no = first_line + offset
        if current is None:
            current = _open_fence(line, line_no)
        elif current.closes_with(line):
            result.blocks.append(
                CodeFence(
                    start_line=current.start_line,
                    marker=current.marker,
                    info=current.info,
                    end_line=line_no,
                )
            )
            current = None

    result.unclosed = current
    return result
