"""Pytest configuration and shared fixtures for testing."""

from pathlib import Path

import pytest

from skilldocs.configuration.config import get_settings

VALID_SKILL = """---
name: debug:example
description: Debug the example framework.
---

# Debugging Example

```python
print("hello")
```
"""


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Settings are cached per process; isolate each test from the environment."""
    for var in ("SKILLS_ROOT", "SKILL_DIRS", "SKILL_MAX_LINES", "SKILL_STRICT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def valid_skill() -> str:
    """Content of a SKILL.md that passes every rule."""
    return VALID_SKILL


@pytest.fixture
def write_skill():
    """Write a SKILL.md into ``root/<skill_id>`` and return the skill directory."""

    def _write(root: Path, skill_id: str, content: str = VALID_SKILL) -> Path:
        skill_dir = root / skill_id
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
        return skill_dir

    return _write


@pytest.fixture
def corpus_root(tmp_path, write_skill):
    """A small corpus with two valid skills under skills/."""
    skills = tmp_path / "skills"
    write_skill(skills, "debug-example")
    write_skill(
        skills,
        "refactor-example",
        VALID_SKILL.replace("debug:example", "refactor:example"),
    )
    return tmp_path
