"""Unit tests for the skill validation CLI."""

import json

import pytest

from skilldocs.cli.skill_validate import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test that flags default to deferring to settings."""
        args = build_parser().parse_args([])

        assert args.path is None
        assert args.strict is None
        assert args.max_lines is None
        assert args.format == "text"
        assert not args.all


class TestMain:
    """Tests for main()."""

    def test_validate_single_skill(self, corpus_root, capsys):
        """Test validating one skill directory."""
        code = main([str(corpus_root / "skills" / "debug-example")])

        out = capsys.readouterr().out
        assert code == 0
        assert "Skill: debug-example" in out
        assert "Valid" in out

    def test_validate_single_skill_failure(self, tmp_path, write_skill, capsys):
        """Test that an invalid skill exits with 1."""
        skill_dir = write_skill(tmp_path, "debug-example", "---\nname: Bad Name\ndescription: x\n---\nBody")

        code = main([str(skill_dir)])

        assert code == 1
        assert "Result: Invalid" in capsys.readouterr().out

    def test_validate_all_from_corpus_root(self, corpus_root, capsys):
        """Test --all on a corpus root."""
        code = main(["--all", str(corpus_root)])

        out = capsys.readouterr().out
        assert code == 0
        assert "Found 2 skills to validate" in out
        assert "[PASS] debug-example" in out

    def test_validate_all_from_skills_directory(self, corpus_root, capsys):
        """Test --all on the skills directory itself."""
        code = main(["--all", str(corpus_root / "skills")])

        assert code == 0
        assert "Found 2 skills to validate" in capsys.readouterr().out

    def test_validate_all_quiet(self, corpus_root, capsys):
        """Test that --quiet prints only the summary."""
        main(["--all", "-q", str(corpus_root)])

        out = capsys.readouterr().out
        assert "Passed:  2" in out
        assert "[PASS]" not in out

    def test_validate_all_no_skills(self, tmp_path, capsys):
        """Test --all on an empty directory."""
        code = main(["--all", str(tmp_path)])

        assert code == 0
        assert "No skills found" in capsys.readouterr().out

    def test_validate_all_duplicate_names_fail(self, tmp_path, write_skill, capsys):
        """Test that duplicate names fail the corpus run."""
        write_skill(tmp_path / "skills", "debug-example")
        write_skill(tmp_path / "skills", "debug-example-2")

        code = main(["--all", str(tmp_path)])

        assert code == 1
        assert "also used by" in capsys.readouterr().out

    def test_json_output(self, corpus_root, capsys):
        """Test --format json for a corpus."""
        code = main(["--all", "--format", "json", str(corpus_root)])

        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["passed"] == 2
        assert data["is_valid"] is True

    def test_strict_flag(self, tmp_path, write_skill, valid_skill, capsys):
        """Test that --strict fails on warnings."""
        skill_dir = write_skill(tmp_path, "debug-example", valid_skill.replace("```python", "```"))

        assert main([str(skill_dir)]) == 0
        assert main(["--strict", str(skill_dir)]) == 1

    def test_strict_from_environment(self, tmp_path, write_skill, valid_skill, monkeypatch):
        """Test that SKILL_STRICT applies when --strict is not given."""
        skill_dir = write_skill(tmp_path, "debug-example", valid_skill.replace("```python", "```"))
        monkeypatch.setenv("SKILL_STRICT", "true")

        assert main([str(skill_dir)]) == 1

    def test_max_lines_flag(self, corpus_root, capsys):
        """Test that --max-lines produces a length warning."""
        main(["--max-lines", "3", str(corpus_root / "skills" / "debug-example")])

        assert "limit is 3" in capsys.readouterr().out

    def test_invalid_max_lines(self, corpus_root, capsys):
        """Test that a non-positive --max-lines is rejected."""
        assert main(["--max-lines", "0", str(corpus_root)]) == 1

    def test_list_catalog(self, corpus_root, capsys):
        """Test --list prints name and description."""
        code = main(["--list", str(corpus_root)])

        lines = capsys.readouterr().out.splitlines()
        assert code == 0
        assert lines == [
            "debug:example\tDebug the example framework.",
            "refactor:example\tDebug the example framework.",
        ]

    def test_list_catalog_json(self, corpus_root, capsys):
        """Test --list with JSON output."""
        main(["--list", "--format", "json", str(corpus_root / "skills")])

        data = json.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in data] == ["debug:example", "refactor:example"]

    def test_path_defaults_to_skills_root(self, corpus_root, monkeypatch, capsys):
        """Test that SKILLS_ROOT is used when no path is given."""
        monkeypatch.setenv("SKILLS_ROOT", str(corpus_root))

        code = main(["--all"])

        assert code == 0
        assert "Found 2 skills" in capsys.readouterr().out

    def test_missing_path(self, tmp_path, capsys):
        """Test that a missing path exits with 1."""
        assert main([str(tmp_path / "nope")]) == 1
        assert "Path not found" in capsys.readouterr().out

    def test_path_is_file(self, tmp_path, capsys):
        """Test that a file path exits with 1."""
        path = tmp_path / "SKILL.md"
        path.write_text("x")

        assert main([str(path)]) == 1
        assert "is not a directory" in capsys.readouterr().out

    def test_single_without_skill_md(self, tmp_path, capsys):
        """Test that a directory without SKILL.md exits with 1."""
        assert main([str(tmp_path)]) == 1
        assert "SKILL.md not found" in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("var", "value"),
        [("LOG_LEVEL", "LOUD"), ("SKILL_MAX_LINES", "abc"), ("SKILL_STRICT", "maybe")],
    )
    def test_invalid_environment(self, corpus_root, monkeypatch, capsys, var, value):
        """Test that a bad environment value exits with 1 and names the variable."""
        monkeypatch.setenv(var, value)

        assert main(["--all", str(corpus_root)]) == 1
        out = capsys.readouterr().out
        assert "invalid configuration" in out
        assert var in out
