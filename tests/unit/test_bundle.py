"""Unit tests for bundle discovery, instruction matching and installation."""

from pathlib import Path
from typing import Callable

import pytest
from _pytest.logging import LogCaptureFixture

from github_bundle_validator.bundle.discovery import discover_bundle
from github_bundle_validator.bundle.install import install_bundle
from github_bundle_validator.bundle.matching import applies_to, select_instructions
from github_bundle_validator.schemas.markdown_artifacts import InstructionFile, InstructionFrontMatter
from github_bundle_validator.validation.models import ArtifactKind


class TestDiscoverBundle:
    """Tests for discover_bundle."""

    def test_fixture_bundle(self, fixture_bundle_root: Path) -> None:
        bundle = discover_bundle(fixture_bundle_root)
        assert [path.name for path in bundle.instructions] == [
            "docs.instructions.md",
            "general.instructions.md",
            "python.instructions.md",
        ]
        assert [path.name for path in bundle.chat_modes] == ["reviewer.chatmode.md"]
        assert [path.name for path in bundle.prompts] == ["create-issue.prompt.md"]
        assert [path.name for path in bundle.issue_templates] == ["feature_request.yml"]
        assert bundle.template_config == fixture_bundle_root / "ISSUE_TEMPLATE" / "config.yml"
        assert bundle.unexpected == []

    def test_artifacts_are_grouped_by_kind(self, fixture_bundle_root: Path) -> None:
        kinds = [kind for kind, _ in discover_bundle(fixture_bundle_root).artifacts()]
        assert kinds == [
            ArtifactKind.INSTRUCTION,
            ArtifactKind.INSTRUCTION,
            ArtifactKind.INSTRUCTION,
            ArtifactKind.CHAT_MODE,
            ArtifactKind.PROMPT,
            ArtifactKind.ISSUE_TEMPLATE,
            ArtifactKind.TEMPLATE_CONFIG,
        ]

    def test_missing_directories_are_allowed(self, tmp_path: Path) -> None:
        bundle = discover_bundle(tmp_path)
        assert bundle.artifacts() == []

    def test_yaml_extension_and_unexpected_names(self, tmp_path: Path, write_file: Callable[[str, str], Path]) -> None:
        write_file("ISSUE_TEMPLATE/bug.yaml", "name: Bug\n")
        write_file("ISSUE_TEMPLATE/notes.txt", "ignored\n")
        write_file("prompts/draft.md", "---\ndescription: x\n---\n")
        bundle = discover_bundle(tmp_path)
        assert bundle.issue_templates == [tmp_path / "ISSUE_TEMPLATE" / "bug.yaml"]
        assert bundle.prompts == []
        assert bundle.unexpected == [tmp_path / "prompts" / "draft.md"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            discover_bundle(tmp_path / "missing")

    def test_file_root_raises(self, write_file: Callable[[str, str], Path]) -> None:
        with pytest.raises(ValueError):
            discover_bundle(write_file("file.txt", "x"))


class TestMatching:
    """Tests for applies_to and select_instructions."""

    def test_applies_to(self) -> None:
        instruction = InstructionFile(
            path=Path("web.instructions.md"),
            front_matter=InstructionFrontMatter.model_validate({"applyTo": "**/*.ts, **/*.tsx"}),
            body="",
        )
        assert applies_to(instruction, "src/app/page.tsx") is True
        assert applies_to(instruction, Path("src") / "index.ts") is True
        assert applies_to(instruction, "src/styles.css") is False

    def test_instruction_without_apply_to_never_matches(self) -> None:
        instruction = InstructionFile(path=Path("general.instructions.md"), front_matter=InstructionFrontMatter(), body="")
        assert applies_to(instruction, "anything.py") is False

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("src/pkg/module.py", ["python.instructions.md"]),
            ("docs/guide/intro.md", ["docs.instructions.md"]),
            ("README.md", ["docs.instructions.md"]),
            ("package.json", []),
        ],
    )
    def test_select_instructions(self, fixture_bundle_root: Path, path: str, expected: list[str]) -> None:
        bundle = discover_bundle(fixture_bundle_root)
        assert [instruction.path.name for instruction in select_instructions(bundle, path)] == expected

    def test_invalid_instruction_files_are_skipped(
        self, tmp_path: Path, write_file: Callable[[str, str], Path], caplog: LogCaptureFixture
    ) -> None:
        write_file("instructions/good.instructions.md", "---\napplyTo: '**/*.py'\n---\nGood\n")
        write_file("instructions/bad.instructions.md", "---\napplyTo: '**/*.{py'\n---\nBad\n")
        selected = select_instructions(discover_bundle(tmp_path), "main.py")
        assert [instruction.path.name for instruction in selected] == ["good.instructions.md"]
        assert "Skipping invalid instruction file" in caplog.text


class TestInstallBundle:
    """Tests for install_bundle."""

    def test_copies_every_artifact(self, fixture_bundle_root: Path, tmp_path: Path) -> None:
        destination = tmp_path / "project" / ".github"
        result = install_bundle(fixture_bundle_root, destination)
        assert len(result.written) == 7
        assert result.skipped == []
        copied = destination / "ISSUE_TEMPLATE" / "feature_request.yml"
        assert copied.read_text(encoding="utf-8") == (fixture_bundle_root / "ISSUE_TEMPLATE" / "feature_request.yml").read_text(encoding="utf-8")
        assert (destination / "instructions" / "python.instructions.md").is_file()

    def test_existing_files_are_skipped_unless_overwrite(
        self, fixture_bundle_root: Path, tmp_path: Path, write_file: Callable[[str, str], Path]
    ) -> None:
        existing = write_file(".github/prompts/create-issue.prompt.md", "local edits\n")
        destination = tmp_path / ".github"

        result = install_bundle(fixture_bundle_root, destination)
        assert result.skipped == [existing]
        assert existing.read_text(encoding="utf-8") == "local edits\n"

        result = install_bundle(fixture_bundle_root, destination, overwrite=True)
        assert existing in result.written
        assert existing.read_text(encoding="utf-8").startswith("---\ndescription: Draft an issue")
