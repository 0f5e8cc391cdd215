"""Defines the Command Line Interface (CLI) using Typer."""

from pathlib import Path

import typer
from dotenv import load_dotenv
from ruamel.yaml.error import YAMLError
from typer import Argument, Option
from typing_extensions import Annotated

from github_bundle_validator.bundle.discovery import discover_bundle
from github_bundle_validator.bundle.install import install_bundle
from github_bundle_validator.bundle.matching import select_instructions
from github_bundle_validator.configuration.exceptions import (
    BundleRootConfigurationError,
    InstallConfigurationError,
)
from github_bundle_validator.configuration.logging_config import configure_logging
from github_bundle_validator.configuration.reconcile import (
    reconcile_install_configuration,
    reconcile_validate_configuration,
)
from github_bundle_validator.forms.rendering import build_issue
from github_bundle_validator.processing.bundle_processor import BundleProcessor
from github_bundle_validator.utils.constants import TEMPLATE_CONFIG_FILENAMES
from github_bundle_validator.utils.yaml import dump_yaml_to_file, dump_yaml_to_string, load_yaml_file
from github_bundle_validator.validation.exceptions import IssueTemplateValidationError, SubmissionError
from github_bundle_validator.validation.issue_templates import (
    load_issue_template,
    validate_issue_template_file,
    validate_template_config_file,
)

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Validate and work with a bundle of assistant instructions and issue forms.")

DebugOption = Annotated[bool | None, Option("--debug/--no-debug", envvar="DEBUG", help="Enable debug logging.", show_default=False)]


@typer_app.command(name="validate")
def validate_cli(
    root: Annotated[Path | None, Argument(envvar="BUNDLE_ROOT", help="Configuration root holding the bundle (default: .github).", show_default=False)] = None,
    strict: Annotated[bool | None, Option("--strict/--no-strict", envvar="STRICT", help="Treat warnings as errors.", show_default=False)] = None,
    debug: DebugOption = None,
) -> None:
    """Validate every instruction, chat-mode, prompt and issue-template file of a bundle."""
    try:
        config = reconcile_validate_configuration(cli_bundle_root=root, cli_strict=strict, cli_debug=debug)
    except BundleRootConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(config.debug)

    typer.echo(f"Validating bundle in {config.bundle_root.absolute()}")
    result = BundleProcessor(strict=config.strict, raise_on_error=False).validate(config.bundle_root)
    for line in result.format_lines():
        typer.echo(line)

    typer.echo(f"{len(result.reports)} file(s) checked: {result.error_count} error(s), {result.warning_count} warning(s)")
    if not result.ok:
        raise typer.Exit(1)


@typer_app.command(name="validate-template")
def validate_template_cli(
    path: Annotated[Path, Argument(help="Path to an issue template YAML file or ISSUE_TEMPLATE/config.yml.")],
    debug: DebugOption = None,
) -> None:
    """Validate a single issue template file."""
    configure_logging(bool(debug))
    if not path.is_file():
        typer.echo(f"Issue template not found: {path.absolute()}", err=True)
        raise typer.Exit(1)

    if path.name in TEMPLATE_CONFIG_FILENAMES:
        report = validate_template_config_file(path)
    else:
        report = validate_issue_template_file(path)
    for issue in report.issues:
        typer.echo(issue.format(path))

    if not report.ok:
        typer.echo(f"{path}: {len(report.errors)} error(s), {len(report.warnings)} warning(s)", err=True)
        raise typer.Exit(1)
    typer.echo(f"{path}: valid ({len(report.warnings)} warning(s))")


@typer_app.command(name="match")
def match_cli(
    file_path: Annotated[str, Argument(help="Workspace-relative path of the edited file, e.g. src/app/main.py.")],
    root: Annotated[Path | None, Option("--root", envvar="BUNDLE_ROOT", help="Configuration root holding the bundle.", show_default=False)] = None,
    debug: DebugOption = None,
) -> None:
    """List the instruction files whose applyTo globs match a file path."""
    try:
        config = reconcile_validate_configuration(cli_bundle_root=root, cli_strict=None, cli_debug=debug)
    except BundleRootConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(config.debug)

    bundle = discover_bundle(config.bundle_root)
    selected = select_instructions(bundle, file_path)
    if not selected:
        typer.echo(f"No instruction files apply to {file_path}")
        return
    for instruction in selected:
        typer.echo(f"{bundle.relative(instruction.path)}  ({instruction.front_matter.apply_to})")


@typer_app.command(name="render-issue")
def render_issue_cli(
    template_path: Annotated[Path, Argument(help="Path to the issue template YAML file.")],
    answers_path: Annotated[Path, Argument(help="Path to a YAML mapping of field id to answer.")],
    title: Annotated[str | None, Option("--title", help="Text appended to the template's default title.")] = None,
    output_file: Annotated[Path | None, Option("--output", help="Write the rendered issue to this YAML file instead of stdout.")] = None,
    debug: DebugOption = None,
) -> None:
    """Render the issue that submitting an issue form with the given answers would create."""
    configure_logging(bool(debug))
    if not template_path.is_file():
        typer.echo(f"Issue template not found: {template_path.absolute()}", err=True)
        raise typer.Exit(1)
    try:
        template = load_issue_template(template_path)
    except IssueTemplateValidationError as exc:
        for issue in exc.report.issues:
            typer.echo(issue.format(template_path), err=True)
        raise typer.Exit(1) from exc

    if not answers_path.is_file():
        typer.echo(f"Answers file not found: {answers_path.absolute()}", err=True)
        raise typer.Exit(1)
    try:
        answers = load_yaml_file(answers_path) or {}
    except (YAMLError, UnicodeDecodeError) as exc:
        typer.echo(f"Answers file is not valid YAML: {exc}", err=True)
        raise typer.Exit(1) from exc
    if not isinstance(answers, dict):
        typer.echo("Answers file must hold a mapping of field id to answer", err=True)
        raise typer.Exit(1)

    try:
        issue = build_issue(template, answers, title=title)
    except SubmissionError as exc:
        for problem in exc.issues:
            typer.echo(problem.format(answers_path), err=True)
        raise typer.Exit(1) from exc

    issue_data = issue.model_dump(mode="python", exclude_none=True)
    if output_file is not None:
        dump_yaml_to_file(issue_data, output_file)
        typer.echo(f"Rendered issue written to {output_file}")
        return
    typer.echo(dump_yaml_to_string(issue_data), nl=False)


@typer_app.command(name="install")
def install_cli(
    source_root: Annotated[Path, Argument(help="Configuration root holding the bundle to copy.")],
    destination_root: Annotated[Path, Argument(help="Configuration root of the consuming project, e.g. ../my-project/.github.")],
    overwrite: Annotated[bool, Option("--overwrite", help="Replace files that already exist at the destination.")] = False,
    debug: DebugOption = None,
) -> None:
    """Copy a bundle into a consuming project's configuration root."""
    try:
        config = reconcile_install_configuration(
            cli_source_root=source_root,
            cli_destination_root=destination_root,
            cli_overwrite=overwrite,
            cli_debug=debug,
        )
    except (BundleRootConfigurationError, InstallConfigurationError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc
    configure_logging(config.debug)

    result = install_bundle(config.source_root, config.destination_root, overwrite=config.overwrite)
    for path in result.written:
        typer.echo(f"  wrote   {path}")
    for path in result.skipped:
        typer.echo(f"  skipped {path} (already exists)")
    typer.echo(f"Installed {len(result.written)} file(s), skipped {len(result.skipped)}")


if __name__ == "__main__":
    typer_app()
