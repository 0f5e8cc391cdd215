"""Utility functions for integration tests."""

import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent
FIXTURE_BUNDLE_ROOT = PROJECT_ROOT / "tests" / "unit" / "fixtures" / "bundle"


def get_cli_with_starting_args() -> list[str]:
    """Get the command that runs the CLI module with the current interpreter."""
    return [sys.executable, "-m", "github_bundle_validator.configuration.cli"]


def run_cli(args: list[str], cwd: Path = PROJECT_ROOT) -> subprocess.CompletedProcess[str]:
    """Helper to run the CLI as a subprocess and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.
        cwd: Working directory for the CLI process.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = get_cli_with_starting_args() + args
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(
        complete_command,
        capture_output=True,
        text=True,
        cwd=cwd,
    )
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result
