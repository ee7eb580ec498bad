#!/usr/bin/env python3
"""Discord MCP Code Quality Manager.

Formatting, linting and type checking for the Discord MCP project through
uv and ruff. Tests are run with run_tests.py at the repository root.
"""

import argparse
import subprocess
import sys
from pathlib import Path


class CodeQualityManager:
    """Runs ruff and mypy over the project's source, test and script directories."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.root_dir = Path(__file__).parent.parent
        self.target_dirs = ["discord_mcp/", "tests/", "scripts/"]

    def _run_command(self, cmd: list[str], description: str) -> bool:
        if self.verbose:
            print(f"🔧 {description}")
            print(f"   Command: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=self.root_dir, capture_output=not self.verbose, text=True)
        except FileNotFoundError:
            print(f"❌ {description} - uv not found. Install it from https://docs.astral.sh/uv/")
            return False

        if result.returncode == 0:
            if self.verbose:
                print(f"✅ {description} - SUCCESS")
            return True

        print(f"❌ {description} - FAILED")
        if not self.verbose:
            print(result.stdout or "", result.stderr or "", sep="")
        return False

    def format_code(self) -> bool:
        print("🎨 Formatting code...")
        formatted = self._run_command(["uv", "run", "ruff", "format", *self.target_dirs], "Ruff code formatting")
        fixed = self.fix_code()
        return formatted and fixed

    def fix_code(self) -> bool:
        return self._run_command(["uv", "run", "ruff", "check", "--fix", *self.target_dirs], "Ruff automatic fixes")

    def lint_code(self) -> bool:
        print("🔍 Running ruff linting...")
        return self._run_command(["uv", "run", "ruff", "check", *self.target_dirs], "Ruff linting")

    def type_check(self) -> bool:
        print("🔎 Running mypy type checking...")
        return self._run_command(["uv", "run", "mypy", "discord_mcp/"], "MyPy type checking")

    def check_all(self) -> bool:
        """Run linting and type checking, reporting both even when the first fails."""
        results = [self.lint_code(), self.type_check()]
        success = all(results)
        print("🎉 All code quality checks passed!" if success else "⚠️  Some code quality checks failed")
        return success

    def full_quality_pass(self) -> bool:
        for description, step in (("Code formatting", self.format_code), ("Code quality checks", self.check_all)):
            print(f"\n{'=' * 50}\nSTEP: {description}\n{'=' * 50}")
            if not step():
                print(f"❌ Failed at step: {description}")
                return False
        return True


def main():
    parser = argparse.ArgumentParser(description="Discord MCP Code Quality Manager")
    parser.add_argument("command", choices=["check", "fix", "format", "lint", "typecheck", "full"])
    parser.add_argument("--verbose", "-v", action="store_true", help="Show detailed output")
    args = parser.parse_args()

    manager = CodeQualityManager(verbose=args.verbose)
    commands = {
        "check": manager.check_all,
        "fix": manager.fix_code,
        "format": manager.format_code,
        "lint": manager.lint_code,
        "typecheck": manager.type_check,
        "full": manager.full_quality_pass,
    }
    sys.exit(0 if commands[args.command]() else 1)


if __name__ == "__main__":
    main()
