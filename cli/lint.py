from cli._runner import run


def main() -> None:
    """Run ruff lint checks over the package, scripts and tests."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "check", "fraud_review", "cli", "scripts", "tests"]))


def format() -> None:
    """Format the code base with ruff."""
    import sys

    sys.exit(run(["uv", "run", "ruff", "format", "fraud_review", "cli", "scripts", "tests"]))
