from cli._runner import run


def main() -> None:
    """Run unit tests."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "-m", "not integration"]))


def test_v() -> None:
    """Run unit tests with verbose output."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "-m", "not integration", "-v"]))


def test_integration() -> None:
    """Run integration tests against DATABASE_URL_APP."""
    import sys

    sys.exit(run(["uv", "run", "pytest", "-m", "integration"]))
