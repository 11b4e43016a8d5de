"""Project automation sessions for the weld quoter src layout."""
from __future__ import annotations

import pathlib

import nox

PYTHON_VERSION = "3.11"
SRC_DIR = "src"
TESTS_DIR = "tests"
PACKAGE_IMPORT = "weld_quoter"

nox.options.sessions = ("lint", "typecheck", "tests")


def install_project(session: nox.Session, *extras: str) -> None:
    """Install the project in editable mode, optionally with extras."""
    target = f".[{','.join(extras)}]" if extras else "."
    session.install("-e", target)


@nox.session(python=PYTHON_VERSION)
def lint(session: nox.Session) -> None:
    """Run Ruff against the package and its tests."""
    session.install("ruff")
    session.run("ruff", "check", SRC_DIR, TESTS_DIR, "noxfile.py")


@nox.session(python=PYTHON_VERSION)
def typecheck(session: nox.Session) -> None:
    """Run Pyright and Mypy over the package."""
    install_project(session)
    session.install("pyright", "mypy", "pandas-stubs")
    session.run("pyright", SRC_DIR)
    session.run("mypy", SRC_DIR)


@nox.session(python=PYTHON_VERSION)
def tests(session: nox.Session) -> None:
    """Execute the test suite under coverage."""
    install_project(session, "test", "yaml")
    coverage_source = pathlib.Path(SRC_DIR, PACKAGE_IMPORT)
    session.run(
        "coverage",
        "run",
        "--source",
        str(coverage_source),
        "-m",
        "pytest",
        TESTS_DIR,
    )
    session.run("coverage", "report", "--show-missing")
