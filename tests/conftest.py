"""Test configuration and fixtures for dirtree."""

import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


def build_tree(base: Path, layout: dict) -> Path:
    """Create files and directories under base from a nested dict.

    Keys are names; a dict value is a directory, a str value is file content.
    """
    for name, content in layout.items():
        path = base / name
        if isinstance(content, dict):
            path.mkdir()
            build_tree(path, content)
        else:
            path.write_text(content)
    return base


@pytest.fixture
def project_dir(tmp_path):
    """The small Rust project used throughout the docs.

    project/
    ├── src/
    │   ├── lib.rs
    │   └── main.rs
    └── Cargo.toml
    """
    root = tmp_path / "project"
    root.mkdir()
    return build_tree(
        root,
        {
            "src": {"lib.rs": "pub fn lib() {}\n", "main.rs": "fn main() {}\n"},
            "Cargo.toml": '[package]\nname = "project"\n',
        },
    )


@pytest.fixture
def mixed_dir(tmp_path):
    """A tree with hidden entries, nested directories and several file types."""
    root = tmp_path / "mixed"
    root.mkdir()
    return build_tree(
        root,
        {
            ".git": {"HEAD": "ref: refs/heads/main\n"},
            ".env": "SECRET=1\n",
            "docs": {"guide.md": "# Guide\n", "api.md": "# API\n"},
            "src": {
                "app.py": "print('app')\n",
                "util.py": "print('util')\n",
                "cache": {"app.pyc": "compiled"},
            },
            "tests": {"test_app.py": "def test(): pass\n"},
            "README.md": "# Mixed\n",
            "setup.cfg": "[metadata]\n",
        },
    )


@pytest.fixture
def set_mtime():
    """Return a helper that sets a path's modification time without following links."""

    def _set(path: Path, mtime: float) -> None:
        os.utime(path, (mtime, mtime), follow_symlinks=False)

    return _set


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that builds a directory tree from a nested dict and returns its root."""

    def _make(layout: dict, name: str = "root") -> Path:
        root = tmp_path / name
        root.mkdir()
        return build_tree(root, layout)

    return _make
