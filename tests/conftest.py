"""
Pytest configuration and shared fixtures for sass-dependents tests.
"""

import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest


def write_files(root: Path, files: Dict[str, str]) -> Path:
    """Write a mapping of relative path -> content under ``root``.

    Args:
        root: Directory to write into
        files: Relative file paths and their contents

    Returns:
        The root directory
    """
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that is cleaned up after test.

    The path is resolved so it compares equal to normalized graph keys.

    Yields:
        Path to temporary directory
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def stylesheet_tree(temp_dir: Path) -> Path:
    """Create a small stylesheet tree mixing SCSS and Sass syntax.

    Structure:
        main.scss                -> _variables.scss, components/_button.scss
        print.scss               -> _variables.scss
        theme.sass               -> _variables.scss
        components/_button.scss  -> _mixins.scss
        _mixins.scss             (no imports)
        _variables.scss          (no imports)

    Args:
        temp_dir: Temporary directory fixture

    Returns:
        Root of the tree
    """
    return write_files(temp_dir, {
        "main.scss": (
            '@import "variables";\n'
            '@import "components/button";\n'
            "\n"
            "body { color: $primary; }\n"
        ),
        "print.scss": '@import "variables";\n',
        "theme.sass": "@import variables\n\nbody\n  color: $primary\n",
        "components/_button.scss": '@import "../mixins";\n\n.btn { color: $primary; }\n',
        "_mixins.scss": "@mixin flat { border: 0; }\n",
        "_variables.scss": "$primary: blue;\n",
    })


@pytest.fixture
def chain_tree(temp_dir: Path) -> Path:
    """Create base.scss -> _partial.scss -> _leaf.scss.

    Args:
        temp_dir: Temporary directory fixture

    Returns:
        Root of the tree
    """
    return write_files(temp_dir, {
        "base.scss": '@import "partial";\n',
        "_partial.scss": '@import "leaf";\n',
        "_leaf.scss": "$size: 1px;\n",
    })
