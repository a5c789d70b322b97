import ast
from pathlib import Path
from typing import Iterator, List, Tuple

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

# Providers build against ta_sdk alone; the coordinator never reaches into the CLI.
LAYERS = [
    ("ta_sdk", ("cli", "pipeline")),
    ("pipeline", ("cli",)),
]


def absolute_imports(source: str, filename: str) -> Iterator[str]:
    """Dotted names of every absolute import in ``source``."""
    for node in ast.walk(ast.parse(source, filename=filename)):
        if isinstance(node, ast.Import):
            yield from (alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.module


def layer_violations(package: str, forbidden: Tuple[str, ...]) -> List[str]:
    found: List[str] = []
    for py_file in sorted((REPO_ROOT / package).rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        rel = py_file.relative_to(REPO_ROOT).as_posix()
        source = py_file.read_text(encoding="utf-8")
        found.extend(
            f"{rel}: {name}"
            for name in absolute_imports(source, rel)
            if name.partition(".")[0] in forbidden
        )
    return found


@pytest.mark.parametrize("package,forbidden", LAYERS)
def test_package_does_not_import_higher_layers(package, forbidden):
    assert (REPO_ROOT / package).is_dir()
    assert layer_violations(package, forbidden) == []


def test_absolute_imports_skip_relative_ones():
    src = "import cli.help\nfrom pipeline import layout\nfrom .domain import Report\n"
    assert list(absolute_imports(src, "x.py")) == ["cli.help", "pipeline"]
