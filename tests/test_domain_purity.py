# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Domain modules import only stdlib, numpy and the domain itself."""
import ast
from pathlib import Path

import pytest

DOMAIN_ROOT = Path(__file__).resolve().parent.parent / "src" / "orrery" / "domain"

_ALLOWED = {
    'math', 'dataclasses', 'typing', 'enum', 'datetime', 'abc',
    'collections', 'logging', '__future__', 'numpy',
}


def _domain_modules():
    return sorted(DOMAIN_ROOT.glob("*.py"))


def _runtime_imports(tree):
    """Import nodes outside `if TYPE_CHECKING:` blocks."""
    guarded = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.If) and getattr(node.test, 'id', None) == 'TYPE_CHECKING':
            for child in ast.walk(node):
                guarded.add(id(child))
    for node in ast.walk(tree):
        if isinstance(node, (ast.Import, ast.ImportFrom)) and id(node) not in guarded:
            yield node


def test_domain_modules_found():
    assert len(_domain_modules()) >= 10


@pytest.mark.parametrize("path", _domain_modules(), ids=lambda p: p.name)
def test_domain_imports(path):
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in _runtime_imports(tree):
        if isinstance(node, ast.Import):
            names = [alias.name for alias in node.names]
        else:
            assert node.level == 0, f"{path.name}: use absolute imports"
            names = [node.module]
        for name in names:
            root = name.split('.')[0]
            if root == 'orrery':
                assert name.startswith('orrery.domain'), f"{path.name}: imports '{name}'"
            else:
                assert root in _ALLOWED, f"{path.name}: disallowed import '{name}'"
