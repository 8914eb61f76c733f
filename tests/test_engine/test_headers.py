# tests/test_engine/test_headers.py
from pathlib import Path

import pytest

import zxopt

PACKAGE = Path(zxopt.__file__).parent


@pytest.mark.parametrize("path", sorted(PACKAGE.rglob("*.py")), ids=lambda p: str(p.relative_to(PACKAGE)))
def test_module_has_license_header(path):
    head = path.read_text(encoding="utf-8").splitlines()[:15]
    assert head[0].startswith("# zxopt")
    assert '# Licensed under the Apache License, Version 2.0 (the "License");' in head
