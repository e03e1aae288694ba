"""Architecture enforcement tests for the layered package layout.

This module provides lightweight, repository-local invariants to ensure that
the operation clients stay thin and that network I/O stays in one place. It
focuses on import boundaries only and is designed to fail fast if a forbidden
dependency is introduced.

Rules validated here:
1) Only the HTTP helpers (``base/http``) and the request pipeline
   (``base/pipeline_parts``) may import ``httpx``.
2) The operation clients (``chat``, ``images``, ``speech``) go through the
   pipeline and never build HTTP clients themselves.
3) The foundation layer (``base``) and ``config`` never import the operation
   clients.

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_ROOT = REPO_ROOT / "compat_providers"

HTTP_ALLOWED = (
    PACKAGE_ROOT / "base" / "http",
    PACKAGE_ROOT / "base" / "pipeline_parts",
    PACKAGE_ROOT / "tests",
)
FACADE_DIRS = ("chat", "images", "speech")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files under the provided root, skipping
        ``__pycache__``.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    """Read a file as UTF-8 text, replacing undecodable bytes."""

    return path.read_text(encoding="utf-8", errors="replace")


def _is_under(path: Path, roots: Iterable[Path]) -> bool:
    return any(root in path.parents for root in roots)


@pytest.fixture(scope="module")
def package_root() -> Path:
    if not PACKAGE_ROOT.is_dir():
        pytest.skip("compat_providers package not found; skipping boundary checks")
    return PACKAGE_ROOT


def test_httpx_is_confined_to_http_layer(package_root: Path) -> None:
    offenders: List[str] = []
    for py in _iter_python_files(package_root):
        if _is_under(py, HTTP_ALLOWED):
            continue
        src = _read_text(py)
        if "import httpx" in src or "from httpx" in src:
            offenders.append(str(py.relative_to(REPO_ROOT)))

    if offenders:
        pytest.fail("httpx may only be used by base/http and the request pipeline:\n" + "\n".join(offenders))


def test_clients_do_not_build_http_clients(package_root: Path) -> None:
    forbidden = ("create_async_client", "AsyncClient", "base.http")
    offenders: List[str] = []
    for name in FACADE_DIRS:
        for py in _iter_python_files(package_root / name):
            src = _read_text(py)
            offenders.extend(f"{py.relative_to(REPO_ROOT)}: contains '{s}'" for s in forbidden if s in src)

    if offenders:
        pytest.fail("Operation clients must go through RequestPipeline:\n" + "\n".join(offenders))


def test_inner_layers_do_not_import_clients(package_root: Path) -> None:
    forbidden = [f"from ..{name}" for name in FACADE_DIRS] + [f"from ...{name}" for name in FACADE_DIRS]
    forbidden += [f"compat_providers.{name}" for name in FACADE_DIRS]
    offenders: List[str] = []
    for layer in ("base", "config", "connections", "persistence"):
        for py in _iter_python_files(package_root / layer):
            src = _read_text(py)
            offenders.extend(f"{py.relative_to(REPO_ROOT)}: contains '{s}'" for s in forbidden if s in src)

    if offenders:
        pytest.fail("Inner layers must not depend on operation clients:\n" + "\n".join(offenders))
