"""Fixtures for the roost examples.

Each example directory holds an ``app.py`` exposing ``build_registry``.
The fixtures here run that file fresh for every test and wire its
registry to an in-memory backend, so example tests never touch the
network and never share state.
"""

import runpy
import types
from pathlib import Path

import pytest

from roost import Dispatcher, Registry
from roost.testing import MemoryBackend


@pytest.fixture
def app(request: pytest.FixtureRequest) -> types.SimpleNamespace:
    """Namespace of the ``app.py`` next to the requesting test file."""
    app_path = Path(request.path).parent / "app.py"
    return types.SimpleNamespace(**runpy.run_path(str(app_path)))


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def registry(app: types.SimpleNamespace, backend: MemoryBackend) -> Registry:
    """The example's registry, talking to *backend*."""
    return app.build_registry(backend.factory())


@pytest.fixture
def api(registry: Registry) -> Dispatcher:
    return Dispatcher(registry)
