"""Shared fixtures: a web/ tree in tmp_path and a fake compiler."""

import pytest

from less_assets.models import CompileConfig

from helpers import FakeCompiler


@pytest.fixture
def web(tmp_path):
    """A web/ directory with less/ and css/ roots."""
    root = tmp_path / "web"
    (root / "less").mkdir(parents=True)
    (root / "css").mkdir(parents=True)
    return root


@pytest.fixture
def config(web):
    return CompileConfig(
        source_root=web / "less",
        artifact_root=web / "css",
        base_dir=web,
    )


@pytest.fixture
def fake_compiler():
    return FakeCompiler()
