import pytest

from autosave.async_bridge import AsyncBridge, reset_async_bridge
from autosave.core.config_model import AutosaveConfig


@pytest.fixture
def bridge():
    b = AsyncBridge(name="autosave-test")
    b.start()
    yield b
    b.stop()


@pytest.fixture(autouse=True)
def _reset_shared_bridge():
    yield
    reset_async_bridge()


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        values = dict(
            path=tmp_path / "settings.json",
            indent=2,
            ordered_writes=False,
            debug=False,
        )
        values.update(overrides)
        return AutosaveConfig(**values)

    return _make
