"""
Test Configuration File

Unified setup for Python path, avoiding sys.path.insert in each test file.
Provides fake providers and a ready-made playback model.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from core.provider import ProviderBase  # noqa: E402


class FakeProvider(ProviderBase):
    """Provider that records the calls the model makes on it"""

    name = "fake"
    types = ("mp4", "webm", "mp3")

    def __init__(self, player_id=""):
        super().__init__(player_id)
        self.player_id = player_id
        self.calls = []
        self.inited = []
        self.destroyed = False

    @classmethod
    def supports(cls, source):
        return source.type in cls.types

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def init(self, item):
        self.inited.append(item)
        self.calls.append(("init", item.title))

    def set_volume(self, volume):
        super().set_volume(volume)
        self.calls.append(("volume", volume))

    def set_mute(self, mute):
        super().set_mute(mute)
        self.calls.append(("mute", mute))

    def remove(self):
        self.calls.append(("remove",))
        super().remove()

    def destroy(self):
        self.destroyed = True
        super().destroy()


class FakeStreamProvider(FakeProvider):
    """Second provider family, for swap tests"""

    name = "stream"
    types = ("m3u8", "hls")


@pytest.fixture
def registry():
    from core.provider_registry import ProviderRegistry

    return ProviderRegistry(providers=[FakeProvider, FakeStreamProvider])


@pytest.fixture
def store():
    from services.settings_store import MemorySettingsStore

    return MemorySettingsStore()


@pytest.fixture
def model(registry, store):
    from models.player_config import PlayerConfig
    from services.playback_model import PlaybackModel

    model = PlaybackModel(PlayerConfig(id="test-player"), registry, store)
    yield model
    model.destroy()


@pytest.fixture
def recorder(model):
    """Every event the model publishes, as (event_type, data) pairs"""
    events = []
    model.add_global_listener(lambda event_type, data: events.append((event_type, data)))
    return events


@pytest.fixture
def make_items():
    """Build playlist dicts, one single-source item per file"""
    def _make(*files):
        return [{"title": f"Item {i}", "sources": [{"file": f}]} for i, f in enumerate(files)]
    return _make
