import logging
import pytest
import yaml
from pathlib import Path
from unittest.mock import MagicMock
from audioprobe.config.models import AppConfig
from audioprobe.infrastructure.event_bus import EventBus
from audioprobe.pipeline.resolver import MetadataResolver

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config():
    """Returns a sample AppConfig object for testing."""
    return AppConfig(
        general={
            "max_concurrent": 4,
            "extensions": ["mp3", "wav", "flac"],
            "recursive": True,
            "use_ffprobe": False,
            "debug": False,
        },
        output={
            "json_output": True,
            "indent": 2,
        }
    )

@pytest.fixture
def config_yaml_path(tmp_path):
    """Creates a temporary YAML config file."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    conf_file = conf_dir / "audioprobe.yaml"

    content = {
        'general': {
            'max_concurrent': 8,
            'extensions': ['.MP3', 'wav'],
            'recursive': True,
            'use_ffprobe': False,
        },
        'output': {
            'json_output': True,
            'indent': 4,
        }
    }

    with open(conf_file, 'w') as f:
        yaml.dump(content, f)

    return conf_file

# ============================================================================
# EventBus Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    """Returns a fresh EventBus instance."""
    return EventBus()

# ============================================================================
# Resolver Fixtures
# ============================================================================

@pytest.fixture
def estimating_resolver():
    """Resolver with no ffprobe: every record comes from the estimation table."""
    return MetadataResolver(ffprobe_adapter=None)

@pytest.fixture
def mock_ffprobe():
    """MagicMock standing in for FFprobeAdapter."""
    adapter = MagicMock()
    adapter.is_available.return_value = True
    return adapter

# ============================================================================
# File System Fixtures
# ============================================================================

@pytest.fixture
def audio_dir(tmp_path):
    """Creates a directory tree with dummy audio files and noise."""
    root = tmp_path / "music"
    root.mkdir()
    (root / "track1.mp3").write_bytes(b"\x00" * 40000)
    (root / "track2.WAV").write_bytes(b"")
    (root / "cover.jpg").write_bytes(b"jpeg")
    (root / "notes.txt").write_text("liner notes")

    sub = root / "disc2"
    sub.mkdir()
    (sub / "track3.flac").write_bytes(b"\x00" * 1000)
    (sub / "track4.ogg").write_bytes(b"\x00" * 2000)
    return root

# ============================================================================
# Logging isolation
# ============================================================================

@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)

# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (may need ffprobe)"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
