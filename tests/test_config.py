# tests/test_config.py
import pytest
from pydantic import ValidationError

from longseq.config import NodeIdSource, load_settings
from longseq.layout import DEFAULT_EPOCH_MS


def test_defaults() -> None:
    settings = load_settings()

    assert settings.custom_epoch_ms == DEFAULT_EPOCH_MS
    assert settings.node_id_source is NodeIdSource.HARDWARE
    assert settings.use_hardware_node_id
    assert settings.explicit_node_id is None
    assert settings.spin_timeout_ms is None


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LONGSEQ_NODE_ID_SOURCE", "explicit")
    monkeypatch.setenv("LONGSEQ_EXPLICIT_NODE_ID", "42")
    monkeypatch.setenv("LONGSEQ_CUSTOM_EPOCH_MS", "1700000000000")

    settings = load_settings()

    assert not settings.use_hardware_node_id
    assert settings.explicit_node_id == 42
    assert settings.custom_epoch_ms == 1700000000000


def test_reads_dotenv_file(tmp_path) -> None:
    (tmp_path / ".env").write_text("LONGSEQ_NODE_ID_SOURCE=explicit\nLONGSEQ_EXPLICIT_NODE_ID=5\n")

    assert load_settings().explicit_node_id == 5


@pytest.mark.parametrize(
    "overrides",
    [
        {"node_id_source": "explicit"},
        {"node_id_source": "hardware", "explicit_node_id": 3},
        {"node_id_source": "explicit", "explicit_node_id": 1024},
        {"node_id_source": "explicit", "explicit_node_id": -1},
        {"node_id_source": "dns"},
        {"spin_timeout_ms": 0},
        {"custom_epoch_ms": -5},
    ],
)
def test_invalid_settings(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        load_settings(**overrides)
