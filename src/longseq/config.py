"""Configuration management using pydantic-settings."""

from enum import Enum

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from longseq.layout import DEFAULT_EPOCH_MS, MAX_NODE_ID


class NodeIdSource(str, Enum):
    """Where the generator's node id comes from."""

    HARDWARE = "hardware"
    EXPLICIT = "explicit"


class GeneratorSettings(BaseSettings):
    """Generator settings, evaluated once when a generator is built."""

    model_config = SettingsConfigDict(
        env_prefix="LONGSEQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    custom_epoch_ms: int = Field(default=DEFAULT_EPOCH_MS, ge=0)
    node_id_source: NodeIdSource = NodeIdSource.HARDWARE
    explicit_node_id: int | None = Field(default=None, ge=0, le=MAX_NODE_ID)
    spin_timeout_ms: float | None = Field(
        default=None, gt=0, description="Upper bound on waiting out an exhausted sequence"
    )
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_node_id(self) -> "GeneratorSettings":
        if self.node_id_source is NodeIdSource.EXPLICIT and self.explicit_node_id is None:
            raise ValueError("explicit_node_id is required when node_id_source is 'explicit'")
        if self.node_id_source is NodeIdSource.HARDWARE and self.explicit_node_id is not None:
            raise ValueError("explicit_node_id is only allowed when node_id_source is 'explicit'")
        return self

    @property
    def use_hardware_node_id(self) -> bool:
        return self.node_id_source is NodeIdSource.HARDWARE


def load_settings(**overrides) -> GeneratorSettings:
    """Load settings from environment and .env file."""
    return GeneratorSettings(**overrides)
