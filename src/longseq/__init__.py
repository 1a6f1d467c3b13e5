"""Coordination-free 64-bit identifier generation."""

from longseq.config import GeneratorSettings, NodeIdSource, load_settings
from longseq.exceptions import (
    ClockRolledBack,
    LongSequenceError,
    NodeIdResolutionFailure,
    SequenceSpinTimeout,
)
from longseq.generator import LongSequenceGenerator, generate_next_id, get_default_generator
from longseq.layout import IdParts, decode, encode
from longseq.node import resolve_node_id

__all__ = [
    "ClockRolledBack",
    "GeneratorSettings",
    "IdParts",
    "LongSequenceError",
    "LongSequenceGenerator",
    "NodeIdResolutionFailure",
    "NodeIdSource",
    "SequenceSpinTimeout",
    "decode",
    "encode",
    "generate_next_id",
    "get_default_generator",
    "load_settings",
    "resolve_node_id",
]
