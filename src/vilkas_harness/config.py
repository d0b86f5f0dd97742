"""Configuration for harness runs.

Settings are resolved in this order, later sources winning: field defaults,
``VILKAS_*`` environment variables, a named preset, a JSON file, explicit
overrides (usually CLI options).
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SEED_ITEM_ID = "f5a9034e-7d21-448c-a37c-141e103e0d97"


class SelectionStrategy(str, Enum):
    """How the next ``current`` item is picked from a recommendation."""

    LOCAL_RANK = "local_rank"
    REMOTE_LOOKUP = "remote_lookup"


class Preset(str, Enum):
    """Named parameter sets."""

    LOCAL = "local"
    REMOTE = "remote"


class HarnessConfig(BaseSettings):
    """Parameters of a harness run."""

    model_config = SettingsConfigDict(env_prefix="VILKAS_", extra="forbid")

    host: str = Field("http://localhost:3000", description="Base URL of the service")
    partition: str = Field("test", description="Partition all items are created in")
    user: str = Field("me", description="User id attached to views and recommendations")
    seed_item_id: str = Field(SEED_ITEM_ID, description="Id of the item created first")
    seed_views: int = Field(10, ge=0, description="Initial view count of the seed item")
    item_count: int = Field(11, ge=0, description="Number of items created after the seed")
    views_per_item: int = Field(1, ge=0, description="Views recorded right after each item is created")
    rounds: int = Field(11, ge=0, description="Recommend/view rounds")
    recommend_count: int = Field(16, gt=0, description="Items requested per recommendation")
    selection_strategy: SelectionStrategy = SelectionStrategy.LOCAL_RANK
    timeout: Optional[float] = Field(None, gt=0, description="Request timeout in seconds")


PRESETS: Dict[Preset, Dict[str, Any]] = {
    Preset.LOCAL: {
        "host": "http://localhost:3000",
        "item_count": 11,
        "views_per_item": 1,
        "rounds": 11,
        "selection_strategy": SelectionStrategy.LOCAL_RANK,
    },
    Preset.REMOTE: {
        "host": "http://vilkas:3000",
        "item_count": 101,
        "views_per_item": 10,
        "rounds": 101,
        "selection_strategy": SelectionStrategy.REMOTE_LOOKUP,
    },
}


def load_config(
    preset: Optional[Preset] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> HarnessConfig:
    """Build a configuration from a preset, a JSON file and explicit overrides.

    Overrides whose value is ``None`` are ignored, so unset CLI options fall
    through to the file, the preset or the environment.
    """
    values: Dict[str, Any] = {}
    if preset is not None:
        values.update(PRESETS[Preset(preset)])
    if config_file is not None:
        with open(config_file, "r") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_file} must contain a JSON object")
        values.update(loaded)
    values.update({key: value for key, value in overrides.items() if value is not None})
    return HarnessConfig(**values)
