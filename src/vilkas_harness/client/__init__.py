"""HTTP client for the Vilkas recommendation service."""

from vilkas_harness.client.api import VilkasClient
from vilkas_harness.client.errors import HarnessError, RemoteCallFailed, UnexpectedResponseShape
from vilkas_harness.client.models import (
    Item,
    ModelInfo,
    RecommendRequest,
    RecommendationResult,
    ViewEvent,
)

__all__ = [
    "VilkasClient",
    "HarnessError",
    "RemoteCallFailed",
    "UnexpectedResponseShape",
    "Item",
    "ModelInfo",
    "RecommendRequest",
    "RecommendationResult",
    "ViewEvent",
]
