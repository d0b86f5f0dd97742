"""Strategies picking the "worst" candidate of a recommendation."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Union

from vilkas_harness.client.api import VilkasClient
from vilkas_harness.client.errors import UnexpectedResponseShape
from vilkas_harness.client.models import RecommendationResult
from vilkas_harness.config import HarnessConfig, SelectionStrategy
from vilkas_harness.utils.logging import get_logger

logger = get_logger("workflow.selection")


def select_worst(candidates: Iterable[str], key: Callable[[str], float]) -> str:
    """Return the candidate with the smallest key.

    Ties go to the candidate that comes first. ``key`` is called exactly once
    per candidate, in order.

    Raises:
        UnexpectedResponseShape: If there are no candidates
    """
    scored = [(candidate, key(candidate)) for candidate in candidates]
    if not scored:
        raise UnexpectedResponseShape("recommendation", "no candidate items")
    worst, rank = min(scored, key=lambda pair: pair[1])
    logger.debug(f"Selected {worst} (rank {rank}) out of {len(scored)} candidates")
    return worst


class CandidateSelector(ABC):
    """Picks the next ``current`` item from a recommendation."""

    @abstractmethod
    def select(self, result: RecommendationResult) -> str:
        """Return the id of the item to view next."""


class LocalRankSelector(CandidateSelector):
    """Uses the creation index recorded locally; items never created locally rank 0."""

    def __init__(self, rank_map: Dict[str, int]) -> None:
        self.rank_map = rank_map

    def select(self, result: RecommendationResult) -> str:
        return select_worst(result.candidates, self._rank)

    def _rank(self, item_id: str) -> Union[int, float]:
        return self.rank_map.get(item_id, 0.0)


class RemoteLookupSelector(CandidateSelector):
    """Fetches every candidate and ranks it by the integer in its ``i`` metadata."""

    def __init__(self, client: VilkasClient, part: str) -> None:
        self.client = client
        self.part = part

    def select(self, result: RecommendationResult) -> str:
        return select_worst(result.candidates, self._rank)

    def _rank(self, item_id: str) -> int:
        item = self.client.get_item(self.part, item_id)
        values = item.meta.get("i")
        if not values:
            raise UnexpectedResponseShape("item", f"item {item_id} has no 'i' metadata")
        try:
            return int(values[0])
        except ValueError as exc:
            raise UnexpectedResponseShape(
                "item", f"item {item_id} has non-integer 'i' metadata {values[0]!r}"
            ) from exc


def create_selector(
    config: HarnessConfig, client: VilkasClient, rank_map: Dict[str, int]
) -> CandidateSelector:
    """Build the selector named by ``config.selection_strategy``."""
    if config.selection_strategy == SelectionStrategy.REMOTE_LOOKUP:
        return RemoteLookupSelector(client, config.partition)
    return LocalRankSelector(rank_map)
