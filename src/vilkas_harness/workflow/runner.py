"""Scripted workflow run against the recommendation service."""

import uuid
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from vilkas_harness.client.api import VilkasClient
from vilkas_harness.client.errors import HarnessError, RemoteCallFailed
from vilkas_harness.client.models import Item, ModelInfo, RecommendationResult
from vilkas_harness.config import HarnessConfig
from vilkas_harness.utils.logging import LogLevel, get_logger, log_exception
from vilkas_harness.workflow.selection import CandidateSelector, create_selector

logger = get_logger("workflow.runner")


class RoundRecord(BaseModel):
    """One view/recommend round."""

    current: str = Field(..., description="Item viewed and used as current")
    activity: str = Field(..., description="Recommendation id the view was tagged with")
    recommendation_id: str = Field(..., description="Id of the recommendation it produced")


class RunReport(BaseModel):
    """Everything a harness run produced."""

    partition: str
    seed_item: Item
    created_items: List[str] = Field(default_factory=list)
    initial_recommendation: Optional[RecommendationResult] = None
    rounds: List[RoundRecord] = Field(default_factory=list)
    last_recommendation: Optional[RecommendationResult] = None
    train_status: Optional[int] = None
    model: Optional[ModelInfo] = None
    call_count: int = 0


def _new_item_id() -> str:
    return str(uuid.uuid4())


class HarnessRunner:
    """Runs the create/view/recommend/train sequence.

    Each step feeds the next, so the first failing call ends the run and the
    error propagates to the caller.
    """

    def __init__(
        self,
        config: HarnessConfig,
        client: Optional[VilkasClient] = None,
        id_factory: Callable[[], str] = _new_item_id,
    ) -> None:
        """Initialize runner.

        Args:
            config: Run parameters
            client: Client to use (built from ``config`` and owned by the runner by default)
            id_factory: Generates ids for the non-seed items
        """
        self.config = config
        self._owns_client = client is None
        self.client = client or VilkasClient(config.host, timeout=config.timeout)
        self.id_factory = id_factory
        self.rank_map: Dict[str, int] = {}
        self.selector: CandidateSelector = create_selector(config, self.client, self.rank_map)

    def __enter__(self) -> "HarnessRunner":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client if the runner built it; injected clients stay open."""
        if self._owns_client:
            self.client.close()

    def run(self) -> RunReport:
        """Run the whole workflow.

        Returns:
            Report of the run

        Raises:
            HarnessError: On the first failing call or undecodable response
        """
        config = self.config
        logger.info(
            f"Starting run against {self.client.base_url} "
            f"(partition={config.partition}, strategy={config.selection_strategy.value})"
        )
        try:
            report = RunReport(partition=config.partition, seed_item=self._create_seed())
            report.created_items = self._populate()

            self.client.record_view(config.partition, config.seed_item_id, config.user, None)
            rec = self._recommend(config.seed_item_id)
            report.initial_recommendation = rec

            for _ in range(config.rounds):
                current = self.selector.select(rec)
                self.client.record_view(config.partition, current, config.user, rec.id)
                next_rec = self._recommend(current)
                report.rounds.append(
                    RoundRecord(current=current, activity=rec.id, recommendation_id=next_rec.id)
                )
                rec = next_rec
            report.last_recommendation = rec

            report.train_status = self.client.train(config.partition).status_code
            report.model = self.client.get_model(config.partition)
        except HarnessError as exc:
            # failed calls are already logged at ERROR by the client
            level = LogLevel.WARNING if isinstance(exc, RemoteCallFailed) else LogLevel.ERROR
            log_exception(
                logger, f"Run aborted after {self.client.call_count} calls", exc, level=level
            )
            raise

        report.call_count = self.client.call_count
        logger.info(f"Run finished after {report.call_count} calls")
        return report

    def _create_seed(self) -> Item:
        config = self.config
        seed = Item(
            id=config.seed_item_id,
            part=config.partition,
            views=config.seed_views,
            meta={"title": ["Alphabet"], "i": ["0"]},
        )
        self.client.create_item(seed)
        self.client.get_item(config.partition, seed.id)
        return seed

    def _populate(self) -> List[str]:
        config = self.config
        created = []
        for i in range(config.item_count):
            item = Item(
                id=self.id_factory(),
                part=config.partition,
                views=0,
                meta={"title": [f"test {i}"], "i": [str(i)]},
            )
            self.client.create_item(item)
            self.rank_map[item.id] = i
            created.append(item.id)
            for _ in range(config.views_per_item):
                self.client.record_view(config.partition, item.id, config.user, None)
        return created

    def _recommend(self, current: str) -> RecommendationResult:
        return self.client.recommend(
            part=self.config.partition,
            user=self.config.user,
            current=current,
            count=self.config.recommend_count,
        )
