"""Blocking HTTP client for the Vilkas recommendation service."""

from typing import Any, Dict, List, Mapping, Optional, Type, Union

import requests

from vilkas_harness.client.errors import RemoteCallFailed, UnexpectedResponseShape
from vilkas_harness.client.models import (
    Item,
    ModelInfo,
    ModelT,
    RecommendRequest,
    RecommendationResult,
    ViewEvent,
    decode_result,
)
from vilkas_harness.utils.logging import get_logger

logger = get_logger("client")

JSON_HEADERS = {"Content-Type": "application/json"}


class VilkasClient:
    """One method per remote endpoint; every call blocks until the response arrives.

    Any response with a status code of 300 or above raises
    :class:`RemoteCallFailed`. Responses below 300 count as success whatever
    their body; only the calls returning typed structures look at the body.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Scheme, host and port of the service, e.g. ``http://localhost:3000``
            timeout: Per-request timeout in seconds, ``None`` waits indefinitely
            session: Session to issue requests with (a new one by default)
        """
        if "://" not in base_url:
            base_url = f"http://{base_url}"
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.call_count = 0

    def __enter__(self) -> "VilkasClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def create_item(self, fields: Union[Item, Mapping[str, Any]]) -> requests.Response:
        """Create an item.

        Args:
            fields: Item, or mapping with ``id``, ``part``, ``views`` and ``meta``

        Returns:
            Validated raw response
        """
        item = fields if isinstance(fields, Item) else Item.model_validate(dict(fields))
        return self._call("POST", "/api/items", json=item.to_payload())

    def get_item(self, part: str, id: str) -> Item:
        """Fetch an item by partition and id."""
        response = self._call("GET", "/api/items", params={"part": part, "id": id})
        return self._decode(response, Item, "item")

    def delete_item(self, part: str, id: str) -> requests.Response:
        """Delete an item by partition and id."""
        return self._call("DELETE", "/api/items", json={"part": part, "id": id})

    def record_view(
        self, part: str, id: str, user: str, activity: Optional[str] = None
    ) -> requests.Response:
        """Record that ``user`` viewed item ``id``.

        Args:
            part: Partition name
            id: Viewed item id
            user: User id
            activity: Id of the recommendation the view came from, if any

        Returns:
            Validated raw response
        """
        view = ViewEvent(part=part, item=id, user=user, activity=activity)
        return self._call("GET", "/api/view", params=view.to_params())

    def recommend(
        self,
        part: str,
        user: str,
        current: str,
        whitelist: Optional[List[str]] = None,
        count: int = 16,
    ) -> RecommendationResult:
        """Request recommendations for ``user`` currently looking at ``current``.

        Args:
            part: Partition name
            user: User id
            current: Id of the item being viewed
            whitelist: Restrict candidates to these item ids
            count: Number of items to return, must be positive

        Returns:
            Recommendation id and ordered ``(item id, score)`` pairs
        """
        request = RecommendRequest(
            part=part, user=user, current=current, whitelist=whitelist, count=count
        )
        response = self._call("POST", "/api/recommend", json=request.model_dump())
        return self._decode(response, RecommendationResult, "recommendation")

    def train(self, part: str) -> requests.Response:
        """Trigger model training for a partition."""
        return self._call("POST", f"/api/model/{part}/train")

    def get_model(self, part: str) -> ModelInfo:
        """Fetch the model trained for a partition."""
        response = self._call("GET", f"/api/model/{part}")
        return self._decode(response, ModelInfo, "model")

    def _call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        logger.info(f"{method} {path}")
        self.call_count += 1
        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=json,
            headers=JSON_HEADERS if json is not None else None,
            timeout=self.timeout,
        )
        return self._assert_valid_response(method, response)

    @staticmethod
    def _decode(response: requests.Response, model_cls: Type[ModelT], what: str) -> ModelT:
        try:
            payload = response.json()
        except ValueError as exc:
            raise UnexpectedResponseShape(what, "body is not JSON") from exc
        return decode_result(payload, model_cls, what)

    @staticmethod
    def _assert_valid_response(method: str, response: requests.Response) -> requests.Response:
        if response.status_code >= 300:
            logger.error(
                f"{method} {response.url} failed with status {response.status_code}: {response.text}"
            )
            raise RemoteCallFailed(response.status_code, method, response.url, response.text)
        return response
