"""Pydantic models for the Vilkas API."""

from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field, RootModel, ValidationError

from vilkas_harness.client.errors import UnexpectedResponseShape

ModelT = TypeVar("ModelT", bound=BaseModel)


class Item(BaseModel):
    """Catalog item as stored by the service."""

    id: str
    part: str = Field(..., description="Partition the item belongs to")
    views: int = Field(..., description="View count")
    meta: Dict[str, List[str]] = Field(..., description="Free-form metadata, values are string lists")
    popularity: Optional[float] = Field(None, description="Returned by the service on reads only")

    def to_payload(self) -> Dict[str, Any]:
        """Body sent to the create-item endpoint."""
        return self.model_dump(include={"id", "part", "views", "meta"})


class ViewEvent(BaseModel):
    """A single view of an item by a user."""

    part: str
    item: str
    user: str
    activity: Optional[str] = Field(None, description="Id of the recommendation that led to the view")

    def to_params(self) -> Dict[str, str]:
        """Query parameters understood by ``GET /api/view``."""
        params = {"p": self.part, "i": self.item, "u": self.user}
        if self.activity is not None:
            params["a"] = self.activity
        return params


class RecommendRequest(BaseModel):
    """Body of ``POST /api/recommend``."""

    part: str
    user: str
    current: str
    whitelist: Optional[List[str]] = None
    count: int = Field(16, gt=0)


class RecommendationResult(BaseModel):
    """Recommendation returned by the service."""

    id: str = Field(..., description="Activity id to attach to follow-up views")
    items: List[Tuple[str, float]]

    @property
    def candidates(self) -> List[str]:
        """Recommended item ids in service order."""
        return [item_id for item_id, _ in self.items]


class ModelInfo(RootModel[Dict[str, float]]):
    """Feature weights of the model trained for a partition."""

    @property
    def weights(self) -> Dict[str, float]:
        return self.root


def decode_result(payload: Any, model_cls: Type[ModelT], what: str) -> ModelT:
    """Decode the ``result`` member of a response body into ``model_cls``.

    Args:
        payload: Parsed JSON body
        model_cls: Pydantic model to validate against
        what: Name used in error messages

    Returns:
        Validated model instance

    Raises:
        UnexpectedResponseShape: If the body lacks ``result`` or fails validation
    """
    if not isinstance(payload, dict) or "result" not in payload:
        raise UnexpectedResponseShape(what, "missing 'result'")
    try:
        return model_cls.model_validate(payload["result"])
    except ValidationError as exc:
        raise UnexpectedResponseShape(what, exc) from exc
