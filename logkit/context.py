"""Explicit per-request context handle.

Request-scoped data (correlation id, authenticated principal) travels as a
``RequestContext`` value passed down the call chain; nothing is stored in
globals. Interceptors build it, handlers forward it, and ``logkit.wrap``
reads it through ``with_ctx``.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

REQUEST_ID_KEY = "request_id"
USERNAME_KEY = "username"


class RequestContext(BaseModel):
    """Immutable request context.

    Attributes:
        request_id: Correlation id assigned to the inbound request.
        values: Read-only request-scoped values, e.g. the principal under ``username``.
    """

    model_config = ConfigDict(frozen=True)

    request_id: str = ""
    values: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("values", mode="after")
    @classmethod
    def _read_only(cls, values: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(values))

    def with_value(self, key: str, value: Any) -> "RequestContext":
        return self.model_copy(update={"values": MappingProxyType({**self.values, key: value})})

    @property
    def username(self) -> str:
        """The authenticated principal, or ``""`` when none is set."""
        username = self.values.get(USERNAME_KEY)
        return username if isinstance(username, str) else ""
