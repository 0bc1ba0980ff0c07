"""Base model for registry payloads.

Every registry model inherits from :class:`RegistryBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys used on the wire
  (``imageUrl``) map to snake_case fields.
* ``populate_by_name`` so models can be built from either spelling.
* ``dump_wire()`` which serializes back to the camelCase wire shape.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegistryBaseModel(BaseModel):
    """Base for registry request/response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def dump_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
