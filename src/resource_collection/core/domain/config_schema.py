"""
Configuration Schema Validation

Pydantic models for validating collection options.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from resource_collection.core.domain.errors import ConfigError


class CollectionOptions(BaseModel):
    """Options accepted by ``Collection``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    opened: bool = Field(
        False,
        description="Report the collection as opened before any open pass has run",
    )
    name: str = Field(
        "collection",
        min_length=1,
        description="Label bound to log events emitted for this collection",
    )


def load_options(options: CollectionOptions | Mapping[str, Any] | None) -> CollectionOptions:
    """Validate user supplied options into a ``CollectionOptions``.

    Raises:
        ConfigError: If the mapping holds unknown keys or invalid values.
    """
    if options is None:
        return CollectionOptions()
    if isinstance(options, CollectionOptions):
        return options
    try:
        return CollectionOptions.model_validate(dict(options))
    except ValidationError as error:
        raise ConfigError(
            f"Invalid collection options: {error.error_count()} error(s)",
            details={"errors": error.errors(include_url=False)},
        ) from error
