"""Base model for pyairq data types.

Every pyairq model inherits from :class:`AirqBaseModel` which provides:

* ``frozen=True``: records are immutable once constructed.
* ``alias_generator=to_camel`` so the registry/ledger camelCase JSON keys
  (``publicKey``, ``deviceId``...) map to snake_case fields.
* ``populate_by_name=True`` so Python callers can use field names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AirqBaseModel(BaseModel):
    """Base for pyairq models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )
