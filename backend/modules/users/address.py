"""
Address parsing and legacy-address repair.

Older releases could persist a user's address as a JSON string instead of
a structured object. Records like that are repaired opportunistically
whenever they are read through get_my_info or written by a profile update.
Repair is best-effort: when the string cannot be parsed, or the repaired
value cannot be saved, the original record is used as-is.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx
import pydantic
from postgrest.exceptions import APIError

from .exceptions import InvalidAddressError
from .models import Address, LegacyAddress, StoredAddress, UserRecord

logger = logging.getLogger(__name__)


def parse_address(raw: str) -> Address:
    """
    Parse a JSON-encoded address.

    Raises:
        InvalidAddressError: If the string is not a JSON object describing
            an address.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise InvalidAddressError(str(e))

    if not isinstance(data, dict):
        raise InvalidAddressError("address must be a JSON object")

    try:
        return Address.model_validate(data)
    except pydantic.ValidationError as e:
        raise InvalidAddressError(str(e))


def coerce_address(value: Any) -> Optional[Address]:
    """
    Turn user input (object, dict or JSON string) into an Address.

    Raises:
        InvalidAddressError: If a string or dict does not describe an address.
    """
    if value is None or isinstance(value, Address):
        return value
    if isinstance(value, str):
        return parse_address(value)
    if isinstance(value, dict):
        try:
            return Address.model_validate(value)
        except pydantic.ValidationError as e:
            raise InvalidAddressError(str(e))
    raise InvalidAddressError(f"unsupported address type: {type(value).__name__}")


@dataclass(frozen=True)
class AddressNormalization:
    """
    Outcome of normalizing a stored address.

    `address` is always usable: the structured result on success, the
    original value otherwise.
    """

    address: Optional[StoredAddress]
    changed: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_address(value: Optional[StoredAddress]) -> AddressNormalization:
    """Convert a legacy string address into a structured one, if possible."""
    if not isinstance(value, LegacyAddress):
        return AddressNormalization(address=value)

    try:
        return AddressNormalization(address=parse_address(value.raw), changed=True)
    except InvalidAddressError as e:
        return AddressNormalization(address=value, error=e.details.get("reason"))


class AddressStore(Protocol):
    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[UserRecord]:
        ...


class AddressNormalizer:
    """Repairs and persists legacy string addresses on user records."""

    def __init__(self, store: AddressStore):
        self._store = store

    def normalize(self, user: UserRecord) -> UserRecord:
        """
        Return the user with a structured address, persisting the repair.

        Never raises: on any failure the original record is returned.
        Running it on an already-structured address is a no-op.
        """
        result = normalize_address(user.address)
        if not result.changed:
            if not result.ok:
                logger.warning(
                    "Could not parse legacy address for user %s: %s", user.id, result.error
                )
            return user

        try:
            updated = self._store.update(user.id, {"address": result.address.to_store()})
        except (APIError, httpx.HTTPError) as e:
            logger.warning("Could not save repaired address for user %s: %s", user.id, e)
            return user

        if updated is None:
            # Deleted between read and write; nothing left to repair
            return user

        logger.info("Converted legacy string address for user %s", user.id)
        return updated
