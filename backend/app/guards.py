"""
Shopfront Backend: Request Guards
==================================

Two assertions every mutating handler applies between its lookup and its
write:

    record = await product_service.get_product(db, product_id)
    product = handle_404(record, "product", product_id)
    require_ownership(user, product)
    ...mutate...

Both raise instead of returning a status, so nothing after a failed guard
runs. The exceptions are turned into 404/403 responses by the handlers in
`app.main`.
"""

from typing import Optional, Protocol, TypeVar
from uuid import UUID

from app.exceptions import ForbiddenError, NotFoundError


class Owned(Protocol):
    id: UUID
    owner_id: UUID


class Requester(Protocol):
    id: UUID


T = TypeVar("T")


def handle_404(record: Optional[T], resource: str, resource_id: object) -> T:
    """Return `record` unchanged, or raise NotFoundError if the lookup found nothing."""
    if record is None:
        raise NotFoundError(resource=resource, resource_id=str(resource_id))
    return record


def require_ownership(requester: Requester, record: Owned, resource: str = "resource") -> None:
    """Raise ForbiddenError unless `requester` is the owner of `record`."""
    if record.owner_id != requester.id:
        raise ForbiddenError(
            resource=resource,
            resource_id=str(record.id),
            context={"requester_id": str(requester.id)},
        )
