"""Ownership policy for per-user resources.

A resource with no owner belongs to the shared catalog: every authenticated
user may read it and nobody may delete it. A resource with an owner is only
accessible to that owner.

Existence is always checked before ownership. Callers pass the looked-up
resource straight in and let ``require_found`` produce the 404; handing
``None`` to the ownership checks is a programming error.
"""

from typing import Protocol, TypeVar

from cookbook.exceptions import Forbidden, InternalError, NotFound


class Owned(Protocol):
    owner_id: int | None


T = TypeVar("T", bound=Owned)


def require_found(resource: T | None, message: str = "Not found") -> T:
    """Return ``resource`` or raise ``NotFound``."""
    if resource is None:
        raise NotFound(message)
    return resource


def _ensure_checked(resource: Owned | None) -> Owned:
    if resource is None:
        raise InternalError("Ownership checked on a missing resource")
    return resource


def is_owner(resource: Owned, user_id: int) -> bool:
    return resource.owner_id is not None and resource.owner_id == user_id


def authorize_read(resource: Owned | None, user_id: int) -> None:
    """Allow shared resources and the caller's own; forbid the rest."""
    resource = _ensure_checked(resource)
    if resource.owner_id is None:
        return
    if not is_owner(resource, user_id):
        raise Forbidden()


def authorize_delete(resource: Owned | None, user_id: int) -> None:
    """Allow only the owner. Shared resources have no owner to match."""
    resource = _ensure_checked(resource)
    if not is_owner(resource, user_id):
        raise Forbidden()
