"""
Unique property view counting.

Each (property, identity) pair moves from *unseen* to *seen* exactly once.
The transition is guarded by the unique constraints on ``property_views``:
the ledger insert and the ``views + 1`` increment share one savepoint, so a
concurrent first view that loses the insert race rolls back without touching
the counter and is reported as a repeat view.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Union

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F, Q
from django.utils import timezone

from ..exceptions import ViewRecordingError
from ..models import Property, PropertyView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserIdentity:
    user_id: int

    def lookup(self) -> dict:
        return {"user_id": self.user_id}


@dataclass(frozen=True)
class SessionIdentity:
    session_id: str

    def lookup(self) -> dict:
        return {"session_id": self.session_id}


Identity = Union[UserIdentity, SessionIdentity]


@dataclass(frozen=True)
class ViewResult:
    is_new: bool
    view_count: int


NOT_TRACKED = ViewResult(is_new=False, view_count=0)


def identity_for(user=None, session_id: Optional[str] = None) -> Optional[Identity]:
    """
    Pick the dedup identity for a request.
    An authenticated user always wins over a session id; no merge between the two.
    """
    if user is not None and getattr(user, "is_authenticated", False):
        return UserIdentity(user_id=user.pk)
    session_id = (session_id or "").strip()
    if session_id:
        return SessionIdentity(session_id=session_id)
    return None


def _refresh_view(property_id: int, identity: Identity, now) -> int:
    return (
        PropertyView.objects
        .filter(property_id=property_id, **identity.lookup())
        .update(viewed_at=now)
    )


def _current_views(property_id: int) -> int:
    views = (
        Property.objects
        .filter(pk=property_id)
        .values_list("views", flat=True)
        .first()
    )
    return views or 0


def record_view(property_id: int, identity: Optional[Identity], ip_address: Optional[str] = None) -> ViewResult:
    """
    Record a view of ``property_id`` at most once per identity.

    Returns ``ViewResult(is_new, view_count)``. Without an identity nothing is
    written and ``ViewResult(False, 0)`` is returned.
    """
    if identity is None:
        return NOT_TRACKED

    now = timezone.now()
    try:
        if _refresh_view(property_id, identity, now):
            return ViewResult(is_new=False, view_count=_current_views(property_id))

        try:
            with transaction.atomic():
                PropertyView.objects.create(
                    property_id=property_id,
                    viewed_at=now,
                    ip_address=ip_address or None,
                    **identity.lookup(),
                )
                Property.objects.filter(pk=property_id).update(views=F("views") + 1)
                view_count = _current_views(property_id)
        except IntegrityError as exc:
            # Lost the race against a concurrent first view of the same identity
            if not _refresh_view(property_id, identity, now):
                raise ViewRecordingError(f"cannot record view of property {property_id}") from exc
            logger.debug("view of property %s by %s already recorded", property_id, identity)
            return ViewResult(is_new=False, view_count=_current_views(property_id))

        return ViewResult(is_new=True, view_count=view_count)
    except DatabaseError as exc:
        raise ViewRecordingError(f"cannot record view of property {property_id}") from exc


def unique_viewers(property_id: int) -> int:
    """
    Number of distinct identities that viewed the property. Rows whose user
    was deleted (no user, no session) still count in ``views`` but not here.
    """
    return (
        PropertyView.objects
        .filter(property_id=property_id)
        .filter(Q(user__isnull=False) | Q(session_id__isnull=False))
        .count()
    )
