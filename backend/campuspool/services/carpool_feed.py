"""Carpool Feed — CRUD for ride posts and the enriched, display-ready feed.

Invariants:
    - Feed is newest first by created_at
    - Responses leave this module reconciled (ResponseView), never raw
    - Only the owner may update or delete a post
    - Responding appends one canonical entry; the list is never deduplicated

Design Decisions:
    - Lookups for every owner and responder on the page are prefetched in two
      queries, then handed to the pure reconciler as dict.get
    - responses is reassigned (not appended in place) so SQLAlchemy sees the
      JSON column change
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.core.datetime_ops import (
    combine_date_and_time, format_date, format_time, get_day_of_week,
)
from campuspool.core.errors import PermissionDeniedError, ResourceNotFoundError
from campuspool.core.reconcile_responses import (
    FALLBACK_OWNER_NAME,
    build_response_entry,
    normalize_responses,
    reconcile_responses,
    resolve_owner_name,
)
from campuspool.core.validate_carpool_request import (
    get_days_until_carpool, is_urgent_request,
)
from campuspool.models import CarpoolRequest
from campuspool.schemas.carpool import (
    CarpoolRequestCreate, CarpoolRequestOut, CarpoolRequestUpdate, ResponseOut,
)
from campuspool.services.people_lookup import get_user_or_none, load_people

logger = logging.getLogger(__name__)


def _people_on(rows: list[CarpoolRequest]) -> set[str]:
    ids = set()
    for row in rows:
        ids.add(row.user_id)
        ids.update(r.user_id for r in normalize_responses(row.responses))
    return ids


def project_request(
    row: CarpoolRequest,
    users: dict[str, dict],
    profiles: dict[str, dict],
    *,
    now: datetime | None = None,
) -> CarpoolRequestOut:
    """Enrich one stored post for display."""
    owner_name = resolve_owner_name(row.user_id, users.get, profiles.get)
    if owner_name == FALLBACK_OWNER_NAME and row.user_name:
        owner_name = row.user_name

    departure = combine_date_and_time(row.date, row.time) or row.date
    responses = reconcile_responses(row.responses, users.get, profiles.get, now=now)

    return CarpoolRequestOut(
        id=row.id,
        user_id=row.user_id,
        user_name=owner_name,
        type=row.type,
        destination=row.destination,
        date=row.date,
        time=row.time,
        seats=row.seats,
        notes=row.notes,
        responses=[ResponseOut.model_validate(r) for r in responses],
        created_at=row.created_at,
        updated_at=row.updated_at,
        display_date=format_date(row.date),
        display_time=format_time(row.time),
        day_of_week=get_day_of_week(row.date),
        days_until=get_days_until_carpool(departure, now=now),
        is_urgent=is_urgent_request(departure, now=now),
    )


async def list_feed(
    db: AsyncSession, *, now: datetime | None = None,
) -> list[CarpoolRequestOut]:
    result = await db.execute(
        select(CarpoolRequest).order_by(CarpoolRequest.created_at.desc()),
    )
    rows = list(result.scalars().all())
    users, profiles = await load_people(db, _people_on(rows))
    return [project_request(row, users, profiles, now=now) for row in rows]


async def get_request_or_404(db: AsyncSession, request_id: str) -> CarpoolRequest:
    result = await db.execute(
        select(CarpoolRequest).where(CarpoolRequest.id == request_id),
    )
    row = result.scalar_one_or_none()
    if row is None:
        raise ResourceNotFoundError("CarpoolRequest", request_id)
    return row


def _require_owner(row: CarpoolRequest, viewer_id: str) -> None:
    if row.user_id != viewer_id:
        raise PermissionDeniedError("Only the poster can change this carpool request")


async def project_one(db: AsyncSession, row: CarpoolRequest) -> CarpoolRequestOut:
    users, profiles = await load_people(db, _people_on([row]))
    return project_request(row, users, profiles)


async def create_request(
    db: AsyncSession, owner_id: str, body: CarpoolRequestCreate,
) -> CarpoolRequest:
    owner = await get_user_or_none(db, owner_id)
    row = CarpoolRequest(
        user_id=owner_id,
        user_name=owner.name if owner else None,
        type=body.type,
        destination=body.destination,
        date=body.date,
        time=body.time,
        seats=body.seats,
        notes=body.notes,
        responses=[],
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.info("Carpool request created", extra={"user_id": owner_id, "request_id": row.id})
    return row


async def update_request(
    db: AsyncSession, request_id: str, viewer_id: str, body: CarpoolRequestUpdate,
) -> CarpoolRequest:
    row = await get_request_or_404(db, request_id)
    _require_owner(row, viewer_id)
    for name, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(row, name, value)
    row.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(row)
    return row


async def delete_request(db: AsyncSession, request_id: str, viewer_id: str) -> None:
    row = await get_request_or_404(db, request_id)
    _require_owner(row, viewer_id)
    await db.delete(row)
    await db.commit()
    logger.info("Carpool request deleted", extra={"user_id": viewer_id, "request_id": request_id})


async def respond_to_request(
    db: AsyncSession, request_id: str, responder_id: str, message: str | None = None,
) -> CarpoolRequest:
    row = await get_request_or_404(db, request_id)
    row.responses = [*(row.responses or []), build_response_entry(responder_id, message)]
    row.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(row)
    logger.info("Carpool response added", extra={"user_id": responder_id, "request_id": request_id})
    return row
