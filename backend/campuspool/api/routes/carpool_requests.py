"""Carpool Request Routes — feed, post, edit, delete, respond.

Invariants:
    - Creation is gated by the composite carpool-request validator (schema layer)
    - Edit/delete are owner-only (service layer raises 403)
    - Every response body is the enriched feed item
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campuspool.api.dependencies import get_current_user_id
from campuspool.infrastructure.database import get_db
from campuspool.schemas.carpool import (
    CarpoolRequestCreate, CarpoolRequestOut, CarpoolRequestUpdate, RespondRequest,
)
from campuspool.services import carpool_feed

router = APIRouter(prefix="/api/v1/carpool-requests", tags=["carpool-requests"])


@router.get("", response_model=list[CarpoolRequestOut])
async def list_requests(
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await carpool_feed.list_feed(db)


@router.post("", response_model=CarpoolRequestOut, status_code=status.HTTP_201_CREATED)
async def create_request(
    body: CarpoolRequestCreate,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    row = await carpool_feed.create_request(db, viewer_id, body)
    return await carpool_feed.project_one(db, row)


@router.put("/{request_id}", response_model=CarpoolRequestOut)
async def update_request(
    request_id: str,
    body: CarpoolRequestUpdate,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    row = await carpool_feed.update_request(db, request_id, viewer_id, body)
    return await carpool_feed.project_one(db, row)


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: str,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await carpool_feed.delete_request(db, request_id, viewer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{request_id}/respond", response_model=CarpoolRequestOut,
    status_code=status.HTTP_201_CREATED,
)
async def respond_to_request(
    request_id: str,
    body: RespondRequest | None = None,
    viewer_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    message = body.message if body else None
    row = await carpool_feed.respond_to_request(db, request_id, viewer_id, message)
    return await carpool_feed.project_one(db, row)
