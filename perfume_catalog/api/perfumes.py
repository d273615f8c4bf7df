"""Perfume catalog CRUD and search API endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from perfume_catalog.core.db import get_session
from perfume_catalog.schemas.perfume import (
    MessageResponse,
    PerfumeListResponse,
    PerfumeMutationResponse,
    PerfumeResponse,
)
from perfume_catalog.services.catalog_service import CatalogService
from perfume_catalog.services.perfume_repository import PerfumeRepository

router = APIRouter(prefix="/perfumes", tags=["perfumes"])


def get_perfume_repository(session: Session = Depends(get_session)) -> PerfumeRepository:
    """Dependency to get PerfumeRepository instance."""
    return PerfumeRepository(session)


def get_catalog_service(repository: PerfumeRepository = Depends(get_perfume_repository)) -> CatalogService:
    """Dependency to get CatalogService instance."""
    return CatalogService(repository)


@router.get(
    "",
    response_model=PerfumeListResponse,
    status_code=status.HTTP_200_OK,
    summary="List or search perfumes",
    description=(
        "Return every available perfume, newest first. When `search` is given, only perfumes whose "
        "name, brand, description or category contain it (case-insensitive) are returned."
    ),
)
async def list_perfumes(
    search: str | None = Query(default=None, description="Substring to look for"),
    service: CatalogService = Depends(get_catalog_service),
) -> PerfumeListResponse:
    perfumes = service.list_perfumes(search)
    return PerfumeListResponse(data=perfumes, count=len(perfumes))


@router.get(
    "/{perfume_id}",
    response_model=PerfumeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get perfume by ID",
)
async def get_perfume(
    perfume_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> PerfumeResponse:
    """
    Get an available perfume by ID.

    Raises:
        InvalidIdentifier: 400 if the ID is not a positive integer
        PerfumeNotFound: 404 if there is no available perfume with that ID
    """
    return PerfumeResponse(data=service.get_perfume(perfume_id))


@router.post(
    "",
    response_model=PerfumeMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new perfume",
)
async def create_perfume(
    payload: Any = Body(default=None),
    service: CatalogService = Depends(get_catalog_service),
) -> PerfumeMutationResponse:
    """
    Create a new perfume.

    Raises:
        PerfumeValidationError: 400 with one detail entry per violated constraint
    """
    created = service.create_perfume(payload)
    return PerfumeMutationResponse(message="Perfume created successfully", data=created)


@router.put(
    "/{perfume_id}",
    response_model=PerfumeMutationResponse,
    status_code=status.HTTP_200_OK,
    summary="Replace a perfume (full update)",
    description=(
        "Overwrite every field of a perfume. Optional fields missing from the body are reset to their "
        "defaults rather than keeping the stored values."
    ),
)
async def update_perfume(
    perfume_id: str,
    payload: Any = Body(default=None),
    service: CatalogService = Depends(get_catalog_service),
) -> PerfumeMutationResponse:
    updated = service.update_perfume(perfume_id, payload)
    return PerfumeMutationResponse(message="Perfume updated successfully", data=updated)


@router.delete(
    "/{perfume_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a perfume",
    description="Soft delete: the perfume is flagged unavailable and disappears from every listing.",
)
async def delete_perfume(
    perfume_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    service.delete_perfume(perfume_id)
    return MessageResponse(message="Perfume deleted successfully")
