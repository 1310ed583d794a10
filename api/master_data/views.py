# api/master_data/views.py
"""
Reference data endpoints: sites, categories and departments.

The three tables share one lifecycle (CRUD plus manual ordering), so their
routers come from a single factory.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, OperatorUser
from core.schemas import MessageResponse
from db_models.site import Site
from db_models.category import Category
from db_models.department import Department
from .models import (
    SiteCreate,
    SiteUpdate,
    SiteRead,
    NamedCreate,
    NamedUpdate,
    NamedRead,
    MoveRequest,
)
from . import db_manager


def build_router(model, *, prefix: str, tag: str, create_schema, update_schema, read_schema) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    label = model.__name__.lower()

    @router.get(
        "",
        response_model=list[read_schema],
        summary=f"List {tag}",
    )
    async def list_endpoint(
        current_user: CurrentUser,
        db: AsyncSession = Depends(get_session),
    ):
        items = await db_manager.list_items(db, model)
        return [read_schema.model_validate(i) for i in items]

    @router.post(
        "",
        response_model=read_schema,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {label}",
    )
    async def create_endpoint(
        payload: create_schema,
        current_user: OperatorUser,
        db: AsyncSession = Depends(get_session),
    ):
        item = await db_manager.create_item(db, model, payload.model_dump())
        return read_schema.model_validate(item)

    @router.get(
        "/{item_id}",
        response_model=read_schema,
        summary=f"Get a {label} by ID",
    )
    async def get_endpoint(
        item_id: int,
        current_user: CurrentUser,
        db: AsyncSession = Depends(get_session),
    ):
        item = await db_manager.get_item_or_raise(db, model, item_id)
        return read_schema.model_validate(item)

    @router.put(
        "/{item_id}",
        response_model=read_schema,
        summary=f"Update a {label}",
    )
    async def update_endpoint(
        item_id: int,
        payload: update_schema,
        current_user: OperatorUser,
        db: AsyncSession = Depends(get_session),
    ):
        item = await db_manager.update_item(db, model, item_id, payload.model_dump(exclude_unset=True))
        return read_schema.model_validate(item)

    @router.delete(
        "/{item_id}",
        response_model=MessageResponse,
        summary=f"Delete a {label}",
    )
    async def delete_endpoint(
        item_id: int,
        current_user: OperatorUser,
        db: AsyncSession = Depends(get_session),
    ):
        """Fails with 409 while any asset still references the row."""
        await db_manager.delete_item(db, model, item_id)
        return MessageResponse(message=f"{model.__name__} deleted successfully")

    @router.post(
        "/{item_id}/move",
        response_model=read_schema,
        summary=f"Move a {label} up or down in display order",
    )
    async def move_endpoint(
        item_id: int,
        payload: MoveRequest,
        current_user: OperatorUser,
        db: AsyncSession = Depends(get_session),
    ):
        item = await db_manager.move_item(db, model, item_id, payload.direction)
        return read_schema.model_validate(item)

    return router


sites_router = build_router(
    Site,
    prefix="/sites",
    tag="sites",
    create_schema=SiteCreate,
    update_schema=SiteUpdate,
    read_schema=SiteRead,
)
categories_router = build_router(
    Category,
    prefix="/categories",
    tag="categories",
    create_schema=NamedCreate,
    update_schema=NamedUpdate,
    read_schema=NamedRead,
)
departments_router = build_router(
    Department,
    prefix="/departments",
    tag="departments",
    create_schema=NamedCreate,
    update_schema=NamedUpdate,
    read_schema=NamedRead,
)
