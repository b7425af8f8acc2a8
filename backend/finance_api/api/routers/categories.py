from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException

from finance_api.api.deps import get_category_service, get_current_user
from finance_api.core.datetime_utils import as_utc
from finance_api.domain.entities import Category, User
from finance_api.schemas.category import (
    CategoryActive,
    CategoryCreate,
    CategoryNodeOut,
    CategoryOut,
    CategoryUpdate,
)
from finance_api.services.categories import CategoryNode, CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def _to_out(row: Category) -> CategoryOut:
    return CategoryOut(
        id=row.id,
        name=row.name,
        description=row.description,
        color=row.color,
        parentCategoryId=row.parent_category_id,
        isActive=row.is_active,
        createdAt=as_utc(row.created_at),
        updatedAt=as_utc(row.updated_at),
    )


def _to_node_out(node: CategoryNode) -> CategoryNodeOut:
    row = node.category
    return CategoryNodeOut(
        **_to_out(row).model_dump(),
        isLeaf=node.is_leaf,
        children=[_to_node_out(c) for c in node.children],
    )


@router.get("", response_model=list[CategoryOut])
def list_categories(
    activeOnly: bool = False,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> list[CategoryOut]:
    rows: list[CategoryOut] = []

    def walk(nodes: list[CategoryNode]) -> None:
        for n in nodes:
            rows.append(_to_out(n.category))
            walk(n.children)

    walk(service.tree(active_only=activeOnly))
    return rows


@router.get("/tree", response_model=list[CategoryNodeOut])
def get_category_tree(
    activeOnly: bool = False,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> list[CategoryNodeOut]:
    return [_to_node_out(n) for n in service.tree(active_only=activeOnly)]


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> CategoryOut:
    row = service.create(
        payload.name,
        description=payload.description,
        color=payload.color,
        parent_category_id=payload.parentCategoryId,
    )
    return _to_out(row)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> CategoryOut:
    row = service.get(category_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return _to_out(row)


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> CategoryOut:
    row = service.rename(category_id, payload.name, description=payload.description, color=payload.color)
    return _to_out(row)


@router.patch("/{category_id}/active", response_model=CategoryOut)
def set_category_active(
    category_id: uuid.UUID,
    payload: CategoryActive,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> CategoryOut:
    return _to_out(service.set_active(category_id, payload.isActive))


@router.delete("/{category_id}")
def delete_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
    current_user: User = Depends(get_current_user),
) -> dict:
    service.delete(category_id)
    return {"ok": True}
