from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from finance_api.domain.entities import Category
from finance_api.domain.errors import conflict, not_found, validation_error
from finance_api.repositories.base import CategoryStore

logger = logging.getLogger(__name__)


@dataclass
class CategoryNode:
    category: Category
    children: list["CategoryNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children


def build_tree(rows: list[Category]) -> list[CategoryNode]:
    nodes = {r.id: CategoryNode(r) for r in rows}

    roots: list[CategoryNode] = []
    for r in rows:
        node = nodes[r.id]
        if r.parent_category_id and r.parent_category_id in nodes:
            nodes[r.parent_category_id].children.append(node)
        else:
            roots.append(node)

    def finalize(n: CategoryNode) -> None:
        n.children.sort(key=lambda x: (x.category.name.lower(), str(x.category.id)))
        for c in n.children:
            finalize(c)

    roots.sort(key=lambda x: (x.category.name.lower(), str(x.category.id)))
    for root in roots:
        finalize(root)

    return roots


class CategoryService:
    def __init__(self, categories: CategoryStore):
        self.categories = categories

    def _require(self, category_id: uuid.UUID) -> Category:
        category = self.categories.get_by_id(category_id)
        if category is None:
            raise not_found("Category", category_id)
        return category

    def create(
        self,
        name: str,
        description: str | None = None,
        color: str | None = None,
        parent_category_id: uuid.UUID | None = None,
    ) -> Category:
        if parent_category_id is not None:
            parent = self.categories.get_by_id(parent_category_id)
            if not parent:
                raise validation_error("InvalidParent", "Invalid parentCategoryId", "parentCategoryId")
            if not parent.is_active:
                raise validation_error("InvalidParent", "Parent category is inactive", "parentCategoryId")

        category = Category.create(name, description, color, parent_category_id)
        self.categories.add(category)

        logger.info("Created category %s (%s)", category.id, category.name)
        return category

    def get(self, category_id: uuid.UUID) -> Category | None:
        return self.categories.get_by_id(category_id)

    def tree(self, active_only: bool = False) -> list[CategoryNode]:
        rows = self.categories.list_all()
        if active_only:
            rows = [r for r in rows if r.is_active]
        return build_tree(rows)

    def rename(
        self,
        category_id: uuid.UUID,
        name: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Category:
        category = self._require(category_id)
        category.rename(name, description, color)
        self.categories.update(category)
        return category

    def set_active(self, category_id: uuid.UUID, active: bool) -> Category:
        category = self._require(category_id)
        category.activate(active)
        self.categories.update(category)

        logger.info("Category %s is now %s", category.id, "active" if active else "inactive")
        return category

    def delete(self, category_id: uuid.UUID) -> None:
        self._require(category_id)

        if self.categories.has_children(category_id):
            raise conflict("CategoryInUse", "Cannot delete: category has subcategories")
        if self.categories.has_transactions(category_id):
            raise conflict("CategoryInUse", "Cannot delete: category has transactions")

        self.categories.delete(category_id)
        logger.info("Deleted category %s", category_id)
