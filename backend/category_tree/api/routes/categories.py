"""Category Routes — HTTP mapping of the category service contract.

Invariants:
    - User input is validated by Pydantic before reaching the route handler
    - Domain errors (NotFoundError, ValidationError, TransactionError) propagate
      to the global CategoryTreeError handler; routes never catch them
    - One CategoryService per request, bound to the request's DB session

Design Decisions:
    - /roots declared before /{category_id}: static segments win over the UUID param
    - DELETE returns 204: the subtree is re-linked synchronously inside the request
    - GET "" bypasses response_model validation: the forest is encoded by
      ForestJSONResponse, which walks the nesting with an explicit stack
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from category_tree.api.routes.tree_response import ForestJSONResponse
from category_tree.infrastructure.database import get_db
from category_tree.schemas.category import (
    CategoryCreate, CategoryForestResponse, CategoryResponse, CategoryUpdate,
)
from category_tree.services.category_service import CategoryService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


@router.post(
    "", response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    """Create a root category, or a child when parent_id is given."""
    return await service.create_category(body.name, body.parent_id, body.status)


@router.get(
    "", response_model=None, response_class=ForestJSONResponse,
    responses={200: {"model": CategoryForestResponse}},
)
async def list_tree(service: CategoryService = Depends(get_category_service)):
    """Whole category forest, roots and children ordered by name."""
    return ForestJSONResponse(await service.list_tree())


@router.get("/roots", response_model=list[CategoryResponse])
async def list_roots(service: CategoryService = Depends(get_category_service)):
    return await service.list_roots()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    return await service.get_category(category_id)


@router.get("/{category_id}/children", response_model=list[CategoryResponse])
async def list_children(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    return await service.list_children(category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Rename and/or change status. Deactivation cascades to the subtree."""
    return await service.update_category(
        category_id, name=body.name, status=body.status,
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category and hand its children to its former parent."""
    await service.delete_category(category_id)
