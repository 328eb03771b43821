"""Books Routes — HTTP surface for the book resource.

Invariants:
    - Routes contain no business logic: parse the request, call BookResource, wrap the result
    - Request bodies reach the resource as untyped dicts; typing happens in the validator
    - Query string is passed through as the list filter

Design Decisions:
    - dict body (not BookFields) so field errors are worded by validate_book,
      not by FastAPI (ADR: one error voice for clients)
    - BookResource built per request from the request-scoped session
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.infrastructure.book_repository import SqlAlchemyBookRepository
from bookshelf.infrastructure.database import get_db
from bookshelf.services.book_resource import BookResource, ResourceResponse

router = APIRouter(prefix="/api/books", tags=["books"])


def get_book_resource(db: AsyncSession = Depends(get_db)) -> BookResource:
    return BookResource(SqlAlchemyBookRepository(db))


def _respond(result: ResourceResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.get("")
async def list_books(
    request: Request, resource: BookResource = Depends(get_book_resource),
):
    """List books matching the query-string filter."""
    return _respond(await resource.list_books(dict(request.query_params)))


@router.get("/{book_id}")
async def get_book(
    book_id: str, resource: BookResource = Depends(get_book_resource),
):
    return _respond(await resource.get_book(book_id))


@router.post("")
async def create_book(
    candidate: dict[str, Any] = Body(...),
    resource: BookResource = Depends(get_book_resource),
):
    return _respond(await resource.create_book(candidate))


@router.put("/{book_id}")
async def update_book(
    book_id: str,
    candidate: dict[str, Any] = Body(...),
    resource: BookResource = Depends(get_book_resource),
):
    """Replace all five fields of an existing book."""
    return _respond(await resource.update_book(book_id, candidate))


@router.delete("/{book_id}")
async def delete_book(
    book_id: str, resource: BookResource = Depends(get_book_resource),
):
    return _respond(await resource.delete_book(book_id))
