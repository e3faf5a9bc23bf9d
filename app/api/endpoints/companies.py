"""
API endpoints for companies.

Thin wrappers over app.crud.company; errors raised there are turned into
HTTP responses by the AppError handler registered in main.py.
"""

from fastapi import APIRouter, Depends, Request

from app.core.store import Store, get_store
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreate,
    store: Store = Depends(get_store)
):
    """
    Create a company.

    Returns 400 if the handle is already taken.
    """
    company = company_crud.create(store, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("/", response_model=CompanyListResponse)
def list_companies(request: Request, store: Store = Depends(get_store)):
    """
    List companies ordered by name.

    Optional query filters:
    - name: case-insensitive substring of the company name
    - minEmployees / maxEmployees: inclusive employee count range

    Any other query parameter, or minEmployees > maxEmployees, is a 400.
    """
    companies = company_crud.find_all(store, dict(request.query_params))
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, store: Store = Depends(get_store)):
    """
    Retrieve a company with its jobs.
    """
    return {"company": company_crud.get(store, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdate,
    store: Store = Depends(get_store)
):
    """
    Partially update a company. Only fields present in the body change.
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"company": company_crud.update(store, handle, data)}


@router.delete("/{handle}")
def delete_company(handle: str, store: Store = Depends(get_store)):
    """
    Delete a company and its jobs.
    """
    company_crud.remove(store, handle)
    return {"deleted": handle}
