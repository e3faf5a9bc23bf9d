from fastapi import APIRouter, Depends, Path, Request

from app.core.sql import MAX_INT
from app.core.store import Store, get_store
from app.crud import job as job_crud
from app.schemas.job import JobCreate, JobUpdate, JobEnvelope, JobListResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreate,
    store: Store = Depends(get_store)
):
    """
    Create a job for an existing company.

    Returns 400 if the company does not exist or already lists a job
    with the same title.
    """
    job = job_crud.create(store, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("/", response_model=JobListResponse)
def list_jobs(request: Request, store: Store = Depends(get_store)):
    """
    List jobs ordered by title.

    Optional query filters:
    - title: case-insensitive substring of the job title
    - minSalary: inclusive lower salary bound
    - hasEquity: true for jobs with non-zero equity, false for jobs without
    """
    jobs = job_crud.find_all(store, dict(request.query_params))
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int = Path(..., le=MAX_INT), store: Store = Depends(get_store)):
    """
    Retrieve a job by ID.
    """
    return {"job": job_crud.get(store, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    request: JobUpdate,
    job_id: int = Path(..., le=MAX_INT),
    store: Store = Depends(get_store)
):
    """
    Partially update a job. Title, salary and equity may change; the company may not.
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"job": job_crud.update(store, job_id, data)}


@router.delete("/{job_id}")
def delete_job(job_id: int = Path(..., le=MAX_INT), store: Store = Depends(get_store)):
    """
    Delete a job by ID.
    """
    job_crud.remove(store, job_id)
    return {"deleted": job_id}
