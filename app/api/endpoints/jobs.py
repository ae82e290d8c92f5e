import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.validation import validate_or_raise
from app.crud import job as job_crud
from app.schemas.job import (
    JobDeletedResponse,
    JobDetailEnvelope,
    JobEnvelope,
    JobListEnvelope,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)

# Ids are BIGINT-sized; anything wider is a 400 rather than a driver overflow
JobId = Path(..., ge=-(2**63), le=2**63 - 1)


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs ordered by title, with optional filters.

    Query parameters:
        title: Case-insensitive substring of the job title
        minSalary: Only jobs paying at least this much
        hasEquity: When true, only jobs offering non-zero equity
    """
    criteria = validate_or_raise("jobSearch", dict(request.query_params))
    jobs = job_crud.find_all(db, criteria)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int = JobId, db: Session = Depends(get_db)):
    """
    Retrieve a job by ID, with its company nested under `company`.
    """
    job = job_crud.get(db, job_id)
    return {"job": job}


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_user)
):
    """
    Create a job. Admin only.

    Body: {title, salary, equity, companyHandle}
    """
    job_data = validate_or_raise("jobNew", payload)

    try:
        job = job_crud.create(db, job_data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error creating job for company {job_data.company_handle}")
        raise

    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int = JobId,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_user)
):
    """
    Update any of title, salary and equity on a job. Admin only.
    """
    update_data = validate_or_raise("jobUpdate", payload).model_dump(exclude_unset=True)

    try:
        job = job_crud.update(db, job_id, update_data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error updating job {job_id}")
        raise

    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int = JobId,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_user)
):
    """
    Delete a job by ID. Admin only.
    """
    try:
        job_crud.remove(db, job_id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Error deleting job {job_id}")
        raise

    return {"deleted": job_id}
