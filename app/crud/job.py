"""
CRUD operations for jobs.

Statements are written as parameterized SQL and issued through SQLAlchemy
text(); the WHERE and SET fragments for searches and partial updates come
from app.core.sql. Rows are returned as plain dicts using the API's
camelCase keys.
"""

from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidArgumentError, NotFoundError
from app.core.logging_config import get_logger
from app.core.sql import compile_filter, compile_partial_update, dialect_for
from app.schemas.job import JobCreateRequest, JobSearchFilter

logger = get_logger(__name__)

# Fields that may be changed through update(), logical name -> column name
JOB_COLUMNS: Dict[str, str] = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}

_JOB_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'

# API key -> column alias selected by get()
_COMPANY_FIELDS: Dict[str, str] = {
    "handle": "company_handle",
    "name": "company_name",
    "description": "company_description",
    "numEmployees": "company_num_employees",
    "logoUrl": "company_logo_url",
}


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Insert a new job.

    No existence check is made on the company; an unknown handle fails on
    the foreign key and the database error propagates unchanged.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, companyHandle}
    """
    result = db.execute(
        text(
            "INSERT INTO jobs (title, salary, equity, company_handle) "
            "VALUES (:title, :salary, :equity, :company_handle) "
            f"RETURNING {_JOB_RETURNING}"
        ),
        {
            "title": job_data.title,
            "salary": job_data.salary,
            "equity": job_data.equity,
            "company_handle": job_data.company_handle,
        }
    )
    job = dict(result.mappings().one())
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


def find_all(db: Session, criteria: Optional[JobSearchFilter] = None) -> List[Dict[str, Any]]:
    """
    List jobs matching the optional search criteria, ordered by title.

    Jobs whose company row is missing are still listed, with companyName None.

    Args:
        db: Database session
        criteria: Optional title / min_salary / has_equity filters

    Returns:
        List of {id, title, salary, equity, companyHandle, companyName}
    """
    dialect = dialect_for(db)
    filters = criteria.model_dump(exclude_none=True) if criteria else {}
    where, values = compile_filter(dialect=dialect, **filters)

    query = f"""
        SELECT j.id,
               j.title,
               j.salary,
               j.equity,
               j.company_handle AS "companyHandle",
               c.name AS "companyName"
        FROM jobs AS j
            LEFT JOIN companies AS c ON c.handle = j.company_handle
        {where}
        ORDER BY title
    """

    logger.debug(f"Listing jobs {where or '(no filters)'} with {values}")
    result = db.execute(text(query), dialect.bind_params(values))
    return [dict(row) for row in result.mappings().all()]


def nest_company(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shape a joined job/company row into {id, title, salary, equity, company}.

    company is None when the join found no company row.
    """
    job = {key: row[key] for key in ("id", "title", "salary", "equity")}

    if row["company_handle"] is None:
        job["company"] = None
    else:
        job["company"] = {key: row[column] for key, column in _COMPANY_FIELDS.items()}

    return job


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve one job with its company nested under "company".

    Raises:
        NotFoundError: If no job has this id
    """
    dialect = dialect_for(db)
    query = f"""
        SELECT j.id,
               j.title,
               j.salary,
               j.equity,
               c.handle AS company_handle,
               c.name AS company_name,
               c.description AS company_description,
               c.num_employees AS company_num_employees,
               c.logo_url AS company_logo_url
        FROM jobs AS j
            LEFT JOIN companies AS c ON c.handle = j.company_handle
        WHERE j.id = {dialect.placeholder(1)}
    """

    logger.debug(f"Fetching job {job_id}")
    row = db.execute(text(query), dialect.bind_params([job_id])).mappings().first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    return nest_company(row)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job with the fields present in `data`.

    Only title, salary and equity can be changed. Fields absent from `data`
    are left untouched.

    Args:
        db: Database session
        job_id: Job ID to update
        data: Logical field name -> new value, at least one entry

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        InvalidArgumentError: If data is empty or names a non-updatable field
        NotFoundError: If no job has this id
    """
    unknown = [field for field in data if field not in JOB_COLUMNS]
    if unknown:
        raise InvalidArgumentError(f"Cannot update field(s): {', '.join(unknown)}")

    dialect = dialect_for(db)
    set_clause, values = compile_partial_update(data, JOB_COLUMNS, dialect)
    id_placeholder = dialect.placeholder(len(values) + 1)

    query = f"""
        UPDATE jobs
        SET {set_clause}
        WHERE id = {id_placeholder}
        RETURNING {_JOB_RETURNING}
    """

    row = db.execute(text(query), dialect.bind_params(values + [job_id])).mappings().first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    job = dict(row)
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    dialect = dialect_for(db)
    query = f"DELETE FROM jobs WHERE id = {dialect.placeholder(1)} RETURNING id"

    row = db.execute(text(query), dialect.bind_params([job_id])).first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
