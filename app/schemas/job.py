from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """
    Schema for partially updating a job.

    Only title, salary and equity can change; id and companyHandle are
    rejected as unknown fields.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        # Absent is fine; an explicit null would clear a NOT NULL column
        if v is None:
            raise ValueError("title may not be null")
        return v


class JobSearchFilter(BaseModel):
    """Query string filters for listing jobs"""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class _ResponseModel(BaseModel):
    """Responses are emitted with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CompanyResponse(_ResponseModel):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobResponse(_ResponseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str


class JobListItem(JobResponse):
    company_name: Optional[str] = None


class JobDetailResponse(_ResponseModel):
    """Single job with its company nested in place of companyHandle"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company: Optional[CompanyResponse] = None


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetailResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobListItem]


class JobDeletedResponse(BaseModel):
    deleted: int
