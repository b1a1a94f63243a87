"""Workload configuration models and semantic validation."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlatformSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    core_count: int = Field(ge=1)


class JobSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: int = Field(ge=0)
    arrival: int = Field(ge=0)
    run_time: int = Field(ge=1)
    priority: int = 0


class SchedulerParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantum: Optional[int] = Field(default=None, gt=0)


class SchedulerSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    params: SchedulerParams = Field(default_factory=SchedulerParams)


class SimSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    until: Optional[int] = Field(default=None, gt=0)


class WorkloadSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str
    platform: PlatformSpec
    scheduler: SchedulerSpec
    jobs: list[JobSpec] = Field(min_length=1)
    sim: SimSpec = Field(default_factory=SimSpec)

    @model_validator(mode="after")
    def validate_jobs(self) -> "WorkloadSpec":
        job_ids = [job.id for job in self.jobs]
        if len(job_ids) != len(set(job_ids)):
            raise ValueError("duplicate jobs.id")
        return self
