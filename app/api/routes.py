from datetime import date
from functools import lru_cache
from typing import Callable, Dict, List, Optional
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from app.engine.allocator import allocate
from app.generators.mock_data import MockDataGenerator
from app.models.entities import Assignment, AssignmentStatus, Priority, Resource, SkillMatrix, Task
from app.utils.scoring import AllocationSummary, build_message, summarize
from app.storage.cache import AllocationCache
from app.config.settings import get_settings

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TaskDTO(CamelModel):
    id: str
    title: str = ""
    priority: Priority
    skills_needed: List[str] = Field(..., alias="skillsNeeded", min_length=1)
    story_points: int = Field(..., alias="storyPoints", gt=0)
    description: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def parse_priority(cls, v):
        """Accept "High", "high", "HIGH", ..."""
        return Priority.parse(v)

    @field_validator("skills_needed")
    @classmethod
    def validate_skills(cls, v: List[str]):
        if any(not s.strip() for s in v):
            raise ValueError("skill names must not be blank")
        return v

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            priority=self.priority,
            skills_needed=frozenset(self.skills_needed),
            story_points=self.story_points,
            description=self.description,
        )

    @classmethod
    def from_domain(cls, t: Task) -> "TaskDTO":
        return cls(
            id=t.id,
            title=t.title,
            priority=t.priority,
            skills_needed=sorted(t.skills_needed),
            story_points=t.story_points,
            description=t.description,
        )


class ResourceDTO(CamelModel):
    id: str
    name: str = ""
    availability: float = Field(1.0, ge=0.0, le=1.0)
    available_days: int = Field(0, alias="availableDays", ge=0)

    def to_domain(self) -> Resource:
        return Resource(
            id=self.id,
            name=self.name,
            availability=self.availability,
            available_days=self.available_days,
        )


class AssignedResourceDTO(ResourceDTO):
    skills: List[str] = []

    @classmethod
    def from_domain(cls, r: Resource, skill_matrix: SkillMatrix) -> "AssignedResourceDTO":
        return cls(
            id=r.id,
            name=r.name,
            availability=r.availability,
            available_days=r.available_days,
            skills=sorted(skill_matrix.get(r.id, ())),
        )


class AssignmentDTO(CamelModel):
    task: TaskDTO
    resource: Optional[AssignedResourceDTO] = None
    skill_match: float = Field(..., alias="skillMatch")
    status: AssignmentStatus

    @classmethod
    def from_domain(cls, a: Assignment, skill_matrix: SkillMatrix) -> "AssignmentDTO":
        resource = None if a.resource is None else AssignedResourceDTO.from_domain(a.resource, skill_matrix)
        return cls(
            task=TaskDTO.from_domain(a.task),
            resource=resource,
            skill_match=a.skill_match,
            status=a.status,
        )


class ResourceLoadDTO(CamelModel):
    resource_id: str = Field(..., alias="resourceId")
    capacity: int
    used: int
    remaining: int


class SummaryDTO(CamelModel):
    total: int
    assigned: int
    unassigned: int
    mean_skill_match: float = Field(..., alias="meanSkillMatch")
    loads: List[ResourceLoadDTO]

    @classmethod
    def from_domain(cls, s: AllocationSummary) -> "SummaryDTO":
        return cls(
            total=s.total,
            assigned=s.assigned,
            unassigned=s.unassigned,
            mean_skill_match=s.mean_skill_match,
            loads=[
                ResourceLoadDTO(
                    resource_id=load.resource_id, capacity=load.capacity, used=load.used, remaining=load.remaining
                )
                for load in s.loads
            ],
        )


class AllocateRequest(CamelModel):
    start_date: date = Field(..., alias="startDate")
    end_date: date = Field(..., alias="endDate")
    task_count: Optional[int] = Field(None, alias="taskCount", ge=0)
    resource_count: Optional[int] = Field(None, alias="resourceCount", ge=0)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def validate_range(self):
        """Start must precede end; counts must stay within configured limits."""
        if self.start_date >= self.end_date:
            raise ValueError("start date must be before end date")
        if self.task_count is not None and self.task_count > settings.max_task_count:
            raise ValueError(f"taskCount must be at most {settings.max_task_count}")
        if self.resource_count is not None and self.resource_count > settings.max_resource_count:
            raise ValueError(f"resourceCount must be at most {settings.max_resource_count}")
        return self


class CustomAllocateRequest(CamelModel):
    tasks: List[TaskDTO]
    resources: List[ResourceDTO]
    skill_matrix: Dict[str, List[str]] = Field(default_factory=dict, alias="skillMatrix")

    @model_validator(mode="after")
    def validate_ids(self):
        """Task and resource ids must be unique."""
        resource_ids = [r.id for r in self.resources]
        if len(set(resource_ids)) != len(resource_ids):
            raise ValueError("resource ids must be unique")
        task_ids = [t.id for t in self.tasks]
        if len(set(task_ids)) != len(task_ids):
            raise ValueError("task ids must be unique")
        return self

    def domain_skill_matrix(self) -> SkillMatrix:
        return {rid: frozenset(skills) for rid, skills in self.skill_matrix.items()}


class AllocationResponse(CamelModel):
    assignments: List[AssignmentDTO]
    message: str
    summary: Optional[SummaryDTO] = None
    cached: bool = False


def get_generator_factory() -> Callable[[Optional[int]], MockDataGenerator]:
    return MockDataGenerator


@lru_cache(maxsize=1)
def _shared_cache() -> AllocationCache:
    return AllocationCache()


def get_cache() -> Optional[AllocationCache]:
    if not settings.cache_enabled:
        return None
    return _shared_cache()


def _run(tasks: List[Task], resources: List[Resource], skill_matrix: SkillMatrix) -> AllocationResponse:
    assignments = allocate(tasks, resources, skill_matrix)
    summary = summarize(assignments, resources)
    message = build_message(summary)
    logger.info(f"Allocation complete: {message}")
    return AllocationResponse(
        assignments=[AssignmentDTO.from_domain(a, skill_matrix) for a in assignments],
        message=message,
        summary=SummaryDTO.from_domain(summary),
    )


def _cached(cache: Optional[AllocationCache], request_hash: str) -> Optional[AllocationResponse]:
    if cache is None:
        return None
    hit = cache.get(request_hash)
    if hit is None:
        return None
    try:
        response = AllocationResponse.model_validate(hit)
    except ValidationError as exc:
        logger.warning(f"Ignoring stale cache entry {request_hash}: {exc.error_count()} errors")
        return None
    logger.info("Cache hit")
    response.cached = True
    return response


def _store(cache: Optional[AllocationCache], request_hash: str, response: AllocationResponse) -> None:
    if cache is not None:
        cache.set(request_hash, response.model_dump(mode="json", by_alias=True))


@router.post("/allocate", response_model=AllocationResponse, summary="Allocate generated tasks for a date range")
def allocate_for_range(
    req: AllocateRequest,
    generator_factory: Callable[[Optional[int]], MockDataGenerator] = Depends(get_generator_factory),
    cache: Optional[AllocationCache] = Depends(get_cache),
):
    """
    Generate tasks, resources and a skill matrix, then allocate them.

    **Pipeline:**
    1. Validate the date range (start before end, both required)
    2. Generate input data (seeded when `seed` is given)
    3. Derive each resource's available days for the window
    4. Run the greedy allocator and summarize the result

    **Caching:** only seeded requests are deterministic, so only they are cached.

    **Error Handling:**
    - 422: Missing or invalid date range, counts out of bounds
    - 500: Data generation failed; body carries an empty assignment list and a message
    """
    task_count = settings.default_task_count if req.task_count is None else req.task_count
    resource_count = settings.default_resource_count if req.resource_count is None else req.resource_count
    logger.info(
        f"Allocate request: {req.start_date}..{req.end_date}, "
        f"{task_count} tasks, {resource_count} resources, seed={req.seed}"
    )

    request_hash = None
    if req.seed is not None:
        request_hash = AllocationCache.hash_request({
            "start": req.start_date, "end": req.end_date,
            "tasks": task_count, "resources": resource_count, "seed": req.seed,
        })
        hit = _cached(cache, request_hash)
        if hit is not None:
            return hit

    try:
        data = generator_factory(req.seed).generate(task_count, resource_count, req.start_date, req.end_date)
    except Exception as exc:
        logger.exception("Input generation failed")
        return JSONResponse(
            status_code=500,
            content={"assignments": [], "message": f"Allocation failed: {exc}"},
        )

    response = _run(data.tasks, data.resources, data.skill_matrix)
    if request_hash is not None:
        _store(cache, request_hash, response)
    return response


@router.post("/allocate/custom", response_model=AllocationResponse, summary="Allocate caller-supplied tasks")
def allocate_custom(
    req: CustomAllocateRequest,
    cache: Optional[AllocationCache] = Depends(get_cache),
):
    """
    Allocate explicit tasks and resources.

    Resources are scanned in the order given; `availableDays` is taken as each
    resource's starting capacity. Resources missing from `skillMatrix` own no
    skills and never receive tasks.
    """
    logger.info(f"Custom allocate request: {len(req.tasks)} tasks, {len(req.resources)} resources")

    request_hash = AllocationCache.hash_request(req.model_dump(mode="json", by_alias=True))
    hit = _cached(cache, request_hash)
    if hit is not None:
        return hit

    response = _run(
        [t.to_domain() for t in req.tasks],
        [r.to_domain() for r in req.resources],
        req.domain_skill_matrix(),
    )
    _store(cache, request_hash, response)
    return response
