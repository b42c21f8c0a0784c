"""Resource list filtering and summary figures."""

from pydantic import BaseModel

from goaltrack.models.enums import ResourceType
from goaltrack.models.resource import Resource, ResourceFilters


def matches(resource: Resource, filters: ResourceFilters) -> bool:
    if filters.type is not None and resource.type != filters.type:
        return False
    if filters.search:
        needle = filters.search.lower()
        haystacks = [resource.title.lower(), (resource.description or "").lower()]
        if not any(needle in h for h in haystacks):
            return False
    if not all(tag in resource.tags for tag in filters.tags):
        return False
    if filters.milestone_id and resource.milestone_id != filters.milestone_id:
        return False
    if filters.task_id and resource.task_id != filters.task_id:
        return False
    if filters.added_by and resource.creator_id != filters.added_by:
        return False
    return True


def filter_resources(resources: list[Resource], filters: ResourceFilters) -> list[Resource]:
    return [r for r in resources if matches(r, filters)]


class ResourceStats(BaseModel):
    total: int
    by_type: dict[str, int]
    total_size: int
    unique_tags_count: int
    with_relations: int


def resource_stats(resources: list[Resource]) -> ResourceStats:
    by_type = {str(t): 0 for t in ResourceType}
    for r in resources:
        by_type[str(r.type)] += 1
    tags = {tag for r in resources for tag in r.tags}
    return ResourceStats(
        total=len(resources),
        by_type=by_type,
        total_size=sum(r.size or 0 for r in resources),
        unique_tags_count=len(tags),
        with_relations=sum(1 for r in resources if r.milestone_id or r.task_id),
    )
