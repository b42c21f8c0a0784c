"""Resource routes: listing with filters, stats, file uploads and metadata CRUD."""

from typing import Annotated

from fastapi import APIRouter, Form, Query, UploadFile

from goaltrack.config import settings
from goaltrack.dependencies import Access, Backend, CurrentUser
from goaltrack.errors.exceptions import ValidationError
from goaltrack.models.enums import AssignableType, ResourceType
from goaltrack.models.resource import Resource, ResourceCreate, ResourceFilters, ResourceUpdate
from goaltrack.repositories.resource_repo import ResourceRepository
from goaltrack.services.access import MANAGERS
from goaltrack.services.calculations.resource_stats import filter_resources, resource_stats

router = APIRouter(tags=["Resources"])

TARGET_TYPES = r"^(workspace|goal|milestone|task)$"
VISIBILITIES = r"^(public|private|team|organization)$"


@router.get("/organizations/{organization_id}/resources")
async def list_resources(
    organization_id: str,
    client: Backend,
    user: CurrentUser,
    access: Access,
    type: ResourceType | None = None,
    search: str | None = None,
    tags: Annotated[list[str] | None, Query()] = None,
    milestone_id: str | None = None,
    task_id: str | None = None,
    added_by: str | None = None,
) -> list[dict]:
    await access.check(AssignableType.ORGANIZATION, organization_id)
    filters = ResourceFilters(
        type=type,
        search=search,
        tags=tags or [],
        milestone_id=milestone_id,
        task_id=task_id,
        added_by=added_by,
    )
    rows = await ResourceRepository(client).list_by_organization(organization_id)
    resources = filter_resources([Resource.model_validate(r) for r in rows], filters)
    return [r.model_dump(mode="json") for r in resources]


@router.get("/organizations/{organization_id}/resources/stats")
async def get_resource_stats(
    organization_id: str, client: Backend, user: CurrentUser, access: Access
) -> dict:
    await access.check(AssignableType.ORGANIZATION, organization_id)
    rows = await ResourceRepository(client).list_by_organization(organization_id)
    return resource_stats([Resource.model_validate(r) for r in rows]).model_dump()


@router.get("/targets/{target_type}/{target_id}/resources")
async def list_target_resources(
    target_type: AssignableType, target_id: str, client: Backend, user: CurrentUser, access: Access
) -> list[dict]:
    await access.check(target_type, target_id)
    return await ResourceRepository(client).list_for_target(str(target_type), target_id)


@router.post("/resources", status_code=201)
async def create_resource(body: ResourceCreate, client: Backend, user: CurrentUser, access: Access) -> dict:
    """Register a link or an already-uploaded file against a workspace, goal, milestone or task."""
    await access.check(body.target_type, body.target_id)
    values = {**body.model_dump(mode="json", exclude_none=True), "creator_id": user["id"]}
    return await ResourceRepository(client).create(values)


@router.post("/resources/upload", status_code=201)
async def upload_resource(
    file: UploadFile,
    organization_id: Annotated[str, Form()],
    target_type: Annotated[str, Form(pattern=TARGET_TYPES)],
    target_id: Annotated[str, Form()],
    client: Backend,
    user: CurrentUser,
    access: Access,
    title: Annotated[str | None, Form(max_length=300)] = None,
    tags: Annotated[list[str] | None, Form()] = None,
    visibility: Annotated[str, Form(pattern=VISIBILITIES)] = "team",
) -> dict:
    """Upload a file into the resources bucket and record it against its target."""
    await access.check(target_type, target_id)
    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise ValidationError(
            "File exceeds the upload size limit",
            {"size": len(content), "max_bytes": settings.max_upload_bytes},
        )
    return await ResourceRepository(client).upload(
        organization_id=organization_id,
        target_type=target_type,
        target_id=target_id,
        creator_id=user["id"],
        filename=file.filename or "upload",
        content=content,
        content_type=file.content_type,
        title=title,
        tags=tags,
        visibility=visibility,
    )


@router.get("/resources/{resource_id}")
async def get_resource(resource_id: str, client: Backend, user: CurrentUser) -> dict:
    return await ResourceRepository(client).get_or_404(resource_id)


@router.patch("/resources/{resource_id}")
async def update_resource(
    resource_id: str, body: ResourceUpdate, client: Backend, user: CurrentUser, access: Access
) -> dict:
    repo = ResourceRepository(client)
    resource = await repo.get_or_404(resource_id)
    await access.check(resource["target_type"], resource["target_id"], MANAGERS)
    return await repo.update(resource_id, body.model_dump(mode="json", exclude_unset=True))


@router.delete("/resources/{resource_id}", status_code=204)
async def delete_resource(resource_id: str, client: Backend, user: CurrentUser, access: Access) -> None:
    repo = ResourceRepository(client)
    resource = await repo.get_or_404(resource_id)
    await access.check(resource["target_type"], resource["target_id"], MANAGERS)
    await repo.delete_with_file(resource)
