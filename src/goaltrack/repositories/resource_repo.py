"""Resource repository and the storage bucket behind file resources."""

import logging
import uuid

from supabase import AsyncClient

from goaltrack.backend.client import STORAGE_ERRORS, Buckets, Tables
from goaltrack.errors.exceptions import BackendError
from goaltrack.models.enums import ResourceType
from goaltrack.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def resource_type_for(mime_type: str | None) -> ResourceType:
    mime_type = mime_type or ""
    if mime_type.startswith("image/"):
        return ResourceType.IMAGE
    if mime_type.startswith("video/"):
        return ResourceType.VIDEO
    if mime_type.startswith("application/pdf"):
        return ResourceType.DOCUMENT
    return ResourceType.FILE


def is_stored_file(link: str | None) -> bool:
    """Links are URLs; anything else is a path inside the resources bucket."""
    return bool(link) and not link.startswith("http")


class ResourceFiles:
    """Objects in the resources bucket, stored under ``<organization_id>/<uuid>``."""

    def __init__(self, client: AsyncClient, bucket: str = Buckets.RESOURCES):
        self.bucket_name = bucket
        self.bucket = client.storage.from_(bucket)

    async def upload(self, organization_id: str, content: bytes, content_type: str | None) -> str:
        path = f"{organization_id}/{uuid.uuid4()}"
        try:
            result = await self.bucket.upload(
                path, content, {"content-type": content_type or DEFAULT_CONTENT_TYPE}
            )
        except STORAGE_ERRORS as exc:
            logger.warning("upload to %s failed: %s", self.bucket_name, exc)
            raise BackendError.wrap("upload resource file", exc) from exc
        return result.path

    async def remove(self, path: str) -> None:
        try:
            await self.bucket.remove([path])
        except STORAGE_ERRORS as exc:
            logger.warning("removal of %s from %s failed: %s", path, self.bucket_name, exc)
            raise BackendError.wrap("remove resource file", exc) from exc


class ResourceRepository(BaseRepository):
    entity = "resource"

    def __init__(self, client: AsyncClient):
        super().__init__(client, Tables.RESOURCES)

    @property
    def files(self) -> ResourceFiles:
        return ResourceFiles(self.client)

    async def get(self, resource_id: str) -> dict | None:
        return await self.get_by_id(resource_id)

    async def list_by_organization(self, organization_id: str) -> list[dict]:
        return await self.list_by_field("organization_id", organization_id)

    async def list_for_target(self, target_type: str, target_id: str) -> list[dict]:
        builder = (
            self.query()
            .select("*")
            .eq("target_type", target_type)
            .eq("target_id", target_id)
            .order("created_at", desc=True)
        )
        return await self.run("fetch resources", builder) or []

    async def upload(
        self,
        *,
        organization_id: str,
        target_type: str,
        target_id: str,
        creator_id: str,
        filename: str,
        content: bytes,
        content_type: str | None,
        title: str | None = None,
        tags: list[str] | None = None,
        visibility: str = "team",
    ) -> dict:
        """Store the file, then record it; the object is removed again if the insert fails."""
        files = self.files
        path = await files.upload(organization_id, content, content_type)
        values = {
            "title": title or filename,
            "type": str(resource_type_for(content_type)),
            "target_type": target_type,
            "target_id": target_id,
            "link": path,
            "size": len(content),
            "mime_type": content_type or DEFAULT_CONTENT_TYPE,
            "tags": tags or [],
            "visibility": visibility,
            "creator_id": creator_id,
            "organization_id": organization_id,
            "metadata": {"original_name": filename},
        }
        try:
            return await self.create(values)
        except BackendError:
            await files.remove(path)
            raise

    async def delete_with_file(self, resource: dict) -> None:
        if is_stored_file(resource.get("link")):
            await self.files.remove(resource["link"])
        await self.delete(resource["id"])
