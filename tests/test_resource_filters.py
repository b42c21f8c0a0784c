"""Tests for resource filtering and stats."""

from goaltrack.models.enums import ResourceType
from goaltrack.models.resource import Resource, ResourceFilters
from goaltrack.repositories.resource_repo import is_stored_file, resource_type_for
from goaltrack.services.calculations.resource_stats import filter_resources, resource_stats

ROWS = [
    {
        "id": "r1",
        "name": "Launch plan",
        "type": "document",
        "description": "Go-to-market steps",
        "tags": ["launch", "q3"],
        "milestone_id": "m1",
        "added_by": "u1",
        "size": 2048,
    },
    {
        "id": "r2",
        "title": "Pricing page",
        "type": "link",
        "url": "https://example.com/pricing",
        "tags": [{"id": "launch"}],
        "creator_id": "u2",
    },
    {
        "id": "r3",
        "title": "Logo",
        "type": "file",
        "tags": None,
        "task_id": "t9",
        "size": 512,
    },
]


def resources() -> list[Resource]:
    return [Resource.model_validate(r) for r in ROWS]


def test_row_aliases():
    r1, r2, _ = resources()
    assert r1.title == "Launch plan"
    assert r1.creator_id == "u1"
    assert r2.link == "https://example.com/pricing"
    assert r2.tags == ["launch"]


def test_no_filters_keeps_everything():
    assert len(filter_resources(resources(), ResourceFilters())) == 3


def test_filter_by_type_and_search():
    by_type = filter_resources(resources(), ResourceFilters(type=ResourceType.LINK))
    assert [r.id for r in by_type] == ["r2"]
    by_description = filter_resources(resources(), ResourceFilters(search="MARKET"))
    assert [r.id for r in by_description] == ["r1"]


def test_filter_by_tags_and_relations():
    tagged = filter_resources(resources(), ResourceFilters(tags=["launch"]))
    assert [r.id for r in tagged] == ["r1", "r2"]
    assert [r.id for r in filter_resources(resources(), ResourceFilters(tags=["launch", "q3"]))] == ["r1"]
    assert [r.id for r in filter_resources(resources(), ResourceFilters(task_id="t9"))] == ["r3"]
    assert [r.id for r in filter_resources(resources(), ResourceFilters(added_by="u2"))] == ["r2"]


def test_stats():
    stats = resource_stats(resources())
    assert stats.total == 3
    assert stats.by_type == {"file": 1, "link": 1, "document": 1, "image": 0, "video": 0}
    assert stats.total_size == 2560
    assert stats.unique_tags_count == 2
    assert stats.with_relations == 2


def test_stats_of_nothing():
    stats = resource_stats([])
    assert stats.total == 0
    assert stats.by_type == {"file": 0, "link": 0, "document": 0, "image": 0, "video": 0}


def test_resource_type_from_mime_type():
    assert resource_type_for("image/png") == ResourceType.IMAGE
    assert resource_type_for("video/mp4") == ResourceType.VIDEO
    assert resource_type_for("application/pdf") == ResourceType.DOCUMENT
    assert resource_type_for("text/csv") == ResourceType.FILE
    assert resource_type_for(None) == ResourceType.FILE


def test_stored_file_links():
    assert is_stored_file("org1/3f2a")
    assert not is_stored_file("https://example.com/doc")
    assert not is_stored_file(None)
