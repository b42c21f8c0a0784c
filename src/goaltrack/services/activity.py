"""Comment mentions and reactions."""

import re

MENTION_PATTERN = re.compile(r"@\[([^\]]+)\]\(([^)]+)\)")


def extract_mentions(text: str) -> list[str]:
    """Mentioned user ids in order of first appearance, without duplicates."""
    seen: list[str] = []
    for match in MENTION_PATTERN.finditer(text or ""):
        user_id = match.group(2)
        if user_id not in seen:
            seen.append(user_id)
    return seen


def mention_notifications(comment: dict, mentioned: list[str]) -> list[dict]:
    """One ``mention`` notification row per mentioned user."""
    return [
        {
            "user_id": user_id,
            "type": "mention",
            "title": "You were mentioned in a comment",
            "content": comment.get("content"),
            "resource_type": "comment",
            "resource_id": comment.get("id"),
        }
        for user_id in mentioned
    ]


def toggle_reaction(reactions: dict[str, list[str]], reaction: str, user_id: str) -> dict[str, list[str]]:
    """Add or remove ``user_id`` under ``reaction``; reactions nobody holds are dropped."""
    updated = {key: list(users) for key, users in reactions.items()}
    users = updated.setdefault(reaction, [])
    if user_id in users:
        users.remove(user_id)
    else:
        users.append(user_id)
    return {key: users for key, users in updated.items() if users}
