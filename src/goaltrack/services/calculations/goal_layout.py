"""Grid placement of goals on the canvas, one column per goal type."""

from typing import Any

from pydantic import BaseModel

from goaltrack.models.common import Position
from goaltrack.models.enums import GOAL_TYPE_ORDER, GoalType
from goaltrack.models.goal import Goal

CARD_WIDTH = 264
CARD_HEIGHT = 120
HORIZONTAL_GAP = 120
VERTICAL_GAP = 80

COLUMN_WIDTH = CARD_WIDTH + HORIZONTAL_GAP
ROW_HEIGHT = CARD_HEIGHT + VERTICAL_GAP


class PlacedGoal(BaseModel):
    goal: Goal
    position: Position


class SectionLabel(BaseModel):
    type: GoalType
    position: Position
    anchor_x: float


class Separator(BaseModel):
    x: float


class PlacedConnection(BaseModel):
    connection: dict[str, Any]
    source: Position
    target: Position
    source_type: GoalType
    target_type: GoalType


class Dimensions(BaseModel):
    width: float
    height: float


class GoalLayout(BaseModel):
    goals: list[PlacedGoal]
    section_labels: list[SectionLabel]
    separators: list[Separator]
    connections: list[PlacedConnection]
    dimensions: Dimensions


def column_x(goal_type: GoalType) -> float:
    return GOAL_TYPE_ORDER.index(goal_type) * COLUMN_WIDTH


def layout_goals(goals: list[Goal]) -> GoalLayout:
    """Place each goal at (its type's column, its index within that type).

    Connections are only drawn when the target goal is part of ``goals``.
    """
    rows: dict[GoalType, int] = {}
    placed: list[PlacedGoal] = []
    for goal in goals:
        row = rows.get(goal.type, 0)
        rows[goal.type] = row + 1
        placed.append(
            PlacedGoal(goal=goal, position=Position(x=column_x(goal.type), y=row * ROW_HEIGHT))
        )

    by_id = {p.goal.id: p for p in placed}
    connections = []
    for source in placed:
        for conn in source.goal.connections:
            target = by_id.get(conn.target_goal_id)
            if target is None:
                continue
            connections.append(
                PlacedConnection(
                    connection=conn.model_dump(),
                    source=source.position,
                    target=target.position,
                    source_type=source.goal.type,
                    target_type=target.goal.type,
                )
            )

    labels = [
        SectionLabel(
            type=goal_type,
            position=Position(x=column_x(goal_type), y=-VERTICAL_GAP),
            anchor_x=column_x(goal_type) + CARD_WIDTH / 2,
        )
        for goal_type in GOAL_TYPE_ORDER
    ]
    # No separator after the last column
    separators = [
        Separator(x=column_x(goal_type) + CARD_WIDTH + HORIZONTAL_GAP / 2)
        for goal_type in GOAL_TYPE_ORDER[:-1]
    ]

    max_rows = max(rows.values(), default=0)
    dimensions = Dimensions(
        width=(len(GOAL_TYPE_ORDER) - 1) * COLUMN_WIDTH,
        height=max(max_rows - 1, 0) * ROW_HEIGHT,
    )
    return GoalLayout(
        goals=placed,
        section_labels=labels,
        separators=separators,
        connections=connections,
        dimensions=dimensions,
    )
