"""
Radial layout for learning maps.

The root sits at a fixed anchor, main areas are spread evenly on a circle
starting from the top and going clockwise, and each area's subtopics fan out
around it in the direction of the area. Output is fully determined by the
input map, so the export always matches what is on screen.
"""

import logging
import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from learning_map.models import (
    ROOT_ID,
    Category,
    LearningMap,
    MainArea,
    Priority,
    Resource,
    Subtopic,
)

logger = logging.getLogger(__name__)

ROOT_POSITION = (500.0, 50.0)
RING_CENTER = (500.0, 280.0)
MAIN_RADIUS = 320.0
SUB_RADIUS = 200.0
FAN_TIGHTNESS = 0.6

NEUTRAL_STROKE = 'hsl(var(--muted-foreground))'
ROOT_STROKE = 'hsl(var(--primary))'

CATEGORY_COLORS: dict[str, str] = {
    'fundamental': 'hsl(210 100% 45%)',
    'core-skill': 'hsl(180 85% 45%)',
    'advanced': 'hsl(280 70% 50%)',
    'tools': 'hsl(30 90% 50%)',
    'practices': 'hsl(140 70% 45%)',
}

PRIORITY_COLORS: dict[str, str] = {
    'essential': 'hsl(0 84% 60%)',
    'recommended': 'hsl(45 93% 47%)',
    'optional': 'hsl(142 76% 36%)',
}

NodeLevel = Literal['root', 'main', 'sub']


class Position(BaseModel):
    x: float
    y: float


class NodeData(BaseModel):
    """Display fields copied from the entity a node was built from"""

    label: str
    description: str
    level: NodeLevel
    resources: list[Resource] | None = None
    category: Category | None = None
    priority: Priority | None = None


class LayoutNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    position: Position
    data: NodeData

    @property
    def level(self) -> NodeLevel:
        return self.data.level


class EdgeStyle(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    stroke: str
    stroke_width: int = Field(alias='strokeWidth')


class LayoutEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    animated: bool = False
    style: EdgeStyle


class MapLayout(BaseModel):
    nodes: list[LayoutNode]
    edges: list[LayoutEdge]


def main_area_angles(count: int) -> list[float]:
    """Angles of `count` main areas: evenly spaced, first one at the top (-pi/2)"""
    if count == 0:
        return []
    step = 2 * math.pi / count
    return [i * step - math.pi / 2 for i in range(count)]


def subtopic_angles(area_angle: float, count: int) -> list[float]:
    """Angles of `count` subtopics fanned around their area's direction"""
    step = math.pi / (count + 1)
    return [area_angle + (j - count / 2) * step * FAN_TIGHTNESS for j in range(count)]


def _polar(origin: tuple[float, float], radius: float, angle: float) -> Position:
    return Position(
        x=origin[0] + radius * math.cos(angle),
        y=origin[1] + radius * math.sin(angle),
    )


def root_edge_style(category: str | None) -> EdgeStyle:
    return EdgeStyle(stroke=CATEGORY_COLORS.get(category or '', ROOT_STROKE), stroke_width=2)


def subtopic_edge_style(priority: str | None) -> EdgeStyle:
    return EdgeStyle(
        stroke=PRIORITY_COLORS.get(priority or '', NEUTRAL_STROKE),
        stroke_width=2 if priority == 'essential' else 1,
    )


def _root_node(learning_map: LearningMap) -> LayoutNode:
    return LayoutNode(
        id=ROOT_ID,
        position=Position(x=ROOT_POSITION[0], y=ROOT_POSITION[1]),
        data=NodeData(
            label=learning_map.topic, description=learning_map.description, level='root'
        ),
    )


def _area_node(area: MainArea, position: Position) -> LayoutNode:
    return LayoutNode(
        id=area.id,
        position=position,
        data=NodeData(
            label=area.title,
            description=area.description,
            level='main',
            resources=[r.model_copy() for r in area.resources],
            category=area.category,
        ),
    )


def _subtopic_node(subtopic: Subtopic, position: Position) -> LayoutNode:
    return LayoutNode(
        id=subtopic.id,
        position=position,
        data=NodeData(
            label=subtopic.title,
            description=subtopic.description,
            level='sub',
            resources=[r.model_copy() for r in subtopic.resources],
            priority=subtopic.priority,
        ),
    )


def compute_layout(learning_map: LearningMap) -> MapLayout:
    """
    Position every entity of the map and connect parents to children.

    Parameters
    ----------
    learning_map : LearningMap
        The tree to lay out. Empty area or subtopic lists are fine.

    Returns
    -------
    MapLayout
        Nodes in tree order (root, then each area followed by its subtopics)
        and the matching root->area and area->subtopic edges.
    """
    nodes = [_root_node(learning_map)]
    edges: list[LayoutEdge] = []

    areas = learning_map.main_areas
    for area, angle in zip(areas, main_area_angles(len(areas))):
        area_position = _polar(RING_CENTER, MAIN_RADIUS, angle)
        nodes.append(_area_node(area, area_position))
        edges.append(
            LayoutEdge(
                id=f'{ROOT_ID}-{area.id}',
                source=ROOT_ID,
                target=area.id,
                animated=True,
                style=root_edge_style(area.category),
            )
        )

        origin = (area_position.x, area_position.y)
        for subtopic, sub_angle in zip(
            area.subtopics, subtopic_angles(angle, len(area.subtopics))
        ):
            nodes.append(_subtopic_node(subtopic, _polar(origin, SUB_RADIUS, sub_angle)))
            edges.append(
                LayoutEdge(
                    id=f'{area.id}-{subtopic.id}',
                    source=area.id,
                    target=subtopic.id,
                    style=subtopic_edge_style(subtopic.priority),
                )
            )

    logger.debug(f'Laid out {len(nodes)} nodes and {len(edges)} edges for {learning_map.topic!r}')
    return MapLayout(nodes=nodes, edges=edges)
