"""Nested card view: areas -> subtopics -> resources, each level expandable"""

from typing import Literal

from pydantic import BaseModel

from learning_map.expansion import ExpansionSet
from learning_map.models import LearningMap, MainArea, Resource, Subtopic

CATEGORY_CLASSES: dict[str, str] = {
    'fundamental': 'bg-blue-500/10 text-blue-600 border-blue-500/20',
    'core-skill': 'bg-cyan-500/10 text-cyan-600 border-cyan-500/20',
    'advanced': 'bg-purple-500/10 text-purple-600 border-purple-500/20',
    'tools': 'bg-orange-500/10 text-orange-600 border-orange-500/20',
    'practices': 'bg-green-500/10 text-green-600 border-green-500/20',
}
NEUTRAL_CATEGORY_CLASS = 'bg-accent/10 text-accent-foreground border-accent/20'


class PriorityBadge(BaseModel):
    text: str
    variant: Literal['destructive', 'default', 'secondary']
    icon: str

    def __str__(self) -> str:
        return f'{self.icon} {self.text}'


PRIORITY_BADGES: dict[str, PriorityBadge] = {
    'essential': PriorityBadge(text='Essential', variant='destructive', icon='🔴'),
    'recommended': PriorityBadge(text='Recommended', variant='default', icon='🟡'),
    'optional': PriorityBadge(text='Optional', variant='secondary', icon='🟢'),
}


def category_label(category: str | None) -> str | None:
    """'core-skill' -> 'core skill'"""
    return category.replace('-', ' ', 1) if category else None


def priority_badge(priority: str | None) -> PriorityBadge | None:
    return PRIORITY_BADGES.get(priority or '')


class ResourceBadge(BaseModel):
    title: str
    type: str
    url: str | None = None

    @property
    def has_link(self) -> bool:
        return bool(self.url)


class SubtopicCard(BaseModel):
    id: str
    title: str
    description: str
    priority: PriorityBadge | None
    expanded: bool
    # Empty unless expanded
    resources: list[ResourceBadge]


class AreaCard(BaseModel):
    id: str
    title: str
    description: str
    category: str | None
    category_class: str
    expanded: bool
    resources: list[ResourceBadge]
    subtopic_count: int
    # Empty unless expanded
    subtopics: list[SubtopicCard]


class MapCards(BaseModel):
    topic: str
    description: str
    areas: list[AreaCard]


def _badges(resources: list[Resource]) -> list[ResourceBadge]:
    return [ResourceBadge(title=r.title, type=r.type, url=r.url) for r in resources]


def _subtopic_card(subtopic: Subtopic, expanded_subtopics: ExpansionSet) -> SubtopicCard:
    expanded = expanded_subtopics.is_expanded(subtopic.id)
    return SubtopicCard(
        id=subtopic.id,
        title=subtopic.title,
        description=subtopic.description,
        priority=priority_badge(subtopic.priority),
        expanded=expanded,
        resources=_badges(subtopic.resources) if expanded else [],
    )


def _area_card(
    area: MainArea, expanded_areas: ExpansionSet, expanded_subtopics: ExpansionSet
) -> AreaCard:
    expanded = expanded_areas.is_expanded(area.id)
    return AreaCard(
        id=area.id,
        title=area.title,
        description=area.description,
        category=category_label(area.category),
        category_class=CATEGORY_CLASSES.get(area.category or '', NEUTRAL_CATEGORY_CLASS),
        expanded=expanded,
        resources=_badges(area.resources),
        subtopic_count=len(area.subtopics),
        subtopics=(
            [_subtopic_card(s, expanded_subtopics) for s in area.subtopics] if expanded else []
        ),
    )


def render_cards(
    learning_map: LearningMap, expanded_areas: ExpansionSet, expanded_subtopics: ExpansionSet
) -> MapCards:
    """
    Walk the map depth-first, in order, and build the card view model.

    Area resources and subtopic counts are always present; subtopics appear
    only under expanded areas and subtopic resources only under expanded
    subtopics.
    """
    return MapCards(
        topic=learning_map.topic,
        description=learning_map.description,
        areas=[
            _area_card(area, expanded_areas, expanded_subtopics)
            for area in learning_map.main_areas
        ],
    )
