from typing import Literal

from iso639 import Language, LanguageNotFoundError
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ROOT_ID = 'root'

Category = Literal['fundamental', 'core-skill', 'advanced', 'tools', 'practices']
Priority = Literal['essential', 'recommended', 'optional']
ResourceType = Literal['article', 'video', 'book', 'course', 'documentation']
Level = Literal['beginner', 'intermediate', 'advanced']


class Resource(BaseModel):
    """A learning resource attached to an area or a subtopic"""

    title: str
    type: ResourceType
    url: str | None = None


class Subtopic(BaseModel):
    """A specific skill or concept nested under a main area"""

    id: str
    title: str
    description: str
    priority: Priority | None = None
    resources: list[Resource] = []


class MainArea(BaseModel):
    """A top-level branch of the learning map"""

    id: str
    title: str
    description: str
    category: Category | None = None
    resources: list[Resource] = []
    subtopics: list[Subtopic] = []


class LearningMap(BaseModel):
    """
    Hierarchical topic -> areas -> subtopics -> resources tree.

    Every area and subtopic id must be unique across the whole map, and none may
    take the reserved root id, since layout and expansion state are keyed by id only.
    The edge ids derived from them (`root-{area}`, `{area}-{subtopic}`) must be
    unique too: area `a` with subtopic `b-c` and area `a-b` with subtopic `c`
    would both produce `a-b-c`.
    """

    model_config = ConfigDict(populate_by_name=True)

    topic: str
    description: str
    main_areas: list[MainArea] = Field(default=[], alias='mainAreas')

    @model_validator(mode='after')
    def _check_unique_ids(self) -> 'LearningMap':
        seen = {ROOT_ID}
        for area in self.main_areas:
            for node_id in [area.id, *(s.id for s in area.subtopics)]:
                if node_id in seen:
                    raise ValueError(f'Duplicate node id in learning map: {node_id!r}')
                seen.add(node_id)

        edge_ids = set()
        for source, target in self.edge_pairs():
            edge_id = f'{source}-{target}'
            if edge_id in edge_ids:
                raise ValueError(f'Duplicate edge id in learning map: {edge_id!r}')
            edge_ids.add(edge_id)
        return self

    def edge_pairs(self) -> list[tuple[str, str]]:
        """(parent, child) id pairs in tree order"""
        pairs = []
        for area in self.main_areas:
            pairs.append((ROOT_ID, area.id))
            pairs.extend((area.id, s.id) for s in area.subtopics)
        return pairs

    def to_wire(self) -> dict:
        """Dump in the camelCase JSON shape used on the wire, without empty optionals"""
        return self.model_dump(by_alias=True, exclude_none=True)


class GenerateRequest(BaseModel):
    topic: str
    level: Level = 'beginner'
    language: str = 'en'

    @field_validator('language')
    @classmethod
    def _check_language(cls, language: str) -> str:
        try:
            Language.match(language)
        except LanguageNotFoundError as e:
            raise ValueError(f'Unknown language code {language!r}') from e
        return language


class ErrorResponse(BaseModel):
    error: str
