from inspect import cleandoc
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class GeneratedResource(BaseModel):
    title: str
    type: Literal['article', 'video', 'book', 'course', 'documentation']
    url: str | None = None


class GeneratedSubtopic(BaseModel):
    id: str = Field(description='Identifier unique across the whole learning map, kebab-case')
    title: str = Field(description='Specific technology, concept, or skill name')
    description: str = Field(
        description=cleandoc("""
            What this is, why it's important, and how it fits in the learning path
        """)
    )
    priority: Literal['essential', 'recommended', 'optional'] = Field(
        description='How critical this subtopic is to master'
    )
    resources: list[GeneratedResource] = Field(min_length=1, max_length=2)


class GeneratedMainArea(BaseModel):
    id: str = Field(description='Identifier unique across the whole learning map, kebab-case')
    title: str = Field(description='Clear, professional title using industry terms')
    description: str = Field(
        description=cleandoc("""
            Comprehensive explanation of why this area matters and what you'll achieve
        """)
    )
    category: Literal['fundamental', 'core-skill', 'advanced', 'tools', 'practices'] = Field(
        description='Classification of this learning area'
    )
    resources: list[GeneratedResource] = Field(min_length=2, max_length=3)
    subtopics: list[GeneratedSubtopic] = Field(
        description='3-5 specific skills/concepts within this area',
        min_length=3,
        max_length=5,
    )


class GeneratedLearningMap(BaseModel):
    """
    Arguments of the `create_learning_map` function the model is forced to call.

    This is the strict generation-time contract. Parsing the result uses the
    lenient `learning_map.models.LearningMap`, which accepts any counts.
    """

    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(description='The main topic title')
    description: str = Field(description='Brief overview of the learning journey')
    main_areas: list[GeneratedMainArea] = Field(
        alias='mainAreas',
        description='5-7 major learning areas representing core pillars of the domain',
        min_length=5,
        max_length=7,
    )


LEARNING_MAP_TOOL_NAME = 'create_learning_map'


def learning_map_tool() -> dict:
    """Function-calling tool definition for the chat completions API"""
    return {
        'type': 'function',
        'function': {
            'name': LEARNING_MAP_TOOL_NAME,
            'description': 'Generate a structured learning map with hierarchical topics',
            'parameters': GeneratedLearningMap.model_json_schema(by_alias=True),
        },
    }
