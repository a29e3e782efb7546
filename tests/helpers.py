"""Shared builders for learning map payloads and provider responses"""

import json

from openai.types.chat import ChatCompletion

CATEGORIES = ['fundamental', 'core-skill', 'advanced', 'tools', 'practices']
PRIORITIES = ['essential', 'recommended', 'optional']


def make_map_payload(
    areas: int = 5,
    subtopics: int = 3,
    *,
    topic: str = 'Gardening',
    rich: bool = True,
) -> dict:
    """
    Wire-format learning map with `areas` main areas of `subtopics` subtopics each.

    `rich=False` leaves out category, priority and urls, like the simpler schema variant.
    """
    main_areas = []
    for i in range(areas):
        area = {
            'id': f'area-{i}',
            'title': f'Area {i}',
            'description': f'What area {i} covers',
            'resources': [
                {'title': f'Guide {i}', 'type': 'article', 'url': f'https://example.com/{i}'},
                {'title': f'Book {i}', 'type': 'book'},
            ],
            'subtopics': [],
        }
        if rich:
            area['category'] = CATEGORIES[i % len(CATEGORIES)]
        else:
            del area['resources'][0]['url']

        for j in range(subtopics):
            subtopic = {
                'id': f'area-{i}-sub-{j}',
                'title': f'Subtopic {i}.{j}',
                'description': f'Details of subtopic {i}.{j}',
                'resources': [{'title': f'Video {i}.{j}', 'type': 'video'}],
            }
            if rich:
                subtopic['priority'] = PRIORITIES[j % len(PRIORITIES)]
            area['subtopics'].append(subtopic)
        main_areas.append(area)

    return {'topic': topic, 'description': f'Learning path for {topic}', 'mainAreas': main_areas}


def tool_call_completion(arguments: dict | str, name: str = 'create_learning_map') -> ChatCompletion:
    if isinstance(arguments, dict):
        arguments = json.dumps(arguments)
    return ChatCompletion.model_validate(
        {
            'id': 'chatcmpl-test',
            'object': 'chat.completion',
            'created': 0,
            'model': 'test-model',
            'choices': [
                {
                    'index': 0,
                    'finish_reason': 'tool_calls',
                    'message': {
                        'role': 'assistant',
                        'content': None,
                        'tool_calls': [
                            {
                                'id': 'call_1',
                                'type': 'function',
                                'function': {'name': name, 'arguments': arguments},
                            }
                        ],
                    },
                }
            ],
        }
    )


def text_completion(content: str) -> ChatCompletion:
    return ChatCompletion.model_validate(
        {
            'id': 'chatcmpl-test',
            'object': 'chat.completion',
            'created': 0,
            'model': 'test-model',
            'choices': [
                {
                    'index': 0,
                    'finish_reason': 'stop',
                    'message': {'role': 'assistant', 'content': content},
                }
            ],
        }
    )


class FakeGenerationClient:
    """Stands in for MapGenerationClient: returns a map or raises, and records calls"""

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, topic: str, level: str = 'beginner'):
        self.calls.append((topic, level))
        if self.error is not None:
            raise self.error
        return self.result
