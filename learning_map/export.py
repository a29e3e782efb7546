import json
import logging
import re

from learning_map.layout import LayoutNode
from learning_map.models import LearningMap

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')


def export_learning_map(nodes: list[LayoutNode], learning_map: LearningMap) -> dict:
    """
    Build the downloadable document for the map as it is currently displayed.

    `nodes` must be the layout the user is looking at, it is not recomputed here.
    """
    return {
        'topic': learning_map.topic,
        'description': learning_map.description,
        'nodes': [
            {'id': node.id, **node.data.model_dump(exclude_none=True)} for node in nodes
        ],
        'structure': learning_map.to_wire()['mainAreas'],
    }


def topic_slug(topic: str) -> str:
    return _WHITESPACE.sub('-', topic).lower()


def export_filename(topic: str) -> str:
    return f'{topic_slug(topic)}-learning-map.json'


def dump_export(document: dict) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)
