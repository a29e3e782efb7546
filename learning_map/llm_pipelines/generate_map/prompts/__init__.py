"""Prompts for learning map generation"""

import pathlib

from iso639 import Language
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from openai.types.chat import ChatCompletionMessageParam

here = pathlib.Path(__file__).parent.resolve()
jinja_env = Environment(loader=FileSystemLoader(str(here)), undefined=StrictUndefined)


def generate_map_prompt(
    *, topic: str, level: str, language: str
) -> list[ChatCompletionMessageParam]:
    """Create prompt for learning map generation in OpenAI chat-completions format"""
    system_template = jinja_env.get_template('system.md.jinja')
    user_template = jinja_env.get_template('user.md.jinja')
    language_name = Language.match(language).name

    return [
        {
            'role': 'system',
            'content': system_template.render(level=level, language=language_name),
        },
        {'role': 'user', 'content': user_template.render(topic=topic)},
    ]


__all__ = ['generate_map_prompt']
