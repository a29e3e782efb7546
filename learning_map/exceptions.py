"""Errors raised while generating, installing and exporting learning maps"""


class InputValidationError(ValueError):
    """Form input was rejected before any generation request was made"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TopicValidationError(InputValidationError):
    def __init__(self, message: str = 'Please enter a topic to explore'):
        super().__init__(message)


class LevelValidationError(InputValidationError):
    def __init__(self, level: str, levels: tuple[str, ...]):
        super().__init__(f'Unknown level {level!r}, expected one of {", ".join(levels)}')
        self.level = level


class GenerationError(Exception):
    """Generation failed; the message is meant for the user"""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProviderError(Exception):
    """The AI provider call failed or returned an unusable payload"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GenerationInProgressError(Exception):
    def __init__(self, message: str = 'A learning map is already being generated'):
        super().__init__(message)
        self.message = message


class NoMapError(LookupError):
    def __init__(self, message: str = 'No learning map has been generated yet'):
        super().__init__(message)
        self.message = message
