"""第三方集成模块"""

from .openai_api import OpenAIAPI, OpenAIAPIError

__all__ = [
    "OpenAIAPI",
    "OpenAIAPIError",
]
