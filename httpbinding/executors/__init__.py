from .base import SUPPORTED_METHODS, HttpExecutor
from .http import AiohttpExecutor

__all__ = ["AiohttpExecutor", "HttpExecutor", "SUPPORTED_METHODS"]
