# re-export common schemas for simpler imports
from .LinkCreateRequest import LinkCreateRequest
from .LinkResponse import LinkResponse
from .LinkCreatedResponse import LinkCreatedResponse
from .HealthResponse import HealthResponse, ReadinessResponse

__all__ = [
    "LinkCreateRequest",
    "LinkResponse",
    "LinkCreatedResponse",
    "HealthResponse",
    "ReadinessResponse",
]
