from pydantic import BaseModel
from typing import Dict

class HealthResponse(BaseModel):
    ok: bool
    version: str
    message: str

class ReadinessResponse(BaseModel):
    ready: bool
    details: Dict[str, str]
