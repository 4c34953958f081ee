from pydantic import BaseModel, Field
from typing import Optional

# Request DTOs
class LinkCreateRequest(BaseModel):
    # Both fields stay optional here: a missing or malformed targetUrl is a
    # 400 from the registry, not a 422 from request parsing.
    target_url: Optional[str] = Field(None, alias="targetUrl")
    custom_code: Optional[str] = Field(None, alias="customCode")

    model_config = {"populate_by_name": True}
