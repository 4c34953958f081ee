from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

# Response DTOs
class LinkResponse(BaseModel):
    id: str
    short_code: str = Field(..., alias="shortCode")
    target_url: str = Field(..., alias="targetUrl")
    total_clicks: int = Field(..., alias="totalClicks")
    created_at: datetime = Field(..., alias="createdAt")
    last_clicked_at: Optional[datetime] = Field(None, alias="lastClickedAt")

    # populate_by_name lets ORM attributes (short_code, ...) fill the aliased fields
    model_config = {"from_attributes": True, "populate_by_name": True}
