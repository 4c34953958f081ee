from pydantic import BaseModel

from tinylink.schemas.LinkResponse import LinkResponse

class LinkCreatedResponse(BaseModel):
    message: str
    link: LinkResponse
