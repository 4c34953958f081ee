from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
import logging

from tinylink.schemas.LinkCreateRequest import LinkCreateRequest
from tinylink.schemas.LinkCreatedResponse import LinkCreatedResponse
from tinylink.schemas.LinkResponse import LinkResponse
from tinylink.services.errors import (
    CodeConflict,
    GenerationExhausted,
    InvalidCode,
    InvalidTarget,
    NotFound,
)
from tinylink.services.shortener import LinkRegistry, get_registry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/links", tags=["links"])

@router.post("", response_model=LinkCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_link_endpoint(link_request: LinkCreateRequest, registry: LinkRegistry = Depends(get_registry)):
    try:
        link = registry.create(link_request.target_url, link_request.custom_code)
    except (InvalidTarget, InvalidCode) as e:
        logger.warning(f"Rejected link request: {e.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except CodeConflict as e:
        logger.warning(f"Short code already taken: {link_request.custom_code}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except GenerationExhausted as e:
        logger.error("Gave up generating a free short code")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return LinkCreatedResponse(
        message="Link created successfully.",
        link=LinkResponse.model_validate(link),
    )

@router.get("", response_model=List[LinkResponse])
def list_links_endpoint(registry: LinkRegistry = Depends(get_registry)):
    return [LinkResponse.model_validate(link) for link in registry.list()]

@router.get("/{short_code}", response_model=LinkResponse)
def get_link_endpoint(short_code: str, registry: LinkRegistry = Depends(get_registry)):
    try:
        link = registry.get(short_code)
    except NotFound as e:
        logger.warning(f"Stats 404: Short code not found: {short_code}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return LinkResponse.model_validate(link)

@router.delete("/{short_code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link_endpoint(short_code: str, registry: LinkRegistry = Depends(get_registry)):
    try:
        registry.delete(short_code)
    except NotFound:
        logger.warning(f"Delete 404: Short code not found: {short_code}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found or already deleted.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
