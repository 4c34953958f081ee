from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
import logging

from tinylink.services.errors import NotFound
from tinylink.services.shortener import LinkRegistry, get_registry

logger = logging.getLogger(__name__)

router = APIRouter()

# Catch-all: include this router after every other one so codes never shadow real paths
@router.get("/{short_code}", tags=["redirect"])
def redirect_to_url_endpoint(short_code: str, registry: LinkRegistry = Depends(get_registry)):
    """
    Count the click and redirect to the link's target URL.
    """
    try:
        target_url = registry.redirect_and_count(short_code)
    except NotFound:
        logger.warning(f"Redirect 404: Short code not found: {short_code}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not Found: The requested short link does not exist or has been deleted.",
        )

    logger.info(f"Redirect {short_code} -> {target_url[:50]}")
    return RedirectResponse(url=target_url, status_code=status.HTTP_302_FOUND)
