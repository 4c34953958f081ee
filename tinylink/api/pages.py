from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["pages"], include_in_schema=False)


def _page(request: Request, name: str) -> Path:
    static_dir: Optional[str] = request.app.state.settings.STATIC_DIR
    if not static_dir:
        raise HTTPException(status_code=404, detail="Page not found")
    root = Path(static_dir).resolve()
    page = (root / name).resolve()
    if page.parent != root or not page.is_file():
        raise HTTPException(status_code=404, detail="Page not found")
    return page

# Dashboard
@router.get("/")
def dashboard_page(request: Request):
    return FileResponse(_page(request, "index.html"))

# Per-link stats page; its script reads the code from the path and calls /api/links/{code}
@router.get("/code/{short_code}")
def stats_page(short_code: str, request: Request):
    return FileResponse(_page(request, "stats.html"))

# Top-level assets (/app.js, /stats.js, /style.css). A dot can never appear in
# a short code, so these never hide a redirect.
@router.get("/{asset}.{ext}")
def static_asset(asset: str, ext: str, request: Request):
    return FileResponse(_page(request, f"{asset}.{ext}"))
