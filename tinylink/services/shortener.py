from contextlib import contextmanager
from typing import Callable, List, Optional
import logging

from fastapi import Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tinylink.db import repository
from tinylink.db.Connection.database import Database
from tinylink.db.Models.models import Link
from tinylink.services.errors import (
    CodeConflict,
    GenerationExhausted,
    InvalidCode,
    InvalidTarget,
    LinkRegistryError,
    NotFound,
    StorageFailure,
)
from tinylink.utils.shortcode import generate_short_code, validate_short_code
from tinylink.utils.validators import is_valid_target_url


logger = logging.getLogger(__name__)

MAX_GENERATION_ATTEMPTS = 5


class LinkRegistry:
    """Create, look up, list, delete and count clicks on short links.

    Every operation runs in its own session borrowed from ``database`` and
    released on return. Storage errors are logged here and re-raised as
    ``StorageFailure``; the HTTP layer never sees raw SQLAlchemy exceptions.
    """

    def __init__(
        self,
        database: Database,
        code_generator: Callable[[], str] = generate_short_code,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ):
        self._database = database
        self._generate = code_generator
        self._max_attempts = max_attempts

    @contextmanager
    def _session(self, operation: str):
        with self._database.session() as db:
            try:
                yield db
            except LinkRegistryError:
                raise
            except SQLAlchemyError as e:
                logger.exception("Storage failure during %s", operation)
                raise StorageFailure() from e

    def _pick_free_code(self, db: Session) -> str:
        for attempt in range(self._max_attempts):
            candidate = self._generate()
            if not repository.short_code_exists(db, candidate):
                return candidate
            logger.info(f"Short code collision on attempt {attempt + 1}/{self._max_attempts}")
        raise GenerationExhausted()

    def create(self, target_url: Optional[str], custom_code: Optional[str] = None) -> Link:
        if not is_valid_target_url(target_url):
            raise InvalidTarget()

        # syntax is checked before uniqueness: a malformed code is a 400 even if taken
        if custom_code and not validate_short_code(custom_code):
            raise InvalidCode()

        with self._session("create") as db:
            short_code = custom_code or self._pick_free_code(db)
            try:
                link = repository.insert_link(db, short_code, target_url)
            except IntegrityError:
                raise CodeConflict()

        logger.info(f"Created link {link.short_code} -> {link.target_url[:50]}")
        return link

    def list(self) -> List[Link]:
        with self._session("list") as db:
            return repository.list_links(db)

    def get(self, short_code: str) -> Link:
        with self._session("get") as db:
            link = repository.get_link_by_short_code(db, short_code)
        if link is None:
            raise NotFound()
        return link

    def delete(self, short_code: str) -> None:
        with self._session("delete") as db:
            deleted = repository.delete_link(db, short_code)
        if not deleted:
            raise NotFound()
        logger.info(f"Deleted link {short_code}")

    def redirect_and_count(self, short_code: str) -> str:
        with self._session("redirect") as db:
            target_url = repository.increment_click(db, short_code)
        if target_url is None:
            raise NotFound()
        return target_url


def get_registry(request: Request) -> LinkRegistry:
    """FastAPI dependency: the registry built by ``create_app``."""
    return request.app.state.registry
