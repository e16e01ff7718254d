"""BaseService — shared plumbing for page services.

Every service receives a :class:`PageStore` at construction time and
converts codec/store exceptions into failed :class:`ServiceResult`\\ s.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wikipage.domain.errors import DecodeError, UnrepresentableValue, UnterminatedFrontMatter
from wikipage.infrastructure.store import InvalidPagePath, PageNotFound
from wikipage.services.result import ServiceResult

if TYPE_CHECKING:
    from wikipage.infrastructure.store import PageStore

logger = logging.getLogger(__name__)

# Exceptions a service operation may turn into a failed result, most specific first.
HANDLED_ERRORS: tuple[type[Exception], ...] = (
    PageNotFound,
    InvalidPagePath,
    UnterminatedFrontMatter,
    DecodeError,
    UnrepresentableValue,
)


class BaseService:
    """Base for service-layer classes operating on a page store."""

    def __init__(self, store: PageStore) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, exc: Exception, *, path: str | None = None) -> ServiceResult:
        """Map a codec/store exception to a failed ServiceResult."""
        detail: dict[str, str] = {"path": path} if path else {}
        match exc:
            case PageNotFound():
                code = "NOT_FOUND"
            case InvalidPagePath():
                code = "INVALID_PATH"
            case UnterminatedFrontMatter():
                code = "UNTERMINATED_FRONT_MATTER"
                detail["format"] = exc.mark.format_name
            case DecodeError():
                code = "DECODE_ERROR"
                detail["format"] = exc.mark.format_name
                detail["cause"] = str(exc.cause)
            case UnrepresentableValue():
                code = "UNREPRESENTABLE_VALUE"
                detail["key"] = exc.path
            case _:
                raise exc
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, code, str(exc), **detail)
