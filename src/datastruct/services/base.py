"""BaseService — shared foundation for datastruct services.

Every service receives the resolved :class:`DataStructSettings` at
construction time and converts domain failures into ServiceResult errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from datastruct.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from datastruct.config.settings import DataStructSettings
    from datastruct.domain.errors import DataStructError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CodecService(BaseService):
            def to_json(self, text: str) -> ServiceResult:
                try:
                    ...
                except DataStructError as exc:
                    return self._failure("to_json", exc)
    """

    def __init__(self, settings: DataStructSettings) -> None:
        self._settings = settings

    @staticmethod
    def _failure(op: str, exc: DataStructError) -> ServiceResult:
        """Build a failed ServiceResult from a domain error."""
        logger.debug("%s failed: %s (%s)", op, exc, exc.code)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=exc.code,
                message=str(exc),
                detail=exc.detail(),
            ),
        )
