"""BaseService — shared foundation for vaultbridge services.

Every service receives the resolved :class:`BridgeSettings` at
construction time. Services never perform store or network I/O; callers
hand them documents and manifests and receive a ServiceResult.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vaultbridge.config.settings import BridgeSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BridgeService(BaseService):
            def resolve_import(self, documents, assets) -> ServiceResult:
                ...
    """

    def __init__(self, settings: BridgeSettings | None = None) -> None:
        if settings is None:
            from vaultbridge.config.settings import BridgeSettings

            settings = BridgeSettings()
        self._settings = settings

    @property
    def settings(self) -> BridgeSettings:
        return self._settings
