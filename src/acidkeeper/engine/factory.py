"""Loading of the configured coordination service."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from acidkeeper.engine.base import CoordinationService
from acidkeeper.errors import ServiceConfigurationError

if TYPE_CHECKING:
    from acidkeeper.config import AcidkeeperConfig

logger = logging.getLogger(__name__)


def load_service(config: AcidkeeperConfig) -> CoordinationService:
    """Build the coordination service named by ``config.service_factory``.

    The factory is given as ``package.module:callable``; the callable
    receives the config and must return a CoordinationService.

    Raises:
        ServiceConfigurationError: If the factory is missing, cannot be
            imported, or returns something else.
    """
    target = config.service_factory
    if not target or ":" not in target:
        msg = f"service_factory must be set as 'package.module:callable', got {target!r}"
        raise ServiceConfigurationError(msg)

    module_name, attr = target.split(":", 1)
    try:
        factory = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        msg = f"Could not load service factory {target}: {e}"
        raise ServiceConfigurationError(msg) from e

    service = factory(config)
    if not isinstance(service, CoordinationService):
        msg = f"Service factory {target} returned {type(service).__name__}, not a CoordinationService"
        raise ServiceConfigurationError(msg)

    logger.debug("Loaded coordination service %s from %s", type(service).__name__, target)
    return service
