"""Ownership binding: stamp the creating identity onto a new resource."""

import logging

from .exceptions import MissingOwnership
from .identity import Identity

logger = logging.getLogger(__name__)


def bind_author(serializer, request, field: str = "author"):
    """Save ``serializer`` with ``field`` set to the requesting user.

    Runs after the gate has allowed the create operation, so the identity is
    always authenticated here. An anonymous identity means the gate was
    bypassed and is reported as ``MissingOwnership``.
    """
    identity = Identity.from_request(request)
    if not identity.is_authenticated:
        logger.error(
            "Ownership binding reached with anonymous identity on %s %s; gate was not applied",
            request.method,
            request.path,
        )
        raise MissingOwnership("Cannot bind an author: request identity is anonymous.")

    instance = serializer.save(**{field: request.user})
    logger.debug("Bound %s=%s to %s pk=%s", field, identity, type(instance).__name__, instance.pk)
    return instance


__all__ = ["bind_author"]
