"""Errors raised while discovering and deleting cluster resources.

Every error carries the context it was raised with (engine, cluster id and,
where one applies, resource id) and chains the provider exception as its
``__cause__``. Building an error never logs; callers decide how to report it.
"""
from typing import Optional


class ClusterWipeError(Exception):
    """Base class for all teardown errors."""

    def __init__(self, message: str, engine: Optional[str] = None,
                 cluster_id: Optional[str] = None, resource_id: Optional[str] = None):
        self.message = message
        self.engine = engine
        self.cluster_id = cluster_id
        self.resource_id = resource_id
        super().__init__(message)

    def context(self) -> dict:
        ctx = {"engine": self.engine, "cluster_id": self.cluster_id, "resource_id": self.resource_id}
        return {k: v for k, v in ctx.items() if v is not None}

    def __str__(self) -> str:
        parts = [self.message]
        parts += [f"{k}={v}" for k, v in self.context().items()]
        if self.__cause__ is not None:
            parts.append(f"cause: {self.__cause__}")
        return ", ".join(parts)


class DiscoveryError(ClusterWipeError):
    """Listing resources failed."""


class TagLookupError(ClusterWipeError):
    """Fetching a resource's tags failed."""


class RemediationError(ClusterWipeError):
    """Clearing a blocking precondition (deletion protection) failed."""


class DeletionError(ClusterWipeError):
    """The delete call itself failed."""


class EngineAggregationError(ClusterWipeError):
    """An engine failed; raised by the client with engine name and cluster id."""

    def __str__(self) -> str:
        cause = self.__cause__
        if isinstance(cause, ClusterWipeError):
            # cause already renders engine and cluster id
            return f"{self.message}: {cause}"
        return super().__str__()
