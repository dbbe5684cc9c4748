"""Node record protocol and key derivation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class NodeRecord(Protocol):
    """Structural view of a host-owned backend node.

    Only ``host`` and ``identifier`` are ever read; records are never mutated.
    """

    host: str
    identifier: str | None


class NodeInfo(BaseModel):
    """Plain node record for hosts (and tests) without their own node type."""

    model_config = ConfigDict(frozen=True)

    host: str
    identifier: str | None = None


def node_key(node: NodeRecord) -> str:
    """Stable cache key for a node: its identifier, else its host.

    Every cache read and write goes through this function so the two can
    never drift apart.
    """
    identifier = getattr(node, "identifier", None)
    if identifier:
        return str(identifier)
    return str(node.host)
