"""Host node registry interface and the geo-routing wrapper around it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from pygeonode._constants import NODE_OPTION_KEY, TARGET_OPTION_KEYS
from pygeonode.ingestion.voice import extract_voice_hint
from pygeonode.models.node import NodeRecord

if TYPE_CHECKING:
    from pygeonode.balancer import GeoBalancer

_logger = logging.getLogger(__name__)


class NodeRegistry(Protocol):
    """What pygeonode needs from the host runtime.

    ``nodes`` must iterate in registration order. ``create`` and
    ``update_voice_state`` may return anything (including awaitables);
    the wrapper hands their results back untouched.
    """

    @property
    def nodes(self) -> Iterable[NodeRecord]:
        ...

    def create(self, options: Mapping[str, Any]) -> Any:
        ...

    def update_voice_state(self, payload: Any) -> Any:
        ...


def target_id_from_options(options: Mapping[str, Any]) -> str | None:
    for field_name in TARGET_OPTION_KEYS:
        value = options.get(field_name)
        if value is not None and value != "":
            return str(value)
    return None


class GeoRoutedRegistry:
    """Decorator over a host registry that adds nearest-node placement.

    ``create`` gets a ``node`` option injected when the caller did not pin
    one; ``update_voice_state`` records region hints before delegating.
    Everything else is forwarded to the wrapped registry. While the owning
    balancer is stopped, or has been restarted with a newer wrapper, this
    one behaves exactly like the registry it wraps.
    """

    def __init__(self, inner: NodeRegistry, balancer: GeoBalancer) -> None:
        self._inner = inner
        self._balancer = balancer

    @property
    def inner(self) -> NodeRegistry:
        return self._inner

    @property
    def nodes(self) -> Iterable[NodeRecord]:
        return self._inner.nodes

    def create(self, options: Mapping[str, Any]) -> Any:
        if not self._balancer.is_routing(self) or options.get(NODE_OPTION_KEY):
            return self._inner.create(options)

        target_id = target_id_from_options(options)
        chosen = self._balancer.select(target_id, nodes=self._inner.nodes)
        if chosen is None:
            return self._inner.create(options)

        _logger.debug("Placing target %s on node %s", target_id, chosen)
        return self._inner.create({**options, NODE_OPTION_KEY: chosen})

    def update_voice_state(self, payload: Any) -> Any:
        if self._balancer.is_routing(self):
            hint = extract_voice_hint(payload)
            if hint is not None:
                self._balancer.record_region_hint(hint.target_id, hint.region)
        return self._inner.update_voice_state(payload)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._inner, name)
