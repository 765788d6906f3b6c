# runtime/registries.py
from collections.abc import Callable

from drainnet.app.protocols import NodeKeyFn
from drainnet.config.models import NodeMergeExactModel, NodeMergeRoundedModel, NodeMergeUnion
from drainnet.domain.mechanics.mechanics_graph_builder import RoundedKey, exact_key

NodeKeyFactory = Callable[[NodeMergeUnion], NodeKeyFn]

_node_key_registry: dict[str, NodeKeyFactory] = {}


# ------------------- Node merge registries ---------------------------


def register_node_key(kind: str):
    def deco(fn: NodeKeyFactory):
        _node_key_registry[kind] = fn
        return fn

    return deco


def make_node_key(cfg: NodeMergeUnion) -> NodeKeyFn:
    try:
        factory = _node_key_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown node_merge kind {cfg.kind!r}")
    return factory(cfg)


@register_node_key("exact")
def _make_exact(cfg: NodeMergeExactModel):
    return exact_key


@register_node_key("rounded")
def _make_rounded(cfg: NodeMergeRoundedModel):
    return RoundedKey(cfg.decimals)
