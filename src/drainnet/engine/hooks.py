# engine/hooks.py
from typing import Protocol


class EngineHooks(Protocol):
    def graph_built(self, *, nodes, edges, skipped, ms): ...
    def snap(self, *, point, node_id, role): ...
    def search_end(self, *, start, reached, distance_m, settled, ms): ...
    def query_end(self, *, outcome: str, **kw): ...
    def record(self, ev): ...


class NoopHooks:
    def graph_built(self, **_):
        pass

    def snap(self, **_):
        pass

    def search_end(self, **_):
        pass

    def query_end(self, **_):
        pass

    def record(self, *_):
        pass
