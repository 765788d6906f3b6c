# io/engine_logging.py
import json
import logging
import sys

from drainnet.engine.hooks import NoopHooks
from drainnet.io.recorder import Recorder


def _default_json_logger(name="drainnet", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class EngineLogging(NoopHooks):
    """
    One place to shape and emit structured logs for graph builds and queries.
    Per-snap and per-search lines are DEBUG only and sampled.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._searches = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------------------------------------------------

    def graph_built(self, *, nodes: int, edges: int, skipped: int, ms: float):
        self._emit("INFO", "graph_built", nodes=nodes, edges=edges, skipped=skipped, ms=ms)

    def snap(self, *, point, node_id, role: str):
        if self.debug:
            self._emit("DEBUG", "snap", point=point, node_id=node_id, role=role)

    def search_end(self, *, start, reached, distance_m, settled: int, ms: float):
        self._searches += 1
        if self.debug and (self._searches % self.sample_every) == 0:
            self._emit(
                "DEBUG",
                "search_end",
                start=start,
                reached=reached,
                distance_m=distance_m,
                settled=settled,
                ms=ms,
            )

    def query_end(self, *, outcome: str, **extra):
        self._emit("INFO", "query_end", outcome=outcome, **extra)

    # ------------- Query record reporting --------------------------

    def record(self, ev):
        if self.recorder:
            self.recorder.emit(ev)
