# drainnet/app/build.py
from collections.abc import Mapping

from drainnet.config.models import EngineModel
from drainnet.domain.mechanics.mechanics_core import NetworkEngine
from drainnet.engine.hooks import NoopHooks
from drainnet.io.engine_logging import EngineLogging  # JSON logs
from drainnet.io.recorder import JsonlSink, Recorder, Sink
from drainnet.runtime.registries import make_node_key


def build(
    cfg: EngineModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
) -> NetworkEngine:
    # 0) Validate config
    if cfg is None:
        model = EngineModel()
    else:
        model = cfg if isinstance(cfg, EngineModel) else EngineModel.model_validate(cfg)

    # 1) Hooks (logging + query records)
    if use_logging:
        recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()]))
        hooks = EngineLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
    else:
        hooks = NoopHooks()

    # 2) Strategies
    node_key = make_node_key(model.node_merge)

    return NetworkEngine(
        node_key=node_key,
        radius_m=model.geodesy.earth_radius_m,
        hooks=hooks,
        run_id=model.run_id,
        cache_maxsize=model.cache.maxsize if model.cache.enabled else None,
    )
