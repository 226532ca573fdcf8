import json
from functools import lru_cache

from pydantic import ValidationError

from ringview.bootstrap.config.settings import RingViewConfig
from ringview.core.ports.render import Renderer
from ringview.core.service.state import RingState
from ringview.core.viewer import RingViewer
from ringview.infra.format_renderer import RENDERERS
from ringview.infra.msgpack_serializer import MsgPackSerializer


@lru_cache
def get_viewer() -> RingViewer:
    config = get_config()

    return RingViewer(
        host=config.channel.host,
        port=config.channel.port,
        state=get_state(),
        renderer=get_renderer(),
        serializer=MsgPackSerializer(),
        max_frame_size=config.channel.max_frame_size,
    )


@lru_cache
def get_state() -> RingState:
    config = get_config()
    return RingState(layout=config.get_layout())


@lru_cache
def get_renderer() -> Renderer:
    config = get_config()
    return RENDERERS[config.render.format]()


@lru_cache
def get_config() -> RingViewConfig:
    try:
        return RingViewConfig()  # type: ignore[call-arg]
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
