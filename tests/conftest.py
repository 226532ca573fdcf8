import os
from typing import Generator

import pytest
import yaml

from ringview.bootstrap.config.settings import RingViewConfig
from ringview.core.service.state import RingState
from ringview.core.space.layout import RingLayout
from ringview.infra.msgpack_serializer import MsgPackSerializer
from tests.helpers import FakeRingViewConfig
from tests.utils import make_raw_node


@pytest.fixture
def serializer():
    return MsgPackSerializer()


@pytest.fixture
def layout() -> RingLayout:
    return RingLayout()


@pytest.fixture
def state(layout) -> RingState:
    return RingState(layout=layout)


@pytest.fixture
def three_nodes() -> list[dict]:
    return [
        make_raw_node("10.0.0.1:9000", 0, owned=10, held=30),
        make_raw_node("10.0.0.2:9000", 1 << 126, owned=11, held=31),
        make_raw_node("10.0.0.3:9000", 1 << 127, owned=12, held=32),
    ]


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "ringview.yaml"

    data = {
        "layout": {
            "center_x": 500,
            "center_y": 400,
            "radius": 300,
        },
        "channel": {
            "host": "127.0.0.1",
            "port": 0,
            "max_frame_size": 4096,
        },
        "render": {
            "format": "json",
        },
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def ringview_config(config_file) -> Generator[RingViewConfig, None, None]:
    backup = os.environ.copy()

    try:
        os.environ["TEST_RINGVIEWCONFIG"] = str(config_file)
        yield FakeRingViewConfig()
    finally:
        os.environ.clear()
        os.environ.update(backup)
