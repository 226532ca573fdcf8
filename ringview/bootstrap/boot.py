import asyncio

from ringview.bootstrap.config.loader import get_cli_args
from ringview.bootstrap.deps import get_viewer
from ringview.core.helpers.utils import setup_signal_handler, setup_logging


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    viewer = get_viewer()

    try:
        with setup_signal_handler() as stop_event:
            asyncio.run(viewer.watch(stop_event))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
