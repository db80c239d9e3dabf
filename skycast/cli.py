"""CLI entry point for the weather lookup widget."""

import argparse
import asyncio
import logging

from skycast.config.loader import load_config, masked_config_json
from skycast.config.schema import AppConfig
from skycast.controller.search_controller import SearchController
from skycast.display.formatters import LOADING_MESSAGE, ViewRenderer, render_text
from skycast.ingest.openweather_client import OpenWeatherClient
from skycast.models.common import UnitSystem
from skycast.models.state import Error, SearchState

DEFAULT_CONFIG = "skycast.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Current weather and 5-day forecast lookup",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # lookup
    lookup_p = sub.add_parser("lookup", help="Look up a city once")
    lookup_p.add_argument("city", help="City name, e.g. 'Paris' or 'Paris,FR'")
    lookup_p.add_argument(
        "--imperial", action="store_true", help="Use °F and mph"
    )

    # serve
    serve_p = sub.add_parser("serve", help="Run the widget web server")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "lookup":
        return asyncio.run(_cmd_lookup(config, args))
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


async def _cmd_lookup(config: AppConfig, args) -> int:
    units = UnitSystem.IMPERIAL if args.imperial else config.display.default_units
    client = OpenWeatherClient(
        api_key=config.api.api_key,
        base_url=config.api.base_url,
        timeout=config.api.timeout_seconds,
    )
    controller = SearchController(client, config.api.api_key, units=units)

    def on_change(state: SearchState) -> None:
        if state.is_loading:
            print(LOADING_MESSAGE)

    controller.subscribe(on_change)
    state = await controller.submit(args.city)

    renderer = ViewRenderer(icon_base_url=config.api.icon_base_url)
    print(render_text(renderer.render(state)))
    return 1 if isinstance(state.status, Error) else 0


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from skycast.dashboard import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(masked_config_json(config))
        return 0
    print("Error: use 'config show'")
    return 1
