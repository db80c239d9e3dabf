"""Weather lookup widget: FastAPI backend serving the page and its actions."""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from skycast.config.loader import load_config
from skycast.config.schema import AppConfig
from skycast.controller.search_controller import SearchController, WeatherSource
from skycast.display.formatters import ViewModel, ViewRenderer
from skycast.ingest.openweather_client import OpenWeatherClient

CONFIG_PATH = Path("skycast.yaml")
WIDGET_HTML = Path(__file__).parent / "static" / "widget.html"


class SearchRequest(BaseModel):
    query: str


def create_app(
    config: AppConfig,
    client: WeatherSource | None = None,
    renderer: ViewRenderer | None = None,
) -> FastAPI:
    """Build the app around a single in-memory search session."""
    if client is None:
        client = OpenWeatherClient(
            api_key=config.api.api_key,
            base_url=config.api.base_url,
            timeout=config.api.timeout_seconds,
        )
    app = FastAPI(title="Skycast", version="0.1.0")
    app.state.config = config
    app.state.controller = SearchController(
        client, config.api.api_key, units=config.display.default_units
    )
    app.state.renderer = renderer or ViewRenderer(icon_base_url=config.api.icon_base_url)

    def _view(request: Request) -> ViewModel:
        return request.app.state.renderer.render(request.app.state.controller.state)

    # ── Widget actions ─────────────────────────────────────────────

    @app.get("/api/view", response_model=ViewModel)
    def get_view(request: Request):
        """Current widget state."""
        return _view(request)

    @app.post("/api/search", response_model=ViewModel)
    async def search(body: SearchRequest, request: Request):
        """Look up a city with the current unit system."""
        controller: SearchController = request.app.state.controller
        controller.set_query(body.query)
        await controller.submit()
        return _view(request)

    @app.post("/api/units/toggle", response_model=ViewModel)
    async def toggle_units(request: Request):
        """Switch °C/°F; refetches the last searched city."""
        await request.app.state.controller.toggle_units()
        return _view(request)

    @app.get("/api/health")
    def get_health(request: Request):
        return {
            "ok": True,
            "api_key_configured": request.app.state.config.has_api_key,
        }

    # ── Serve widget ───────────────────────────────────────────────

    @app.get("/")
    def serve_widget():
        if WIDGET_HTML.exists():
            return FileResponse(WIDGET_HTML, media_type="text/html")
        return HTMLResponse("<h1>Widget not found</h1>", status_code=404)

    return app


app = create_app(load_config(CONFIG_PATH))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=app.state.config.server.host, port=app.state.config.server.port)
