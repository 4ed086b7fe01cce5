# api/routes.py

import asyncio
import json

from aiohttp import web

from headergrade.core.config.settings import AnalyzerConfig
from headergrade.core.errors import FetchError, InvalidURLError
from headergrade.core.logging.logger import setup_logger
from headergrade.core.report.json_utils import json_dumps
from headergrade.core.storage.memory import MemoryScanStore
from headergrade.core.validators.sanitizer import normalize_url
from headergrade.core.web import analysis
from headergrade.core.web.catalog import RuleCatalog

logger = setup_logger(__name__)

CONFIG_KEY = web.AppKey("config", AnalyzerConfig)
CATALOG_KEY = web.AppKey("catalog", RuleCatalog)
STORE_KEY = web.AppKey("store", MemoryScanStore)

MAX_SCAN_LIMIT = 100


def json_response(data, status: int = 200) -> web.Response:
    return web.json_response(data, status=status, dumps=json_dumps)


async def analyze(request: web.Request) -> web.Response:
    """POST /api/analyze with {"url": "..."}."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return json_response({"message": "Request body must be JSON"}, status=400)

    if not isinstance(body, dict):
        return json_response({"message": "Request body must be a JSON object"}, status=400)

    raw_url = body.get("url")
    if raw_url is not None and not isinstance(raw_url, str):
        return json_response({"message": "url must be a string"}, status=400)

    try:
        url = normalize_url(raw_url)
    except InvalidURLError as e:
        return json_response({"message": str(e)}, status=400)

    app = request.app
    try:
        result = await analysis.run(url, app[CONFIG_KEY], app[CATALOG_KEY], app[STORE_KEY])
    except FetchError as e:
        return json_response(
            {"message": f"Failed to fetch headers from URL. {e.reason}"}, status=502
        )

    return json_response(result.to_dict())


async def health(request: web.Request) -> web.Response:
    return json_response({"status": "ok"})


async def list_scans(request: web.Request) -> web.Response:
    """GET /api/scans?url=...&limit=... - stored scans, newest first."""
    try:
        limit = int(request.query.get("limit", "10"))
    except ValueError:
        return json_response({"message": "limit must be an integer"}, status=400)
    limit = max(1, min(limit, MAX_SCAN_LIMIT))

    store = request.app[STORE_KEY]
    url = request.query.get("url")
    if url:
        try:
            records = store.get_by_url(normalize_url(url), limit)
        except InvalidURLError as e:
            return json_response({"message": str(e)}, status=400)
    else:
        records = store.recent(limit)

    return json_response({"scans": [record.to_dict() for record in records]})


@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception:
        logger.exception(f"Error in {request.method} {request.path}")
        return json_response({"message": "An unexpected error occurred"}, status=500)


def create_app(
    config: AnalyzerConfig,
    catalog: RuleCatalog,
    store: MemoryScanStore | None = None,
) -> web.Application:
    app = web.Application(middlewares=[error_middleware])
    app[CONFIG_KEY] = config
    app[CATALOG_KEY] = catalog
    app[STORE_KEY] = store if store is not None else MemoryScanStore()
    app.router.add_post("/api/analyze", analyze)
    app.router.add_get("/api/health", health)
    app.router.add_get("/api/scans", list_scans)
    return app


async def serve(
    config: AnalyzerConfig,
    catalog: RuleCatalog,
    host: str = "127.0.0.1",
    port: int = 5000,
) -> None:
    """Run the API until cancelled."""
    runner = web.AppRunner(create_app(config, catalog))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Serving header analysis API on http://{host}:{port}")
    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
