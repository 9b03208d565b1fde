"""HTTP API for the Telegram Mini App.

The Mini App posts its raw initData to /api/validate and gets back the
verified user. Uses aiohttp.
"""

import time
import traceback

from aiohttp import web

from .config import Config
from .errors import HTTP_STATUS, ErrorKind
from .verifier import VerificationResult, verify_init_data


def _error_response(kind: ErrorKind) -> web.Response:
    return web.json_response(
        VerificationResult.rejected(kind).to_dict(), status=HTTP_STATUS[kind],
    )


def _extract_init_data(body) -> str | None:
    """Return the initData string from a request body, or None if unusable."""
    if not isinstance(body, dict):
        return None
    init_data = body.get("initData")
    if not isinstance(init_data, str) or not init_data:
        return None
    return init_data


async def handle_validate(request: web.Request) -> web.Response:
    """POST /api/validate — verify initData and return the user.

    Body: {"initData": "<raw query string from Telegram.WebApp.initData>"}
    """
    config: Config = request.app["config"]
    if not config.bot_token:
        print("[Config] bot_token is not set, cannot verify initData")
        return _error_response(ErrorKind.SERVER_CONFIG_ERROR)

    try:
        body = await request.json()
    except ValueError:
        return _error_response(ErrorKind.INVALID_JSON)

    init_data = _extract_init_data(body)
    if init_data is None:
        return _error_response(ErrorKind.INIT_DATA_REQUIRED)

    result = verify_init_data(
        init_data, config.bot_token, max_age_seconds=config.max_age_seconds,
    )
    status = 200 if result.ok else HTTP_STATUS[result.error]
    return web.json_response(result.to_dict(), status=status)


async def handle_health(request: web.Request) -> web.Response:
    """GET /api/health — simple health check, no auth required."""
    return web.json_response({"ok": True, "ts": int(time.time() * 1000)})


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.Response:
    """Turn unknown routes and unexpected failures into JSON errors."""
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return web.json_response({"ok": False, "error": "NOT_FOUND"}, status=404)
    except web.HTTPMethodNotAllowed:
        return web.json_response({"ok": False, "error": "METHOD_NOT_ALLOWED"}, status=405)
    except Exception as e:
        print(f"[Error] {request.method} {request.path}: {e!r}")
        traceback.print_exc()
        return _error_response(ErrorKind.INTERNAL_SERVER_ERROR)


@web.middleware
async def cors_middleware(request: web.Request, handler) -> web.Response:
    """Add CORS headers for the Mini App frontend."""
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)

    allowed_origin = request.app.get("cors_origin", "*")
    response.headers["Access-Control-Allow-Origin"] = allowed_origin
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@web.middleware
async def logging_middleware(request: web.Request, handler) -> web.Response:
    """Log all incoming requests."""
    start = time.time()
    try:
        response = await handler(request)
        elapsed = (time.time() - start) * 1000
        print(f"[API] {request.method} {request.path} → {response.status} ({elapsed:.0f}ms)")
        return response
    except Exception as e:
        elapsed = (time.time() - start) * 1000
        print(f"[API] {request.method} {request.path} → ERROR: {e} ({elapsed:.0f}ms)")
        raise


def create_web_app(config: Config) -> web.Application:
    """Create and configure the aiohttp web application."""
    app = web.Application(middlewares=[logging_middleware, cors_middleware, error_middleware])
    app["config"] = config
    app["cors_origin"] = config.cors_origin

    app.router.add_get("/api/health", handle_health)
    app.router.add_post("/api/validate", handle_validate)

    return app
