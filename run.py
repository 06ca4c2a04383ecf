"""
Development server entry point for the advisor directory API.

Uvicorn on Windows hardcodes ProactorEventLoop in its asyncio loop factory,
which is incompatible with asyncpg. This script patches that before startup.

Usage:
    python run.py                      # normal mode
    python run.py --reload             # with auto-reload
    python run.py --log-level info     # override LOG_LEVEL
"""
import sys

if sys.platform == "win32":
    import asyncio

    import uvicorn.loops.asyncio as _uvicorn_loops

    def _selector_loop_factory(use_subprocess: bool = False):
        return asyncio.SelectorEventLoop

    _uvicorn_loops.asyncio_loop_factory = _selector_loop_factory

import argparse
import uvicorn

from app.config import settings

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the advisor directory API")
    parser.add_argument("--reload", action="store_true", default=settings.APP_ENV == "development")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL.lower())
    args = parser.parse_args()

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        loop="asyncio",  # ensure asyncio_loop_factory is used (not uvloop)
    )
