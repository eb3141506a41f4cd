from __future__ import annotations

import argparse

import uvicorn

from core.settings import get_settings
from services.api.main import create_app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser("video-relay", description="Run the video relay API")
    parser.add_argument("--config", default=None, help="YAML settings file (overrides VIDEO_RELAY_CONFIG)")
    parser.add_argument("--host", default=None, help="Bind address (defaults to HOST)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (defaults to PORT)")
    args = parser.parse_args(argv)

    settings = get_settings(args.config)
    overrides = {k: v for k, v in {"host": args.host, "port": args.port}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
