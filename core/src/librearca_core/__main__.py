from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from librearca_core.app import StartupError, create_app
from librearca_core.home import resolve_librearca_paths

DEFAULT_BIND = "0.0.0.0"
DEFAULT_PORT = 8088

logger = logging.getLogger("librearca_core")


def main() -> None:
    paths = resolve_librearca_paths()
    paths.logs_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            RotatingFileHandler(
                paths.logs_dir / "librearca.log",
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    try:
        app = create_app(paths)
    except StartupError as exc:
        logger.critical("Startup failed: %s", exc)
        raise SystemExit(1) from exc

    host = os.environ.get("LIBREARCA_BIND") or DEFAULT_BIND
    env_port = os.environ.get("LIBREARCA_PORT")
    port = int(env_port) if env_port else DEFAULT_PORT

    logger.info("listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
