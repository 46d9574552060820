from __future__ import annotations

import logging

import uvicorn

from services.users.config import load_config
from services.users.main import build_app

logger = logging.getLogger(__name__)


def main() -> None:
    cfg = load_config()
    app = build_app(cfg)
    logger.info(f"Starting users API on http://{cfg.server_host}:{cfg.server_port}")
    uvicorn.run(
        app,
        host=cfg.server_host,
        port=cfg.server_port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
