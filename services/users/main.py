from __future__ import annotations

import logging

from fastapi import FastAPI

from .api.routes import create_router
from .config import UsersConfig, load_config
from .infrastructure.dynamodb import create_document_store
from .infrastructure.ids import UuidIdProvider
from .infrastructure.users import DocumentUserRepository


def build_app(config: UsersConfig | None = None) -> FastAPI:
    cfg = config or load_config()
    logging.basicConfig(
        level=cfg.log_level, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"message": "pong"}

    user_repository = DocumentUserRepository(
        create_document_store(cfg),
        table_name=cfg.table_name,
        name_index=cfg.name_index,
        id_provider=UuidIdProvider(),
    )

    app.include_router(
        create_router(
            user_repository,
            default_limit=cfg.list_default_limit,
            max_limit=cfg.list_max_limit,
        )
    )

    return app
