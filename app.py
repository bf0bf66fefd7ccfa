from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Backend Disk Marmitas está Online! 🚀"

# Sentinel: "build the Firestore store at startup" (None is a valid injected value: no database).
_FROM_CREDENTIALS = object()


def create_app(store=_FROM_CREDENTIALS, settings=None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.menu_endpoints import router as menu_router
    from settings import get_settings

    settings = settings or get_settings()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is _FROM_CREDENTIALS:
            from persistence.credentials import create_menu_store

            app.state.menu_store = create_menu_store(settings)
        if app.state.menu_store is None:
            logger.warning("STARTUP: no database client; menu routes will answer 500")
        else:
            logger.info("STARTUP: menu document at %s", app.state.menu_store.path)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.menu_store = None if store is _FROM_CREDENTIALS else store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    async def liveness() -> str:
        return LIVENESS_MESSAGE

    app.include_router(menu_router)

    return app


def main() -> None:
    import uvicorn

    load_dotenv("local.env")

    from settings import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    logger.info("Server running on port %s", settings.port)
    logger.info("Test locally: http://localhost:%s/api/menu", settings.port)
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


app = create_app()


if __name__ == "__main__":
    main()
