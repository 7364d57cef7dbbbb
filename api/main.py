import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, settings
from core.errors import register_error_handlers
from quotes import router as quotes_router

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process; drain it on shutdown.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="runime", lifespan=lifespan)

# Allow the React client's dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(quotes_router.router, tags=["quotes"])


@app.get("/")
def root() -> dict:
    return {"message": "runime quotes api"}


def run() -> None:
    """
    Console entry point: serve the app with uvicorn.
    """
    uvicorn.run(
        "main:app",
        host=settings.api_host(),
        port=settings.api_port(),
        log_level=settings.log_level().lower(),
    )
