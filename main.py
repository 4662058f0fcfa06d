import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from db import create_tables

# Routers
from routers.admin import router as admin_router
from routers.game import router as game_router
from routers.health import router as health_router

logger = logging.getLogger("mathhill")
logging.basicConfig(level=config.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("Math Hill API ready (time unit %.2fs)", config.TIME_UNIT_SECONDS)
    yield


app = FastAPI(title="Math Hill – Game API", lifespan=lifespan)

# Browser front end calls us directly; session cookie needs credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-session-id", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(game_router)  # /operations, /game/..., /levels, /session
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
