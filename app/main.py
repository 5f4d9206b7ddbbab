import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.logging import setup_logging
from app.api.error_handlers import register_error_handlers
from app.api.auth.routes import router as auth_router
from app.api.todo.task.routes import router as todo_task_router
from app.api.todo.tag.routes import router as todo_tag_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("TODO API started (env=%s)", settings.ENV)
    yield
    logger.info("TODO API shutting down")

app = FastAPI(title="TODO API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(todo_task_router, prefix="/api/tasks", tags=["Tasks"])
app.include_router(todo_tag_router, prefix="/api/tags", tags=["Tags"])

register_error_handlers(app)


@app.get("/")
def root():
    return {"message": "Welcome to TODO API"}

@app.get("/ping")
def ping():
    return {"message": "pong"}
