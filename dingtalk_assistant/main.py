"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dingtalk_assistant import __version__
from dingtalk_assistant.api.endpoints import router
from dingtalk_assistant.tools.registry import get_tools_registry
from dingtalk_assistant.utils.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging()
    registry = get_tools_registry()
    yield
    await registry.aclose()


app = FastAPI(
    title="DingTalk Developer Assistant Tools",
    description=(
        "Agent tools for the DingTalk Open Platform developer assistant: ask questions, "
        "continue conversations, read history and fetch recommended questions."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Tools", "description": "Invoke the developer assistant tools."},
        {"name": "Commands", "description": "Run text commands such as /dingtalk."},
        {"name": "Health", "description": "Service health monitoring and status checks."},
    ],
)

app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("dingtalk_assistant.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
