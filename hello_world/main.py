"""
Hello world listener.

Answers GET / with a greeting.
"""

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from hello_world.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

GREETING = "Hello World!"

app = FastAPI(
    title="Hello World",
    description="Minimal listener",
    version="0.1.0",
)


@app.get("/", response_class=PlainTextResponse, tags=["hello"])
async def hello() -> str:
    return GREETING


@app.get("/health", tags=["system"])
async def health_check():
    """Check if the listener is running."""
    return {"status": "ok"}


class HelloWorldServer(uvicorn.Server):
    """uvicorn server that announces its port once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)

        if not self.should_exit:
            logger.info(
                f"Cloud Run Service - Hello World! server listening on port {self.config.port}..."
            )


def run() -> None:
    """Start the listener on settings.PORT."""
    config = uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    HelloWorldServer(config).run()
