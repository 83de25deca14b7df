"""FastAPI application entry point."""
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routers import label

config = get_config()
logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Label Rendering Engine", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(label.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
