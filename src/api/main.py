import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import register_exception_handlers
from src.api.routes.generate import router as generate_router
from src.api.routes.transcribe import router as transcribe_router
from src.api.routes.transcript import router as transcript_router
from src.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Content Pack API",
    description="Turn video transcripts into chapters, clips and social posts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(generate_router)
app.include_router(transcribe_router)
app.include_router(transcript_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


def serve() -> None:
    """Run the API with uvicorn on the configured host/port."""
    import uvicorn

    uvicorn.run("src.api.main:app", host=settings.api_host, port=settings.api_port)
