import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from video_digest.api.routes.analysis import router as analysis_router
from video_digest.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Video Digest API",
    description="Chapter summaries, full summaries, and content-quality analysis of video transcripts",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["https://www.youtube.com"],
    allow_origin_regex=r"chrome-extension://.*|moz-extension://.*|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
