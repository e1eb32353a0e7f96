"""
FastAPI application entrypoint for the interview analyser.
"""
import logging
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# .env must be loaded before Settings reads the environment
load_dotenv()

from api.routes import router, settings

logging.basicConfig(level=logging.DEBUG)
app = FastAPI(title="Interview Sentiment Analyser API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)

@app.get("/health")
def health() -> dict:
    return {"status": "ok", "model": settings.ANTHROPIC_MODEL}
