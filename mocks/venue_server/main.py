from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Venue Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/venue_stub") if os.path.exists("/venue_stub") else Path(__file__).resolve().parents[1] / "venue_stub"


def _stub(venue_slug: str, kind: str):
    file = DATA_DIR / f"{venue_slug}_{kind}.json"
    if not file.exists():
        return JSONResponse(status_code=404, content={"message": f"Venue {venue_slug} not found"})
    return JSONResponse(content=json.loads(file.read_text()))


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/{venue_slug}/static")
def get_static(venue_slug: str):
    return _stub(venue_slug, "static")


@app.get("/{venue_slug}/dynamic")
def get_dynamic(venue_slug: str):
    return _stub(venue_slug, "dynamic")
