from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse
from pathlib import Path
from dotenv import load_dotenv
import logging

from app.core.config import settings
from app.api.api import api_router

# Load environment variables
load_dotenv()

# Configure root logger once; uvicorn keeps its own handlers
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("smartbite")

STATIC_DIR = Path(__file__).parent / "app" / "static"

api_description = """
## Smart Bite - Landing Page & Waitlist

Serves the Smart Bite marketing page and relays waitlist signups from its
hero and footer forms to the Supabase `waitlist` table.

- `GET /` - landing page
- `POST /api/waitlist` - join the waitlist with `{"email": "..."}`
- `GET /health` - liveness probe
"""

app = FastAPI(
    title="Smart Bite",
    description=api_description,
    version="1.0.0",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc"
)

# GZip compression for the landing page and assets
app.add_middleware(GZipMiddleware, minimum_size=500)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount stylesheet, script and images
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Include API router
app.include_router(api_router, prefix="/api")

@app.on_event("startup")
def log_configuration():
    if not settings.supabase_configured:
        logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set; waitlist signups will fail with 500")

@app.get("/", include_in_schema=False)
async def landing_page():
    return FileResponse(STATIC_DIR / "index.html")

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
