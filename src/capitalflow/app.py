from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from capitalflow import __version__
from capitalflow.clients.alphavantage_client import fetch_top_movers
from capitalflow.core.config import Settings, check_credential, load_settings
from capitalflow.core.errors import ApiError, ConfigError
from capitalflow.core.logger import setup_logger
from capitalflow.core.models import MoversResult, breadth_to_dict
from capitalflow.mock_data import MOCK_BLOGS, MOCK_BREADTH, MOCK_CHART, MOCK_NEWS
from capitalflow.pipeline import build_dashboard
from capitalflow.render.page import render_page
from capitalflow.render.widgets import breadth_shares

app = FastAPI(title="Capital Flow Advisory", version=__version__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


# --- Startup event to configure logging ---
@app.on_event("startup")
async def startup_event():
    settings = get_settings()
    setup_logger(settings.log_level, log_dir=settings.log_dir)


# --- Endpoints ---
@app.get("/", response_class=HTMLResponse)
async def index(settings: Settings = Depends(get_settings)):
    sinks = await build_dashboard(settings)
    return HTMLResponse(render_page(sinks, title=settings.page_title))


@app.get("/api/movers", response_model=MoversResult)
async def movers(settings: Settings = Depends(get_settings)):
    """Live top movers as JSON."""
    try:
        check_credential(settings.api_key)
        return await fetch_top_movers(
            settings.api_key,
            base_url=settings.quotes_base_url,
            timeout=settings.timeout_seconds,
        )
    except ConfigError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except ApiError as e:
        raise HTTPException(status_code=502, detail=str(e))


@app.get("/api/breadth")
async def breadth():
    return breadth_to_dict(MOCK_BREADTH, breadth_shares(MOCK_BREADTH))


@app.get("/api/chart")
async def chart():
    return MOCK_CHART.model_dump(by_alias=True)


@app.get("/api/insights")
async def insights():
    return {
        "news": [n.model_dump() for n in MOCK_NEWS],
        "blogs": [b.model_dump() for b in MOCK_BLOGS],
    }


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("capitalflow.app:app", host=settings.host, port=settings.port)
