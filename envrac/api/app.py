"""FastAPI application exposing the En Vrac triggers."""

from __future__ import annotations

import hmac
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from ..errors import AuthorizationError, EnVracError
from ..pipeline import run_pipeline
from ..processors import CategoryClassifier
from ..utils.config_loader import load_category_table
from ..utils.logging import get_logger
from ..utils.settings import Settings

logger = get_logger("envrac.api")

app = FastAPI(
    title="En Vrac",
    description="Builds and publishes the weekly En Vrac article",
    version="1.0.0",
)


@app.exception_handler(AuthorizationError)
async def _unauthorized(request: Request, exc: AuthorizationError) -> JSONResponse:
    logger.warning("Rejected %s %s: bad secret", request.method, request.url.path)
    return JSONResponse(status_code=401, content={"detail": "Unauthorized"})


@app.exception_handler(EnVracError)
async def _pipeline_failed(request: Request, exc: EnVracError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal error"})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env(require_secret=True)


@lru_cache(maxsize=None)
def _load_classifier(path: str) -> CategoryClassifier:
    logger.info("Loading category table from %s", path)
    return CategoryClassifier(load_category_table(path))


def get_classifier(settings: Annotated[Settings, Depends(get_settings)]) -> CategoryClassifier:
    return _load_classifier(settings.categories_path)


def check_secret(
    settings: Annotated[Settings, Depends(get_settings)],
    secret: Annotated[Optional[str], Query(description="Shared trigger secret")] = None,
) -> Settings:
    expected = settings.secret or ""
    if not secret or not hmac.compare_digest(secret.encode("utf-8"), expected.encode("utf-8")):
        raise AuthorizationError("secret mismatch")
    return settings


@app.get("/healthcheck")
async def healthcheck():
    return {"status": "ok"}


@app.post("/en-vrac")
def publish_en_vrac(
    settings: Annotated[Settings, Depends(check_secret)],
    classifier: Annotated[CategoryClassifier, Depends(get_classifier)],
):
    """Run the full pipeline and commit today's article."""
    try:
        result = run_pipeline(settings, classifier=classifier)
    except EnVracError:
        raise
    except Exception as exc:  # noqa: BLE001 - request boundary guard
        logger.exception("Unexpected failure while publishing: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error") from exc
    return {"status": "published", "path": result.path, "tasks": result.published_count}


@app.post("/dry-run", response_class=PlainTextResponse)
def dry_run(
    settings: Annotated[Settings, Depends(check_secret)],
    classifier: Annotated[CategoryClassifier, Depends(get_classifier)],
):
    """Return the composed article without committing it."""
    try:
        result = run_pipeline(settings, dry_run=True, classifier=classifier)
    except EnVracError:
        raise
    except Exception as exc:  # noqa: BLE001 - request boundary guard
        logger.exception("Unexpected failure during dry run: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error") from exc
    return PlainTextResponse(result.article.text, media_type="text/markdown; charset=utf-8")
