"""Emojify API Router."""
from fastapi import APIRouter, Query, Response
from fastapi.responses import PlainTextResponse

from apps.core.config import settings
from apps.emojify.assets import load_emoji_table
from apps.emojify.engine import EmojifyEngine
from apps.emojify.models import EmojifyResponse
from apps.emojify.storage import GCSObjectStore
from apps.emojify.vision import GoogleVisionClassifier

router = APIRouter(tags=["Emojify"])

# Singleton
_engine: EmojifyEngine | None = None


def get_engine() -> EmojifyEngine:
    global _engine
    if _engine is None:
        _engine = EmojifyEngine(
            store=GCSObjectStore(),
            classifier=GoogleVisionClassifier(),
            emojis=load_emoji_table(settings.EMOJIS_DIR),
            bucket_name=settings.storage.bucket_name,
            public_url_template=settings.storage.public_url_template,
            output_prefix=settings.storage.output_prefix,
            max_results=settings.vision.max_results,
            hat_overlay=settings.HAT_OVERLAY,
        )
    return _engine


@router.get("/", response_class=PlainTextResponse)
async def hello():
    return "Hi there!"


@router.get("/emojify", response_model=EmojifyResponse, response_model_exclude_none=True)
def emojify(response: Response, object_name: str = Query(default="", alias="objectName")):
    # Sync handler: storage and vision calls block, FastAPI runs this in its threadpool
    result = get_engine().emojify(object_name)
    response.status_code = result.status_code
    return result
