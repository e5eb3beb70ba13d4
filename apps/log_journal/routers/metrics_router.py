from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ..utils.metrics import PROM_REGISTRY

router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    data = generate_latest(PROM_REGISTRY)
    return Response(data, media_type=CONTENT_TYPE_LATEST)
