from fastapi import APIRouter

from yieldcast import __version__
from yieldcast.schemas.predict import Provider

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
def healthcheck():
    return {"status": "ok", "version": __version__, "providers": Provider.names()}
