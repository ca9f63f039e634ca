from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ...config import Config
from ..deps import get_config

router = APIRouter(tags=["health"])


@router.get("/health")
def health(config: Config = Depends(get_config)):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ai_enabled": config.ai.enabled,
    }
