from datetime import UTC, datetime

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"success": True, "message": "API is running", "timestamp": datetime.now(UTC).isoformat()}
