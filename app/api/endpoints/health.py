import time

from fastapi import APIRouter

router = APIRouter()


@router.get("")
def health_check():
    """
    Check the health of the API.
    """
    return {"ok": True, "timestamp": int(time.time() * 1000)}
