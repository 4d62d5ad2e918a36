from fastapi import APIRouter, Depends

from consignment.utils.storage import StorageService, get_storage

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic health check endpoint."
)
def health_check():
    """Simple health check."""
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the key-value store is reachable."
)
def readiness_check(storage: StorageService = Depends(get_storage)):
    """
    Readiness check for the storage backend.

    Returns status of:
    - Redis connection
    """
    checks = {"storage": False}

    try:
        checks["storage"] = storage.ping()
    except Exception as e:
        checks["storage_error"] = str(e)

    return {
        "status": "ready" if checks["storage"] else "not_ready",
        "checks": checks
    }
