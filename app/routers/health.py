from fastapi import APIRouter, status

from app.utils.response import create_response

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health_check():
    return create_response({"status": "OK", "message": "Server is running"}, status.HTTP_200_OK)
