from fastapi import APIRouter

from feedback_widget.api.v1 import feedback

api_router = APIRouter()

api_router.include_router(feedback.router)
