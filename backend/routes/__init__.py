"""FastAPI API endpoints under /api.

Endpoint groups: settings/health, books (library + parsing), sessions
(play-through navigation), images (generation proxy). Each session's
actions are nested under /api/sessions/{id}/.
"""

from fastapi import APIRouter

from .books import router as books_router
from .images import router as images_router
from .sessions import router as sessions_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(books_router)
router.include_router(sessions_router)
router.include_router(images_router)
