from fastapi import APIRouter

from .features.confirm_rsvps.router import router as confirm_rsvps_router
from .features.regenerate_sheets.router import router as regenerate_sheets_router
from .features.rsvp_summary.router import router as rsvp_summary_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(submit_rsvp_router)
router.include_router(rsvp_summary_router)
router.include_router(confirm_rsvps_router)
router.include_router(regenerate_sheets_router)
