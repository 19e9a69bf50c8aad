from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.dtos import RsvpError, StoreName
from bubble_rsvp.rsvps.repository.workbook import Workbook

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"
    storage: str = "ok"


@router.get("/", response_model=HealthCheckResponse)
def health_check(workbook: Workbook = Depends(get_workbook)) -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running and the RSVP log
    can be read.
    """
    try:
        workbook.get_store(StoreName.PRIMARY_LOG).last_row()
    except RsvpError:
        return HealthCheckResponse(status="degraded", storage="unavailable")
    return HealthCheckResponse(status="healthy")
