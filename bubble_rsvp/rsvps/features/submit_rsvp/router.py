from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.features.submit_rsvp.write_model import SubmitRsvpWriteModel
from bubble_rsvp.rsvps.repository.workbook import Workbook
from bubble_rsvp.rsvps.responses import result_response
from bubble_rsvp.rsvps.urls import SUBMIT_RSVP_URL

router = APIRouter()


class RsvpSubmit(BaseModel):
    """RSVP form fields as posted by the invitation page.

    Everything is optional here so that a blank name comes back as an
    RSVP error result rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    attending: str | None = None
    guests: int | str | None = None
    guest_names: str | None = Field(default=None, alias="guestNames")
    dietary: str | None = None
    comments: str | None = None


def get_submit_rsvp_write_model(
    workbook: Workbook = Depends(get_workbook),
) -> SubmitRsvpWriteModel:
    """Dependency to get the RSVP submission write model."""
    return SubmitRsvpWriteModel(workbook)


@router.post(SUBMIT_RSVP_URL)
def submit_rsvp(
    rsvp_data: RsvpSubmit,
    write_model: SubmitRsvpWriteModel = Depends(get_submit_rsvp_write_model),
) -> JSONResponse:
    """
    Record an RSVP in the RSVP log and update the guest and dietary lists.
    Submitting again under the same name updates the existing entry.
    """
    result = write_model.submit_form(rsvp_data.model_dump(exclude_none=True, by_alias=True))
    return result_response(result)
