from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.dtos import RowRange, StoreName
from bubble_rsvp.rsvps.features.confirm_rsvps.write_model import ConfirmRsvpsWriteModel
from bubble_rsvp.rsvps.repository.workbook import Workbook
from bubble_rsvp.rsvps.responses import result_response
from bubble_rsvp.rsvps.urls import CONFIRM_ROW_URL, CONFIRM_SELECTION_URL

router = APIRouter()


class RowRangeSubmit(BaseModel):
    start: int
    end: int


class ConfirmSelectionSubmit(BaseModel):
    ranges: list[RowRangeSubmit] = []


def get_confirm_rsvps_write_model(
    workbook: Workbook = Depends(get_workbook),
) -> ConfirmRsvpsWriteModel:
    return ConfirmRsvpsWriteModel(workbook)


@router.post(CONFIRM_SELECTION_URL)
def confirm_selection(
    store: StoreName,
    selection: ConfirmSelectionSubmit,
    write_model: ConfirmRsvpsWriteModel = Depends(get_confirm_rsvps_write_model),
) -> JSONResponse:
    """
    Confirm the attending RSVPs in the selected rows of the RSVP log or the
    guest list, and mark the same names confirmed in the other one.
    """
    ranges = [RowRange(start=selected.start, end=selected.end) for selected in selection.ranges]
    return result_response(write_model.confirm_selection(store, ranges))


@router.post(CONFIRM_ROW_URL)
def confirm_row(
    row: int,
    write_model: ConfirmRsvpsWriteModel = Depends(get_confirm_rsvps_write_model),
) -> JSONResponse:
    return result_response(write_model.confirm_by_row(row))
