from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.dtos import StoreName
from bubble_rsvp.rsvps.features.regenerate_sheets.write_model import (
    RegenerateSheetsWriteModel,
)
from bubble_rsvp.rsvps.repository.workbook import Workbook
from bubble_rsvp.rsvps.responses import result_response
from bubble_rsvp.rsvps.urls import (
    ENSURE_SHEETS_URL,
    REGENERATE_ALL_URL,
    REGENERATE_SHEET_URL,
)

router = APIRouter()


def get_regenerate_sheets_write_model(
    workbook: Workbook = Depends(get_workbook),
) -> RegenerateSheetsWriteModel:
    return RegenerateSheetsWriteModel(workbook)


@router.post(REGENERATE_ALL_URL)
def regenerate_all_sheets(
    write_model: RegenerateSheetsWriteModel = Depends(get_regenerate_sheets_write_model),
) -> JSONResponse:
    """Rebuild the guest list and the dietary list from the RSVP log."""
    return result_response(write_model.regenerate_all())


@router.post(REGENERATE_SHEET_URL)
def regenerate_sheet(
    target: StoreName,
    write_model: RegenerateSheetsWriteModel = Depends(get_regenerate_sheets_write_model),
) -> JSONResponse:
    return result_response(write_model.regenerate(target))


@router.post(ENSURE_SHEETS_URL)
def ensure_sheets(
    write_model: RegenerateSheetsWriteModel = Depends(get_regenerate_sheets_write_model),
) -> JSONResponse:
    """Write any missing header and caption rows."""
    return result_response(write_model.ensure_sheets())
