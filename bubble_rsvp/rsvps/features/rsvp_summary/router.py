from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from bubble_rsvp.rsvps.dependencies import get_workbook
from bubble_rsvp.rsvps.dtos import RsvpError, StatusFilter
from bubble_rsvp.rsvps.features.rsvp_summary.read_model import RsvpSummaryReadModel
from bubble_rsvp.rsvps.repository.workbook import Workbook
from bubble_rsvp.rsvps.responses import error_response
from bubble_rsvp.rsvps.urls import (
    CONFIRMED_RSVPS_URL,
    EVENT_DETAILS_URL,
    EXISTING_RSVPS_URL,
    RSVP_LIST_URL,
    RSVP_STATS_URL,
)

router = APIRouter()


def get_rsvp_summary_read_model(
    workbook: Workbook = Depends(get_workbook),
) -> RsvpSummaryReadModel:
    return RsvpSummaryReadModel(workbook)


@router.get(RSVP_STATS_URL)
def get_rsvp_stats(
    read_model: RsvpSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> JSONResponse:
    """Counts by status and the number of confirmed guests."""
    try:
        return JSONResponse(content=jsonable_encoder(read_model.stats()))
    except RsvpError as e:
        return error_response(e)


@router.get(RSVP_LIST_URL)
def list_rsvps(
    status: str = StatusFilter.ALL.value,
    read_model: RsvpSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> JSONResponse:
    try:
        return JSONResponse(content=jsonable_encoder(read_model.by_status(status)))
    except RsvpError as e:
        return error_response(e)


@router.get(EXISTING_RSVPS_URL)
def list_existing_rsvps(
    read_model: RsvpSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> JSONResponse:
    try:
        return JSONResponse(content=jsonable_encoder(read_model.existing_rsvps()))
    except RsvpError as e:
        return error_response(e)


@router.get(CONFIRMED_RSVPS_URL)
def list_confirmed_names(
    read_model: RsvpSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> JSONResponse:
    """Names of confirmed guests, for the bubbles on the invitation page."""
    try:
        return JSONResponse(content=jsonable_encoder(read_model.confirmed_names()))
    except RsvpError as e:
        return error_response(e)


@router.get(EVENT_DETAILS_URL)
def get_event_details(
    read_model: RsvpSummaryReadModel = Depends(get_rsvp_summary_read_model),
) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(read_model.event_details()))
