"""Turn operation results and errors into HTTP responses."""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from bubble_rsvp.rsvps.dtos import ErrorCode, OperationResult, RsvpError

ERROR_STATUS_CODES = {
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STORE_IO: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.STORE_BUSY: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def result_response(result: OperationResult) -> JSONResponse:
    status_code = status.HTTP_200_OK
    if not result.ok:
        status_code = ERROR_STATUS_CODES.get(result.error, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(result))


def error_response(error: RsvpError) -> JSONResponse:
    return result_response(OperationResult.from_error(error))
