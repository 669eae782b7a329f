import logging
from typing import Any, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .logging_config import configure_logging
from .models import ErrorResponse, HealthResponse, SubscribeRequest, SubscribeResponse
from .rules import FAILURE_MESSAGE, SUCCESS_MESSAGE
from .sheets import append_row, build_credentials, build_service, utc_timestamp

configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="subscribe-api",
    description="Append newsletter signups to a Google Sheet",
    version="0.1.0",
)


def _sheets_client(settings: Settings) -> Any:
    return build_service(build_credentials(settings))


def get_sheets_client() -> Callable[[Settings], Any]:
    """Factory turning settings into an authorized Sheets service."""
    return _sheets_client


def _failure(exc: Exception) -> JSONResponse:
    code = getattr(exc, "code", None)
    if code is not None and not isinstance(code, (int, str)):
        code = str(code)
    body = ErrorResponse(
        error=FAILURE_MESSAGE,
        details=str(getattr(exc, "message", exc)),
        code=code,
    )
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post(
    "/api/subscribe",
    response_model=SubscribeResponse,
    responses={500: {"model": ErrorResponse}},
)
async def subscribe(
    request: Request,
    sheets_client: Callable[[Settings], Any] = Depends(get_sheets_client),
):
    try:
        logger.info("Received request")
        settings = get_settings()
        logger.info("Environment variables check: %s", settings.env_check())

        service = await run_in_threadpool(sheets_client, settings)

        payload = SubscribeRequest.model_validate(await request.json())
        logger.info("Processing email: %s", payload.email)

        await run_in_threadpool(
            append_row,
            service,
            settings.require("google_sheet_id"),
            [payload.email, utc_timestamp()],
            settings.google_sheet_range,
        )
    except Exception as e:
        logger.exception("Error in POST handler: %s", e)
        return _failure(e)

    return SubscribeResponse(success=True, message=SUCCESS_MESSAGE)
