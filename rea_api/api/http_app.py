from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import Awaitable, Callable
import logging
import uuid

from fastapi import FastAPI, Header, HTTPException, Response

from rea_api.api.handlers.deps import ApiDeps
from rea_api.api.handlers.filings import get_filings_handler
from rea_api.api.handlers.registered_email_address import (
    create_registered_email_address_handler,
    get_registered_email_address_handler,
)
from rea_api.api.handlers.transactions import resolve_transaction_handler
from rea_api.api.handlers.validation_status import get_validation_status_handler
from rea_api.api.schemas import (
    ErrorResponse,
    FilingResponse,
    HealthResponse,
    RegisteredEmailAddressRequest,
    RegisteredEmailAddressResponse,
    RegisteredEmailAddressValueResponse,
    ValidationStatusResponse,
)
from rea_api.domain.constants import IDENTITY_HEADER, REQUEST_ID_HEADER
from rea_api.domain.error_taxonomy import (
    GENERIC_ERROR_DETAIL,
    GENERIC_READ_ERROR_DETAIL,
    ErrorCode,
    http_status_for,
    public_detail,
)
from rea_api.domain.errors import (
    DomainValidationError,
    SubmissionNotFoundError,
    TransactionGatewayError,
    TransactionNotFoundError,
)
from rea_api.domain.models import Transaction

SERVICE_NAME = "registered-email-address-api"
BASE_PATH = "/transactions/{transaction_id}/registered-email-address"
PRIVATE_BASE_PATH = "/private/transactions/{transaction_id}/registered-email-address"


def _http_error(code: ErrorCode, detail: str, *, generic_detail: str = GENERIC_READ_ERROR_DETAIL) -> HTTPException:
    return HTTPException(
        status_code=http_status_for(code),
        detail=public_detail(code, detail, generic_detail=generic_detail),
    )


def build_app(
    run_id: str,
    api_deps: ApiDeps | None = None,
    on_startup: Callable[[], Awaitable[None]] | None = None,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    logger = logging.getLogger("runtime")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        del app
        logger.info("service started", extra={"service": SERVICE_NAME, "run_id": run_id})

        if on_startup is not None:
            await on_startup()

        yield

        if on_shutdown is not None:
            await on_shutdown()

        logger.info("service stopped", extra={"service": SERVICE_NAME, "run_id": run_id})

    app = FastAPI(title=SERVICE_NAME, version="0.1.0", lifespan=lifespan)

    def _deps() -> ApiDeps:
        if api_deps is None:
            raise HTTPException(status_code=503, detail="api dependencies are not available")
        return api_deps

    async def _resolve_transaction(
        deps: ApiDeps,
        *,
        transaction_id: str,
        request_id: str,
        generic_detail: str = GENERIC_READ_ERROR_DETAIL,
    ) -> Transaction:
        try:
            return await resolve_transaction_handler(deps, transaction_id=transaction_id, request_id=request_id)
        except TransactionNotFoundError as exc:
            raise _http_error("transaction_not_found", str(exc)) from exc
        except TransactionGatewayError as exc:
            logger.error(
                "transaction lookup failed: %s",
                exc,
                extra={"request_id": request_id, "transaction_id": transaction_id},
            )
            raise _http_error(
                "transaction_gateway_failed",
                str(exc),
                generic_detail=generic_detail,
            ) from exc

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service=SERVICE_NAME)

    @app.post(
        BASE_PATH,
        status_code=201,
        response_model=RegisteredEmailAddressResponse,
        responses={
            401: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
            503: {"model": ErrorResponse},
        },
        tags=["Registered Email Address"],
    )
    async def create_registered_email_address(
        transaction_id: str,
        request: RegisteredEmailAddressRequest,
        response: Response,
        request_id: str | None = Header(default=None, alias=REQUEST_ID_HEADER),
        user_id: str | None = Header(default=None, alias=IDENTITY_HEADER),
    ) -> RegisteredEmailAddressResponse:
        deps = _deps()
        request_id = request_id or str(uuid.uuid4())
        if not user_id:
            raise HTTPException(status_code=401, detail="user identity is required")

        logger.info(
            "Create registered email address request",
            extra={"request_id": request_id, "transaction_id": transaction_id},
        )
        transaction = await _resolve_transaction(
            deps,
            transaction_id=transaction_id,
            request_id=request_id,
            generic_detail=GENERIC_ERROR_DETAIL,
        )
        outcome = await create_registered_email_address_handler(
            deps,
            transaction=transaction,
            request=request,
            request_id=request_id,
            user_id=user_id,
        )
        if outcome.response is None:
            raise _http_error(
                outcome.error_code or "internal_error",
                outcome.detail,
                generic_detail=GENERIC_ERROR_DETAIL,
            )

        response.headers["Location"] = outcome.response.links.get("self", outcome.response.id)
        return outcome.response

    @app.get(
        BASE_PATH,
        response_model=RegisteredEmailAddressValueResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Registered Email Address"],
    )
    async def get_registered_email_address(
        transaction_id: str,
        request_id: str | None = Header(default=None, alias=REQUEST_ID_HEADER),
    ) -> RegisteredEmailAddressValueResponse:
        deps = _deps()
        request_id = request_id or str(uuid.uuid4())
        try:
            return await get_registered_email_address_handler(
                deps,
                transaction_id=transaction_id,
                request_id=request_id,
            )
        except SubmissionNotFoundError as exc:
            raise _http_error("submission_not_found", str(exc)) from exc

    @app.get(
        BASE_PATH + "/validation-status",
        response_model=ValidationStatusResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Registered Email Address"],
    )
    async def get_validation_status(
        transaction_id: str,
        request_id: str | None = Header(default=None, alias=REQUEST_ID_HEADER),
    ) -> ValidationStatusResponse:
        deps = _deps()
        request_id = request_id or str(uuid.uuid4())
        logger.info(
            "Calling service to get the registered email address submission",
            extra={"request_id": request_id, "transaction_id": transaction_id},
        )
        try:
            return await get_validation_status_handler(
                deps,
                transaction_id=transaction_id,
                request_id=request_id,
            )
        except SubmissionNotFoundError as exc:
            raise _http_error("submission_not_found", str(exc)) from exc

    @app.get(
        PRIVATE_BASE_PATH + "/filings",
        response_model=list[FilingResponse],
        responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
        tags=["Filings"],
    )
    async def get_filings(
        transaction_id: str,
        request_id: str | None = Header(default=None, alias=REQUEST_ID_HEADER),
    ) -> list[FilingResponse]:
        deps = _deps()
        request_id = request_id or str(uuid.uuid4())
        transaction = await _resolve_transaction(deps, transaction_id=transaction_id, request_id=request_id)
        try:
            return await get_filings_handler(deps, transaction=transaction, request_id=request_id)
        except DomainValidationError as exc:
            raise _http_error("validation_error", str(exc)) from exc
        except SubmissionNotFoundError as exc:
            raise _http_error("submission_not_found", str(exc)) from exc

    return app
