# app/main.py
import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Header, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .core import ProductIn, product_error_message
from .database import ProductStore, store
from .errors import DEFAULT_ERROR_MESSAGE, ApiError, Unauthorized, error_envelope
from .logging_config import setup_logging
from .sdk import (
    create_product_logic,
    delete_product_logic,
    get_product_logic,
    list_products_logic,
    product_stats_logic,
    search_products_logic,
    update_product_logic,
)

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to the Product API! Go to /api/products to see all products."


# ---------------------------
# Dependencies
# ---------------------------
def get_store() -> ProductStore:
    return store


StoreDependency = Annotated[ProductStore, Depends(get_store)]


async def require_api_key(x_api_key: Optional[str] = Header(None)) -> None:
    if not x_api_key or x_api_key != settings.API_KEY:
        raise Unauthorized()


# Route-level dependencies resolve before body errors are raised, so a request
# without a valid key gets 401 whatever its (well-formed) payload.
Authenticated = [Depends(require_api_key)]


# ---------------------------
# Routes
# ---------------------------
router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def welcome():
    return WELCOME_TEXT


@router.get("/api/products")
async def list_products(
    products: StoreDependency,
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    return list_products_logic(products, category=category, page=page, limit=limit)


# search and stats must be registered before /api/products/{product_id}
@router.get("/api/products/search")
async def search_products(products: StoreDependency, name: Optional[str] = None):
    return search_products_logic(products, name)


@router.get("/api/products/stats")
async def product_stats(products: StoreDependency):
    return product_stats_logic(products)


@router.get("/api/products/{product_id}")
async def get_product(product_id: str, products: StoreDependency):
    return get_product_logic(products, product_id)


@router.post("/api/products", status_code=status.HTTP_201_CREATED, dependencies=Authenticated)
async def create_product(payload: ProductIn, products: StoreDependency):
    return create_product_logic(products, payload.model_dump())


@router.put("/api/products/{product_id}", dependencies=Authenticated)
async def update_product(product_id: str, payload: ProductIn, products: StoreDependency):
    return update_product_logic(products, product_id, payload.model_dump())


@router.delete(
    "/api/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=Authenticated,
)
async def delete_product(product_id: str, products: StoreDependency):
    delete_product_logic(products, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------
# Middleware & error handlers
# ---------------------------
async def log_requests(request: Request, call_next):
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    logger.info("[%s] %s %s", datetime.now(timezone.utc).isoformat(), request.method, path)
    return await call_next(request)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(status_code, message))


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    logger.warning("%s %s -> 400 %s", request.method, request.url.path, errors)
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Request body must be valid JSON."
    else:
        message = product_error_message(errors) or "Invalid request parameters."
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or DEFAULT_ERROR_MESSAGE)


# ---------------------------
# App factory
# ---------------------------
def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Products API (in-memory)")

    if not settings.is_production:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
    # registered last: outermost, logs before CORS and routing
    app.middleware("http")(log_requests)

    app.include_router(router)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    return app


app = create_app()


def run() -> None:
    logger.info("Server is running on http://localhost:%d", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
