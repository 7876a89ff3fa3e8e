import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pharmacy_navi.ai.provider_factory import get_ai_provider
from pharmacy_navi.routes.chat_routes import SERVER_ERROR_REPLY, router as chat_router
from pharmacy_navi.routes.line_routes import router as line_router


_logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
DEFAULT_CORS_ORIGIN_REGEX = r"^https?://([a-z0-9-]+\.)*localhost(:\d+)?$"


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _cors_options() -> dict:
    origin_regex = os.getenv("CORS_ALLOW_ORIGIN_REGEX") or DEFAULT_CORS_ORIGIN_REGEX
    return {
        "allow_origins": _split_csv(os.getenv("CORS_ORIGINS")) or DEFAULT_CORS_ORIGINS,
        # Values copied from `.env` may arrive with doubled backslashes.
        "allow_origin_regex": origin_regex.replace("\\\\", "\\"),
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }


async def _chat_validation_handler(request: Request, exc: RequestValidationError):
    # /api/chat answers every failure with the fixed reply; other routes keep FastAPI's 422.
    if request.url.path != "/api/chat":
        return await request_validation_exception_handler(request, exc)
    _logger.warning("chat request rejected errors=%s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"reply": SERVER_ERROR_REPLY},
    )


async def _close_cached_provider() -> None:
    if get_ai_provider.cache_info().currsize == 0:
        return
    close = getattr(get_ai_provider(), "aclose", None)
    if callable(close):
        await close()
        _logger.info("chat provider closed")


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        yield
    finally:
        await _close_cached_provider()


app = FastAPI(title="Toyama Pharmacy Navi Backend", lifespan=lifespan)
app.add_middleware(CORSMiddleware, **_cors_options())
app.add_exception_handler(RequestValidationError, _chat_validation_handler)

app.include_router(chat_router)
app.include_router(line_router)


@app.get("/")
def read_root():
    return {"message": "Backend is running"}
