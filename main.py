import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from config import get_settings
from routes.admin_routes import router as admin_router
from routes.chat_routes import router as chat_router
from routes.user_routes import router as user_router
from routes.video_routes import router as video_router
from services.errors import ShortKatError

settings = get_settings()


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


_configure_logging()
logger = logging.getLogger("shortkat")

app = FastAPI(title="ShortKat API")

prefix = settings.api_prefix
app.include_router(user_router, prefix=prefix, tags=["Users"])
app.include_router(video_router, prefix=prefix, tags=["Videos"])
app.include_router(chat_router, prefix=prefix, tags=["Chat"])
app.include_router(admin_router, prefix=f"{prefix}/admin", tags=["Admin"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


# ======================================================
# ERROR RESPONSES: always {"error": "..."}
# ======================================================
@app.exception_handler(ShortKatError)
async def shortkat_error_handler(request: Request, exc: ShortKatError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get(f"{prefix}/health")
def health():
    return {"status": "ok", "store": settings.store_backend}


def main():
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
