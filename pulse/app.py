from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pulse.config import settings
from pulse.database import sessionmanager
from pulse.logger import logger, setup_logging
from pulse.routes import router
from pulse.utils.exceptions import format_validation_error


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    if settings.AUTO_CREATE_TABLES:
        await sessionmanager.create_all()
    logger.info("Pulse API started")
    yield
    await sessionmanager.close()


app = FastAPI(title="Pulse", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": format_validation_error(exc)}
    )


app.include_router(router, prefix=settings.API_PREFIX)
