"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from subsidy_calc.api.deps import async_session
from subsidy_calc.api.routes import calculator
from subsidy_calc.config import settings
from subsidy_calc.data.programs import ProgramRepository
from subsidy_calc.engine.errors import CalculatorValidationError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.seed_sample_program:
        async with async_session() as session:
            await ProgramRepository(session).ensure_sample_program()
    yield


app = FastAPI(
    title="Subsidy Calculator",
    description="Subsidized loan payment comparison for business support programs",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculator.router)


@app.exception_handler(CalculatorValidationError)
async def calculator_validation_error(request: Request, exc: CalculatorValidationError):
    logger.info("Calculation rejected (%s): %s", exc.code, exc.message)
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": exc.message, "code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Некорректные или неполные параметры расчета",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
