import uvicorn
import asyncio
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from slowapi.errors import RateLimitExceeded

from logger import logger
from limiter import limiter, rate_limit_handler
from utils.exceptions import RateCalculationError
from utils.exception_handler import (
    custom_http_exception_handler,
    rate_calculation_exception_handler,
    validation_exception_handler,
)

from router import CommonRouter, DefaultRouter, StatusRouter

from database.db import init_models  # sync DB init

app = FastAPI(title="Rate Engine")

# Routers
app.include_router(CommonRouter)
app.include_router(StatusRouter)
app.include_router(DefaultRouter)

# Rate limiting
app.state.limiter = limiter

# Exception handlers
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(RateCalculationError, rate_calculation_exception_handler)
app.add_exception_handler(HTTPException, custom_http_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------
# Startup event
# -------------------------------
@app.on_event("startup")
async def startup_event():
    loop = asyncio.get_running_loop()
    # Initialize DB safely in executor
    await loop.run_in_executor(None, init_models)
    logger.info("Rate engine started")


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
