import logging
import os
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from shared.errors import AppError, app_error_handler, request_validation_handler

# Register every model before the first mapper configuration
import services.identity.models
import services.school_management.models
import services.supervision_management.models

from services.identity.controllers.auth_service import router as auth_router
from services.school_management.controllers.school_service import router as school_router
from services.school_management.controllers.teacher_service import router as teacher_router
from services.school_management.controllers.teacher_account_service import (
    router as teacher_account_router,
    function_router
)
from services.supervision_management.controllers.supervision_service import router as supervision_router
from services.supervision_management.controllers.teaching_administration_service import (
    router as teaching_administration_router
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler()]
)

app = FastAPI(title="Supervisi Digital Guru Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

@app.get("/")
def health_check():
    return {"status": "Supervisi Digital Guru Backend is running"}


app.include_router(auth_router)
app.include_router(school_router)
app.include_router(teacher_router)
app.include_router(teacher_account_router)
app.include_router(function_router)
app.include_router(supervision_router)
app.include_router(teaching_administration_router)
