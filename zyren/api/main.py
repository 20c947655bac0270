"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zyren.dashboard import DashboardService
from zyren.database.memory import MemoryDB
from zyren.database.sessions import SessionCache
from zyren.error_handler import ErrorHandler
from zyren.exceptions import SimulatorError, SubmitNotAllowedError, WizardClosedError, ZyrenError
from zyren.flows.validation import FormValidationError
from zyren.session.state_manager import SessionNotFoundError, StateManager
from zyren.utils.config_loader import load_zyren_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

config = load_zyren_config()

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================

if config.integrations.use_real_clients:
    from zyren.integrations.clients.real_http import (
        RealBiometricClient,
        RealLocationClient,
        RealWeatherClient,
        RealWearableClient,
    )

    api_key = os.getenv(config.integrations.api_key_env, "")
    timeout = config.integrations.request_timeout
    wearable_client = RealWearableClient(config.integrations.wearable_base_url or None, api_key, timeout)
    biometric_client = RealBiometricClient(config.integrations.biometrics_base_url or None, api_key, timeout)
    location_client = RealLocationClient(config.integrations.location_base_url or None, timeout)
    weather_client = RealWeatherClient(config.integrations.weather_base_url or None, api_key, timeout)
    logger.info("Using real HTTP integration clients")
else:
    from zyren.integrations.clients.mocks import (
        MockBiometricClient,
        MockLocationClient,
        MockWeatherClient,
        MockWearableClient,
    )

    wearable_client = MockWearableClient()
    biometric_client = MockBiometricClient()
    location_client = MockLocationClient()
    weather_client = MockWeatherClient()
    logger.info("Using mock integration clients")

db = MemoryDB()
session_cache = SessionCache()
state_manager = StateManager(session_cache, db, wearable_client, biometric_client, config)
dashboard_service = DashboardService(location_client, weather_client, wearable_client)
error_handler = ErrorHandler()


def get_db() -> MemoryDB:
    return db


def get_state_manager() -> StateManager:
    return state_manager


def get_dashboard_service() -> DashboardService:
    return dashboard_service


# Routers import the providers above, so they are registered after them.
from zyren.api.dashboard_router import api as dashboard_api  # noqa: E402
from zyren.api.onboarding_router import api as onboarding_api  # noqa: E402
from zyren.api.policies_router import api as policies_api  # noqa: E402

app = FastAPI(
    title="Zyren Pricing API",
    description="Onboarding wizard, policy cost simulator and dashboard data for the Zyren app",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(onboarding_api, prefix="/api/v1/onboarding", tags=["Onboarding"])
app.include_router(policies_api, prefix="/api/v1/policies", tags=["Policies"])
app.include_router(dashboard_api, prefix="/api/v1", tags=["Dashboard"])


@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError):
    return JSONResponse(status_code=422, content={"message": exc.message, "field_errors": exc.field_errors})


@app.exception_handler(SessionNotFoundError)
async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    return JSONResponse(status_code=404, content={"message": "Session not found", "detail": str(exc.args[0])})


@app.exception_handler(ZyrenError)
async def zyren_error_handler(request: Request, exc: ZyrenError):
    status_code = 409 if isinstance(exc, (SimulatorError, SubmitNotAllowedError, WizardClosedError)) else 400
    return JSONResponse(status_code=status_code, content={"message": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    context = {
        "method": request.method,
        "path": request.url.path,
        "session_id": request.path_params.get("session_id"),
    }
    return JSONResponse(status_code=500, content=error_handler.handle_exception(exc, context))


@app.get("/health")
async def health():
    return {"status": "ok", "sessions": "connected" if session_cache.ping() else "unavailable"}


@app.post("/api/v1/sessions")
async def create_session(body: dict):
    user_id = str((body or {}).get("user_id") or "").strip()
    if not user_id:
        raise FormValidationError(field_errors={"user_id": "user_id is required"})
    return {"session_id": state_manager.create_session(user_id)}


@app.delete("/api/v1/sessions/{session_id}")
async def end_session(session_id: str):
    state_manager.end_session(session_id)
    return {"success": True}
