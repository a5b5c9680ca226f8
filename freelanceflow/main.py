import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freelanceflow.api.endpoints import assistant, clients, dashboard, expenses, invoices, payments
from freelanceflow.core.config import settings
from freelanceflow.core.exceptions import FreelanceFlowError
from freelanceflow.core.logging import capture_error, init_sentry, setup_logging
from freelanceflow.db.session import create_tables
from freelanceflow.middleware.logging import AccessLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield


app = FastAPI(
    title="FreelanceFlow API",
    description="""
## FreelanceFlow

Clients, invoices, expenses and payments for a freelance business, plus a
dashboard and a finance assistant built on the same data.

### Authentication
Send `Authorization: Bearer <token>`; the token's `sub` claim is your user id.
Every record you read or write is scoped to that id.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Initialize logging and error tracking
setup_logging()
init_sentry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AccessLoggingMiddleware, enabled=settings.ACCESS_LOG_ENABLED)


@app.exception_handler(FreelanceFlowError)
async def domain_error_handler(request: Request, exc: FreelanceFlowError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    capture_error(
        exc,
        context={"request": {"method": request.method, "path": request.url.path}},
        tags={"request_id": getattr(request.state, "request_id", "")},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(invoices.router, prefix="/api/invoices", tags=["invoices"])
app.include_router(expenses.router, prefix="/api/expenses", tags=["expenses"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(assistant.router, prefix="/api/assistant", tags=["assistant"])


@app.get("/")
def root():
    return {"message": f"Welcome to the {settings.APP_NAME} API. See /docs for the OpenAPI schema."}


@app.get("/health")
def health():
    return {"status": "ok"}
