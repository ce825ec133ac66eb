"""FastAPI application entry point."""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from editorial_workflow.api.deps import Actor, get_current_actor
from editorial_workflow.api.errors import workflow_error_handler
from editorial_workflow.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from editorial_workflow.api.routes import content, metrics, notifications, workflows
from editorial_workflow.core.config import get_settings
from editorial_workflow.core.errors import WorkflowError

settings = get_settings()
docs_enabled = settings.api_docs_enabled
if docs_enabled is None:
    docs_enabled = settings.environment != "production"

app = FastAPI(
    title="Editorial Workflow API",
    description="Configurable editorial workflow engine for CMS content",
    version="1.0.0",
    docs_url="/api/docs" if docs_enabled else None,
    redoc_url="/api/redoc" if docs_enabled else None,
    openapi_url="/api/openapi.json" if docs_enabled else None,
)

app.add_exception_handler(WorkflowError, workflow_error_handler)

# Middleware configuration (applied in reverse order)
# 1. Request logging (outermost - logs all requests)
app.add_middleware(RequestLoggingMiddleware)

# 2. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 3. CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(workflows.router, prefix="/api/workflows", tags=["workflows"])
app.include_router(content.router, prefix="/api/content", tags=["content"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
app.include_router(metrics.router, prefix="/api", tags=["metrics"])


@app.get("/api/me", tags=["auth"])
async def get_current_actor_info(actor: Actor = Depends(get_current_actor)):
    """Get the authenticated actor and its role names."""
    return {"actor_id": actor.actor_id, "roles": sorted(actor.roles)}
