"""
FastAPI Application Entry Point
Main application setup and route registration
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from clubhub.config import settings
from clubhub.database import connect_db, disconnect_db
from clubhub.errors import ClubHubError, UnexpectedError
from clubhub.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Campus club events, recruitments and applications",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClubHubError)
async def clubhub_error_handler(request: Request, exc: ClubHubError):
    """Domain errors carry their own status code and body"""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Malformed input is a 400 for clients, not FastAPI's default 422
    return JSONResponse(
        status_code=400,
        content={"message": "Validation error", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = UnexpectedError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Startup event
@app.on_event("startup")
async def startup():
    """Run on application startup"""
    await connect_db()
    logger.info("%s started in %s mode", settings.APP_NAME, settings.APP_ENV)


# Shutdown event
@app.on_event("shutdown")
async def shutdown():
    """Run on application shutdown"""
    await disconnect_db()
    logger.info("%s stopped", settings.APP_NAME)


# Health check endpoint
@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": "1.0.0"
    }


# Import and include routers
from clubhub.routes import auth, events, registrations, recruitments, applications, clubs, admin  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(events.router, prefix="/events", tags=["Events"])
app.include_router(registrations.router, prefix="/registrations", tags=["Registrations"])
app.include_router(recruitments.router, prefix="/recruitments", tags=["Recruitments"])
app.include_router(applications.router, prefix="/applications", tags=["Applications"])
app.include_router(clubs.router, prefix="/clubs", tags=["Clubs"])
app.include_router(admin.router, prefix="/admin", tags=["Club Admin"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clubhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
