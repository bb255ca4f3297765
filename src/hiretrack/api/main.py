"""
HireTrack API - FastAPI backend for the job-application pipeline
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hiretrack import __version__
from hiretrack.api.errors import install_error_handlers
from hiretrack.api.routes import applications
from hiretrack.core.di import Container, bootstrap_dependencies
from hiretrack.infrastructure.auth import TokenService


def create_app(
    container: Optional[Container] = None,
    token_service: Optional[TokenService] = None,
) -> FastAPI:
    app = FastAPI(
        title="HireTrack API",
        description="API for job applications and their hiring pipeline",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store/queue factories are lazy; nothing connects until the first request.
    app.state.container = bootstrap_dependencies(container=container or Container())
    app.state.token_service = token_service

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": __version__}

    app.include_router(applications.router, prefix="/api", tags=["Applications"])
    install_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
