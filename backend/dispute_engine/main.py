"""
Dispute Evidence Engine - FastAPI Application

Main entry point for the dispute evidence backend.

Architecture:
- DisputeCase → EvidenceRecommender (matrix, then rule table) → recommended fields
- DisputeCase + AccountInfo → CoverLetterComposer → cover letter text
- stored / displayed / candidate text → edit tracker → letter to display
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .routers import evidence_router, cover_letters_router

logging.basicConfig(level=config.LOG_LEVEL)

VERSION = "1.0.0"

# Create FastAPI app
app = FastAPI(
    title="Dispute Evidence Engine",
    description="""
    Dispute Evidence Engine - Chargeback Evidence & Cover Letter Service

    Tells a merchant which documents support their dispute and drafts the
    rebuttal cover letter from the data already known about the case.

    ## Endpoints
    1. **Recommendations**: dispute → ordered evidence fields
    2. **Sections**: reason + product type → evidence form sections
    3. **Compose**: dispute + account → cover letter
    4. **Regenerate**: load / update / edit without overwriting manual edits

    ## Key Principles
    - Recommendation and composition are deterministic
    - Missing data renders as visible placeholders, never as errors
    - The matrix toggle is an explicit input
    """,
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(evidence_router)
app.include_router(cover_letters_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Dispute Evidence Engine",
        "version": VERSION,
        "docs": "/docs",
        "evidence_matrix_enabled": config.EVIDENCE_MATRIX_ENABLED,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


# For running with: python -m dispute_engine.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
