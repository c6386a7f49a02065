"""
Dispute Evidence Engine - Evidence API Router

Recommended evidence fields and evidence form sections for a dispute.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from .. import config
from ..models import DisputeCase, ProductType
from ..services.evidence import (
    confirmation_message,
    get_evidence_sections,
    recommend_documents,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evidence", tags=["evidence"])


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class DisputePayload(BaseModel):
    """Dispute record as returned by the dispute store."""
    id: Optional[str] = None
    reason: Optional[str] = None
    product_type: Optional[str] = None
    refund_status: Optional[str] = None
    duplicate_status: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    created: Optional[int] = None
    order: Optional[Dict[str, Any]] = None
    charge: Optional[Dict[str, Any]] = None
    evidence: Dict[str, Any] = {}
    bank_name: Optional[str] = None

    def to_case(self) -> DisputeCase:
        return DisputeCase.from_dict(self.model_dump())


class RecommendationRequest(BaseModel):
    dispute: DisputePayload
    # Falls back to DISPUTE_EVIDENCE_MATRIX_ENABLED when omitted
    matrix_enabled: Optional[bool] = None


class RecommendedDocumentResponse(BaseModel):
    key: str
    label: str
    description: str


class RecommendationResponse(BaseModel):
    reason: str
    matrix_enabled: bool
    documents: List[RecommendedDocumentResponse]


class SectionFieldResponse(BaseModel):
    key: str
    type: str
    label: Optional[str] = None
    description: Optional[str] = None
    max_length: Optional[int] = None


class SectionResponse(BaseModel):
    key: str
    title: str
    description: Optional[str] = None
    fields: List[SectionFieldResponse]


class ConfirmationResponse(BaseModel):
    title: str
    subtitle: str
    next_steps: List[str]


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/recommendations", response_model=RecommendationResponse)
async def get_recommendations(request: RecommendationRequest):
    """Ordered, key-unique list of evidence fields to ask the merchant for."""
    case = request.dispute.to_case()
    matrix_enabled = (
        config.EVIDENCE_MATRIX_ENABLED if request.matrix_enabled is None else request.matrix_enabled
    )
    documents = recommend_documents(case, matrix_enabled)
    logger.info(f"Recommended {len(documents)} documents for dispute {case.id} ({case.reason.value})")
    return RecommendationResponse(
        reason=case.reason.value,
        matrix_enabled=matrix_enabled,
        documents=[RecommendedDocumentResponse(**d.to_dict()) for d in documents],
    )


@router.get("/sections", response_model=List[SectionResponse])
async def get_sections(
    reason: Optional[str] = Query(None),
    product_type: Optional[str] = Query(None),
):
    """Evidence form sections for a reason and product type."""
    if product_type and product_type not in {p.value for p in ProductType}:
        raise HTTPException(status_code=400, detail=f"Unknown product type: {product_type}")
    sections = get_evidence_sections(reason, product_type)
    return [SectionResponse(**s.to_dict()) for s in sections]


@router.post("/confirmation", response_model=ConfirmationResponse)
async def get_confirmation(dispute: DisputePayload):
    """Copy shown after evidence has been submitted."""
    return ConfirmationResponse(**confirmation_message(dispute.to_case()).to_dict())
