"""Dispute Evidence Engine - Data Models"""
from .dispute import (
    # Enums
    DisputeReason, ProductType, RefundStatus, DuplicateStatus,
    # Dispute snapshot
    BillingDetails, LineItem, Charge, OrderInfo, DisputeCase, AccountInfo,
)
from .evidence import (
    EvidenceKey, VOCABULARY, is_vocabulary_key,
    EvidenceField, RecommendedDocument, AttachmentCandidate,
)
from .cover_letter import CoverLetterData, CoverLetterDraft, RegenerationResult

__all__ = [
    "DisputeReason", "ProductType", "RefundStatus", "DuplicateStatus",
    "BillingDetails", "LineItem", "Charge", "OrderInfo", "DisputeCase", "AccountInfo",
    "EvidenceKey", "VOCABULARY", "is_vocabulary_key",
    "EvidenceField", "RecommendedDocument", "AttachmentCandidate",
    "CoverLetterData", "CoverLetterDraft", "RegenerationResult",
]
