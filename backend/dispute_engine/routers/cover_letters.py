"""
Dispute Evidence Engine - Cover Letters API Router

Composes cover letters and applies the manual-edit rules when the
displayed letter may need regenerating.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..models import AccountInfo
from ..services.cover_letter import (
    CoverLetterComposer,
    apply_user_edit,
    get_attachment_compiler,
    get_composer,
    initial_draft,
    should_auto_regenerate,
)
from .evidence import DisputePayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cover-letters", tags=["cover-letters"])


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class AccountPayload(BaseModel):
    name: str = ""
    support_address_line1: str = ""
    support_address_line2: str = ""
    support_address_city: str = ""
    support_address_state: str = ""
    support_address_postal_code: str = ""
    support_address_country: str = ""
    support_email: Optional[str] = None
    support_phone: Optional[str] = None

    def to_account(self) -> AccountInfo:
        return AccountInfo.from_dict(self.model_dump())


class ComposeRequest(BaseModel):
    dispute: DisputePayload
    account: AccountPayload = AccountPayload()
    bank_name: Optional[str] = None
    refund_status: Optional[str] = None
    duplicate_status: Optional[str] = None
    today: Optional[date] = None


class AttachmentEntry(BaseModel):
    letter: str
    key: str
    label: str


class ComposeResponse(BaseModel):
    text: str
    attachments: List[AttachmentEntry]


class RegenerateRequest(ComposeRequest):
    mode: Literal["load", "update", "edit"]
    # load: previously saved letter; update: previous candidate
    stored_text: Optional[str] = None
    displayed_text: Optional[str] = None
    was_manually_edited: bool = False
    # edit only
    new_text: Optional[str] = None


class RegenerateResponse(BaseModel):
    text: str
    is_manually_edited: bool
    candidate: str


def _compose(request: ComposeRequest, composer: CoverLetterComposer) -> str:
    return composer.compose(
        request.dispute.to_case(),
        request.account.to_account(),
        bank_name=request.bank_name,
        refund_status=request.refund_status,
        duplicate_status=request.duplicate_status,
        today=request.today,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/compose", response_model=ComposeResponse)
async def compose_letter(request: ComposeRequest):
    """Compose the cover letter for a dispute."""
    text = _compose(request, get_composer())

    case = get_composer().resolve_case(
        request.dispute.to_case(), request.refund_status, request.duplicate_status,
    )
    entries = get_attachment_compiler().compile_entries(case)
    logger.info(f"Composed cover letter for dispute {case.id} with {len(entries)} attachments")

    return ComposeResponse(
        text=text,
        attachments=[
            AttachmentEntry(letter=letter, key=key.value, label=label)
            for letter, key, label in entries
        ],
    )


@router.post("/regenerate", response_model=RegenerateResponse)
async def regenerate_letter(request: RegenerateRequest):
    """
    Decide what letter to display after a load, an input change, or a user edit.

    The candidate is always recomputed from the request's dispute data.
    """
    candidate = _compose(request, get_composer())

    if request.mode == "load":
        draft = initial_draft(request.stored_text, candidate)
        return RegenerateResponse(
            text=draft.text, is_manually_edited=draft.is_manually_edited, candidate=candidate,
        )

    if request.mode == "update":
        if request.displayed_text is None:
            raise HTTPException(status_code=400, detail="displayed_text is required for update")
        result = should_auto_regenerate(
            request.stored_text,
            request.displayed_text,
            candidate,
            request.was_manually_edited,
        )
    else:
        if request.new_text is None:
            raise HTTPException(status_code=400, detail="new_text is required for edit")
        result = apply_user_edit(request.new_text, candidate)

    return RegenerateResponse(
        text=result.new_text, is_manually_edited=result.new_manually_edited, candidate=candidate,
    )
