"""
Cover letter composition.

Attachment list, reason-specific bodies, full letter assembly and the
manual-edit tracker that guards user prose from regeneration.
"""
from .attachments import AttachmentCompiler, compile_attachments, get_attachment_compiler
from .composer import (
    CoverLetterComposer, build_cover_letter_data, compose_cover_letter, get_composer,
)
from .edit_tracker import (
    CoverLetterSession, apply_user_edit, initial_draft, should_auto_regenerate,
)

__all__ = [
    "AttachmentCompiler", "compile_attachments", "get_attachment_compiler",
    "CoverLetterComposer", "build_cover_letter_data", "compose_cover_letter", "get_composer",
    "CoverLetterSession", "apply_user_edit", "initial_draft", "should_auto_regenerate",
]
