"""
Dispute Evidence Engine - Configuration

Read once from the environment. Only the HTTP layer reads these values;
the engine receives the matrix toggle as an argument.
"""
import os


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Use the evidence matrix before the rule table
EVIDENCE_MATRIX_ENABLED = _flag("DISPUTE_EVIDENCE_MATRIX_ENABLED")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Comma-separated list, "*" allows any origin
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
