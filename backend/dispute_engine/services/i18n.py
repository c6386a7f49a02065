"""
Display-string lookup.

Labels and descriptions pass through translate() so a host application can
install a real catalogue. The default lookup returns the text unchanged.
"""
from typing import Callable, Optional

TEXT_DOMAIN = "dispute-evidence-engine"

_lookup: Optional[Callable[[str, str], str]] = None


def install_translator(lookup: Optional[Callable[[str, str], str]]) -> None:
    """Install a (text, domain) -> text lookup; None restores the identity."""
    global _lookup
    _lookup = lookup


def translate(text: str, domain: str = TEXT_DOMAIN) -> str:
    if _lookup is None:
        return text
    return _lookup(text, domain)


_ = translate
