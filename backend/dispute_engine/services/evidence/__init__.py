"""
Evidence recommendation.

Rule table and evidence matrix behind a single recommender, plus the
evidence form section catalogue.
"""
from .rule_table import RuleTableResolver, get_rule_table, resolve_rule_table, sort_and_strip
from .evidence_matrix import EvidenceMatrix, MatrixEntry, get_matrix, DEFAULT_PRODUCT_TYPE
from .recommender import EvidenceRecommender, get_recommender, recommend_documents
from .sections import EvidenceSection, EvidenceSectionField, get_evidence_sections
from .confirmation import ConfirmationMessage, confirmation_message

__all__ = [
    "RuleTableResolver", "get_rule_table", "resolve_rule_table", "sort_and_strip",
    "EvidenceMatrix", "MatrixEntry", "get_matrix", "DEFAULT_PRODUCT_TYPE",
    "EvidenceRecommender", "get_recommender", "recommend_documents",
    "EvidenceSection", "EvidenceSectionField", "get_evidence_sections",
    "ConfirmationMessage", "confirmation_message",
]
