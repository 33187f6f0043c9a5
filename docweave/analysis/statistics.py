"""Reductions over a finished relationship list."""

from collections import Counter
from collections.abc import Sequence

from docweave.domain.document import DocumentRecord
from docweave.domain.relationships import DocumentRelationship, RelationshipStats


def filter_by_confidence(
    relationships: list[DocumentRelationship], min_confidence: float
) -> list[DocumentRelationship]:
    return [rel for rel in relationships if rel.confidence >= min_confidence]


def sort_by_score(relationships: list[DocumentRelationship]) -> list[DocumentRelationship]:
    """Sort relationships by score, highest first. The sort is stable."""
    return sorted(relationships, key=lambda rel: rel.score, reverse=True)


def cap_per_document(
    relationships: list[DocumentRelationship], max_per_document: int
) -> list[DocumentRelationship]:
    """Keep relationships in the given order while both endpoints are under the cap.

    Args:
        relationships: Relationships, best first
        max_per_document: Maximum relationships kept per document, 0 disables the cap

    Returns:
        Relationships that fit within the cap, in the given order
    """
    if max_per_document <= 0:
        return list(relationships)

    kept = []
    counts: Counter[str] = Counter()
    for rel in relationships:
        if counts[rel.document_a] >= max_per_document or counts[rel.document_b] >= max_per_document:
            continue
        counts[rel.document_a] += 1
        counts[rel.document_b] += 1
        kept.append(rel)
    return kept


def degree_map(relationships: list[DocumentRelationship]) -> Counter[str]:
    """Number of relationships touching each document."""
    degrees: Counter[str] = Counter()
    for rel in relationships:
        degrees[rel.document_a] += 1
        degrees[rel.document_b] += 1
    return degrees


def compute_stats(
    documents: Sequence[DocumentRecord], relationships: list[DocumentRelationship]
) -> RelationshipStats:
    """Compute corpus statistics for the final relationship list.

    Args:
        documents: The analyzed corpus
        relationships: Relationships after filtering and capping

    Returns:
        RelationshipStats
    """
    by_type = Counter(rel.relationship_type.value for rel in relationships)
    by_strength = Counter(rel.strength.value for rel in relationships)
    degrees = degree_map(relationships)

    average_score = (
        sum(rel.score for rel in relationships) / len(relationships) if relationships else 0.0
    )

    # Ties go to the document supplied first
    most_connected = None
    max_connections = 0
    for document in documents:
        if degrees[document.id] > max_connections:
            most_connected = document.id
            max_connections = degrees[document.id]

    connected = sum(1 for document in documents if degrees[document.id] >= 1)

    return RelationshipStats(
        documents_analyzed=len(documents),
        total_relationships=len(relationships),
        relationships_by_type=dict(by_type),
        relationships_by_strength=dict(by_strength),
        average_score=average_score,
        most_connected_document=most_connected,
        max_connections=max_connections,
        isolated_documents=len(documents) - connected,
    )
