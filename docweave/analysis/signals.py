"""Relationship signals: independent detectors scoring one pair of documents.

Each detector returns at most one relationship. The lexical and structural
detectors are plain functions of the two documents and the config; the
semantic detector awaits the embedding capability.
"""

from loguru import logger
from pydantic import BaseModel

from docweave.domain.document import DocumentRecord
from docweave.domain.relationships import (
    DocumentRelationship,
    EvidenceType,
    RelationshipConfig,
    RelationshipEvidence,
    RelationshipType,
)
from docweave.embedders.base import EmbeddingCapability

from . import text

MAX_EVIDENCE_EXAMPLES = 5

REFERENCE_PHRASES = (
    "see also",
    "refer to",
    "reference",
    "see section",
    "see chapter",
    "as mentioned in",
    "described in",
)


class CrossReferenceWeights(BaseModel):
    """Additive weights of the cross-reference signal."""

    model_config = {"frozen": True}

    filename_mention: float = 0.3  # per direction
    shared_phrase: float = 0.1  # per reference phrase found in both documents
    min_score: float = 0.2  # exclusive


class StructuralWeights(BaseModel):
    """Additive weights of the structural similarity signal."""

    model_config = {"frozen": True}

    same_document_type: float = 0.3
    similar_section_count: float = 0.2
    max_section_count_diff: int = 2
    shared_feature: float = 0.1  # per shared images/tables/code flag
    section_title_factor: float = 0.4
    min_score: float = 0.3  # inclusive


TOPIC_CONFIDENCE_FACTOR = 0.8
CONCEPT_CONFIDENCE_FACTOR = 0.9
STRUCTURAL_CONFIDENCE_FACTOR = 0.8
SEMANTIC_CONFIDENCE_FACTOR = 0.9

CROSS_REFERENCE_WEIGHTS = CrossReferenceWeights()
STRUCTURAL_WEIGHTS = StructuralWeights()


def _relationship(
    doc_a: DocumentRecord,
    doc_b: DocumentRecord,
    *,
    relationship_type: RelationshipType,
    score: float,
    confidence: float,
    evidence: RelationshipEvidence,
) -> DocumentRelationship:
    return DocumentRelationship(
        document_a=doc_a.id,
        document_b=doc_b.id,
        relationship_type=relationship_type,
        score=score,
        confidence=confidence,
        evidence=[evidence],
    )


def analyze_topic_similarity(
    doc_a: DocumentRecord, doc_b: DocumentRecord, config: RelationshipConfig
) -> DocumentRelationship | None:
    """Jaccard similarity of the two keyword sets.

    Args:
        doc_a: First document
        doc_b: Second document
        config: Analysis thresholds

    Returns:
        Topic similarity relationship, or None below the topic threshold
    """
    keywords_a = set(doc_a.keywords)
    keywords_b = set(doc_b.keywords)
    total_unique = len(keywords_a | keywords_b)
    if total_unique == 0:
        return None

    shared = sorted(keywords_a & keywords_b)
    score = len(shared) / total_unique
    if score < config.topic_similarity_threshold:
        return None

    evidence = RelationshipEvidence(
        evidence_type=EvidenceType.SHARED_TERMS,
        description=f"Documents share {len(shared)} out of {total_unique} unique keywords",
        examples=shared[:MAX_EVIDENCE_EXAMPLES],
        weight=score,
    )
    return _relationship(
        doc_a,
        doc_b,
        relationship_type=RelationshipType.TOPIC_SIMILARITY,
        score=score,
        confidence=min(1.0, score * TOPIC_CONFIDENCE_FACTOR),
        evidence=evidence,
    )


def analyze_concept_overlap(
    doc_a: DocumentRecord, doc_b: DocumentRecord, config: RelationshipConfig
) -> DocumentRelationship | None:
    """Overlap of words and two-word phrases drawn from title and content.

    Args:
        doc_a: First document
        doc_b: Second document
        config: Analysis thresholds

    Returns:
        Concept overlap relationship, or None when too few concepts are shared
        or the overlap ratio is below the concept threshold
    """
    concepts_a = text.extract_concepts(doc_a.title, doc_a.content)
    concepts_b = text.extract_concepts(doc_b.title, doc_b.content)

    shared = sorted(concepts_a & concepts_b)
    if len(shared) < config.shared_terms_threshold:
        return None

    total_concepts = len(concepts_a | concepts_b)
    if total_concepts == 0:
        return None

    score = len(shared) / total_concepts
    if score < config.concept_overlap_threshold:
        return None

    evidence = RelationshipEvidence(
        evidence_type=EvidenceType.CONTENT_OVERLAP,
        description=f"Documents share {len(shared)} concepts with {score * 100:.1f}% overlap",
        examples=shared[:MAX_EVIDENCE_EXAMPLES],
        weight=score,
    )
    return _relationship(
        doc_a,
        doc_b,
        relationship_type=RelationshipType.CONCEPT_OVERLAP,
        score=score,
        confidence=min(1.0, score * CONCEPT_CONFIDENCE_FACTOR),
        evidence=evidence,
    )


def analyze_cross_references(
    doc_a: DocumentRecord,
    doc_b: DocumentRecord,
    config: RelationshipConfig,
    weights: CrossReferenceWeights = CROSS_REFERENCE_WEIGHTS,
) -> DocumentRelationship | None:
    """Filename mentions and reference phrases shared by both documents.

    Args:
        doc_a: First document
        doc_b: Second document
        config: Analysis thresholds (unused, kept for a uniform signature)
        weights: Additive weight table

    Returns:
        Cross-reference relationship, or None when the accumulated score does
        not exceed the minimum
    """
    content_a = doc_a.content.lower()
    content_b = doc_b.content.lower()

    references = []
    total = 0.0

    for source, target, content in ((doc_a, doc_b, content_a), (doc_b, doc_a, content_b)):
        stem = target.file_stem
        if stem and stem.lower() in content:
            references.append(f"Reference to '{stem}' found in '{source.display_name}'")
            total += weights.filename_mention

    for phrase in REFERENCE_PHRASES:
        if phrase in content_a and phrase in content_b:
            references.append(f"Both documents use '{phrase}'")
            total += weights.shared_phrase

    if total <= weights.min_score:
        return None

    score = min(1.0, total)
    evidence = RelationshipEvidence(
        evidence_type=EvidenceType.TEXT_REFERENCES,
        description="Cross-references detected between documents",
        examples=references,
        weight=score,
    )
    return _relationship(
        doc_a,
        doc_b,
        relationship_type=RelationshipType.CROSS_REFERENCE,
        score=score,
        confidence=score,
        evidence=evidence,
    )


def analyze_structural_similarity(
    doc_a: DocumentRecord,
    doc_b: DocumentRecord,
    config: RelationshipConfig,
    weights: StructuralWeights = STRUCTURAL_WEIGHTS,
) -> DocumentRelationship | None:
    """Document type, section layout and shared content features.

    Args:
        doc_a: First document
        doc_b: Second document
        config: Analysis thresholds (unused, kept for a uniform signature)
        weights: Additive weight table

    Returns:
        Structural similarity relationship, or None below the minimum score
    """
    structure_a = doc_a.structure
    structure_b = doc_b.structure

    factors = []
    total = 0.0

    # An undetected type is not evidence of similarity
    if structure_a.document_type and structure_a.document_type == structure_b.document_type:
        factors.append(f"Same document type ({structure_a.document_type})")
        total += weights.same_document_type

    count_a = len(structure_a.sections)
    count_b = len(structure_b.sections)
    if abs(count_a - count_b) <= weights.max_section_count_diff:
        factors.append(f"Similar section count ({count_a} vs {count_b})")
        total += weights.similar_section_count

    common_features = [
        name
        for name, shared in (
            ("images", structure_a.has_images and structure_b.has_images),
            ("tables", structure_a.has_tables and structure_b.has_tables),
            ("code blocks", structure_a.has_code and structure_b.has_code),
        )
        if shared
    ]
    if common_features:
        factors.append(f"Common features: {', '.join(common_features)}")
        total += weights.shared_feature * len(common_features)

    title_similarity = text.section_title_similarity(structure_a.sections, structure_b.sections)
    if title_similarity > 0:
        factors.append(f"Section titles {title_similarity * 100:.1f}% similar")
        total += title_similarity * weights.section_title_factor

    if total < weights.min_score:
        return None

    score = min(1.0, total)
    evidence = RelationshipEvidence(
        evidence_type=EvidenceType.STRUCTURAL_SIMILARITY,
        description="Documents have similar structure and organization",
        examples=factors,
        weight=score,
    )
    return _relationship(
        doc_a,
        doc_b,
        relationship_type=RelationshipType.STRUCTURAL_SIMILARITY,
        score=score,
        confidence=min(1.0, score * STRUCTURAL_CONFIDENCE_FACTOR),
        evidence=evidence,
    )


def semantic_text(document: DocumentRecord) -> str:
    """Text embedded for the semantic signal: title plus summary."""
    return f"{document.title} {document.summary or ''}"


async def analyze_semantic_similarity(
    doc_a: DocumentRecord,
    doc_b: DocumentRecord,
    config: RelationshipConfig,
    embedder: EmbeddingCapability,
) -> DocumentRelationship | None:
    """Cosine similarity of title and summary embeddings.

    Args:
        doc_a: First document
        doc_b: Second document
        config: Analysis thresholds, the topic threshold gates emission
        embedder: Embedding capability

    Returns:
        Semantic similarity relationship, or None below the threshold or when
        either embedding call fails or returns an unusable vector
    """
    text_a = semantic_text(doc_a)
    text_b = semantic_text(doc_b)

    try:
        embedding_a = await embedder.embed_text(text_a)
        embedding_b = await embedder.embed_text(text_b)
        similarity = text.cosine_similarity(embedding_a, embedding_b)
    except Exception as e:
        logger.warning(f"Skipping semantic similarity for {doc_a.id} / {doc_b.id}: {e}")
        return None

    if similarity < config.topic_similarity_threshold:
        return None

    score = min(1.0, max(0.0, similarity))
    evidence = RelationshipEvidence(
        evidence_type=EvidenceType.SEMANTIC_SIMILARITY,
        description=f"Semantic similarity: {similarity * 100:.1f}% (via embeddings)",
        examples=[
            f"Document A: {text.truncate(text_a)}",
            f"Document B: {text.truncate(text_b)}",
        ],
        weight=score,
    )
    return _relationship(
        doc_a,
        doc_b,
        relationship_type=RelationshipType.SEMANTIC_SIMILARITY,
        score=score,
        confidence=score * SEMANTIC_CONFIDENCE_FACTOR,
        evidence=evidence,
    )
