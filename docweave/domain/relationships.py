"""Relationship domain models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, computed_field


class RelationshipType(str, Enum):
    """Kind of signal a relationship was detected from."""

    TOPIC_SIMILARITY = "topic_similarity"
    CONCEPT_OVERLAP = "concept_overlap"
    CROSS_REFERENCE = "cross_reference"
    STRUCTURAL_SIMILARITY = "structural_similarity"
    SEMANTIC_SIMILARITY = "semantic_similarity"


class RelationshipStrength(str, Enum):
    """Coarse strength band derived from a relationship score."""

    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"
    VERY_STRONG = "very_strong"

    @classmethod
    def from_score(cls, score: float) -> "RelationshipStrength":
        if score >= 0.8:
            return cls.VERY_STRONG
        if score >= 0.6:
            return cls.STRONG
        if score >= 0.4:
            return cls.MODERATE
        return cls.WEAK


class EvidenceType(str, Enum):
    SHARED_TERMS = "shared_terms"
    CONTENT_OVERLAP = "content_overlap"
    TEXT_REFERENCES = "text_references"
    STRUCTURAL_SIMILARITY = "structural_similarity"
    SEMANTIC_SIMILARITY = "semantic_similarity"
    PURPOSE_SIMILARITY = "purpose_similarity"
    PROCESS_SEQUENCE = "process_sequence"


class RelationshipEvidence(BaseModel):
    """Human-readable justification attached to a relationship."""

    evidence_type: EvidenceType
    description: str
    examples: list[str] = []
    weight: float  # contribution to the score, 0.0 to 1.0


class DocumentRelationship(BaseModel):
    """Represents a relationship detected between two documents.

    The pair is unordered: ``document_a`` and ``document_b`` follow the order
    in which the documents were handed to the pair analysis.
    """

    document_a: str
    document_b: str
    relationship_type: RelationshipType
    score: float
    confidence: float
    evidence: list[RelationshipEvidence]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def strength(self) -> RelationshipStrength:
        return RelationshipStrength.from_score(self.score)

    def involves(self, document_id: str) -> bool:
        return document_id in (self.document_a, self.document_b)


class RelationshipConfig(BaseModel):
    """Thresholds for relationship analysis.

    Values are not range-checked: a threshold of 0 accepts every candidate
    and a threshold above 1 accepts none.
    """

    model_config = {"frozen": True}

    topic_similarity_threshold: float = 0.3
    concept_overlap_threshold: float = 0.25
    shared_terms_threshold: int = 3
    use_semantic_analysis: bool = True
    max_relationships_per_document: int = 10  # 0 disables the cap
    min_confidence_threshold: float = 0.2

    def with_overrides(self, **overrides: float | int | bool | None) -> "RelationshipConfig":
        """Return a copy with every non-None override applied.

        Args:
            **overrides: Field values to replace; None means keep the current value

        Returns:
            New RelationshipConfig
        """
        unknown = set(overrides) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown relationship config fields: {sorted(unknown)}")

        updates = {name: value for name, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **updates})

    def summary(self) -> str:
        return (
            f"topic_threshold: {self.topic_similarity_threshold}, "
            f"concept_threshold: {self.concept_overlap_threshold}, "
            f"semantic: {self.use_semantic_analysis}"
        )


class RelationshipStats(BaseModel):
    """Corpus-wide statistics over the final relationship list."""

    documents_analyzed: int = 0
    total_relationships: int = 0
    relationships_by_type: dict[str, int] = {}
    relationships_by_strength: dict[str, int] = {}
    average_score: float = 0.0
    most_connected_document: str | None = None
    max_connections: int = 0
    isolated_documents: int = 0


class AnalysisMetadata(BaseModel):
    analyzed_at: datetime
    config_summary: str
    duration_ms: int
    used_semantic_analysis: bool
    pairs_analyzed: int = 0
    failed_pairs: int = 0
    cancelled: bool = False


class RelationshipAnalysisResult(BaseModel):
    """Result of a full corpus scan, relationships ordered by score descending."""

    relationships: list[DocumentRelationship] = []
    stats: RelationshipStats
    metadata: AnalysisMetadata


class TopicCluster(BaseModel):
    """A group of co-occurring keywords and the documents carrying them."""

    topic_name: str
    document_count: int
    confidence: float  # share of the corpus containing the seed keyword
    keywords: list[str] = []
    representative_documents: list[str] = []


class RelationshipTypeInfo(BaseModel):
    type_name: RelationshipType
    description: str
    requires_semantic: bool


RELATIONSHIP_TYPE_CATALOG: list[RelationshipTypeInfo] = [
    RelationshipTypeInfo(
        type_name=RelationshipType.TOPIC_SIMILARITY,
        description="Documents covering similar topics based on shared keywords",
        requires_semantic=False,
    ),
    RelationshipTypeInfo(
        type_name=RelationshipType.CONCEPT_OVERLAP,
        description="Documents with overlapping concepts and terminology",
        requires_semantic=False,
    ),
    RelationshipTypeInfo(
        type_name=RelationshipType.CROSS_REFERENCE,
        description="Documents that reference each other or related content",
        requires_semantic=False,
    ),
    RelationshipTypeInfo(
        type_name=RelationshipType.STRUCTURAL_SIMILARITY,
        description="Documents with similar structure and organization",
        requires_semantic=False,
    ),
    RelationshipTypeInfo(
        type_name=RelationshipType.SEMANTIC_SIMILARITY,
        description="Documents close in meaning according to text embeddings",
        requires_semantic=True,
    ),
]
