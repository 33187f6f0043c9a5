"""Cross-document relationship analysis: signals, corpus scans and topic clusters."""

from docweave.analysis.clusters import identify_topic_clusters
from docweave.analysis.engine import RelationshipEngine
from docweave.analysis.signals import CrossReferenceWeights, StructuralWeights

__all__ = [
    "CrossReferenceWeights",
    "RelationshipEngine",
    "StructuralWeights",
    "identify_topic_clusters",
]
