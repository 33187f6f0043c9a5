"""Topic clusters from keyword co-occurrence across a corpus."""

from collections.abc import Sequence

from loguru import logger

from docweave.domain.document import DocumentRecord
from docweave.domain.relationships import TopicCluster

MIN_SEED_DOCUMENTS = 2
MERGE_OVERLAP_THRESHOLD = 0.5
MAX_REPRESENTATIVE_DOCUMENTS = 3
MAX_CLUSTERS = 10


def build_keyword_index(documents: Sequence[DocumentRecord]) -> dict[str, set[int]]:
    """Map each lowercased keyword to the indices of documents containing it.

    Keywords keep the order in which they are first seen.
    """
    keyword_index: dict[str, set[int]] = {}
    for doc_idx, document in enumerate(documents):
        for keyword in document.keywords:
            keyword_index.setdefault(keyword.lower(), set()).add(doc_idx)
    return keyword_index


def keyword_overlap(docs_a: set[int], docs_b: set[int]) -> float:
    """Shared documents over the larger of the two document sets."""
    largest = max(len(docs_a), len(docs_b))
    if largest == 0:
        return 0.0
    return len(docs_a & docs_b) / largest


def identify_topic_clusters(documents: Sequence[DocumentRecord]) -> list[TopicCluster]:
    """Greedily group keywords that appear in largely the same documents.

    Every keyword backed by at least two documents and not yet claimed seeds a
    cluster; unclaimed keywords overlapping the seed's documents by at least
    half join it. A keyword belongs to at most one cluster.

    Args:
        documents: Corpus snapshot

    Returns:
        Up to ten clusters, largest first
    """
    if not documents:
        return []

    keyword_index = build_keyword_index(documents)
    processed: set[str] = set()
    clusters = []

    for keyword, doc_indices in keyword_index.items():
        if keyword in processed or len(doc_indices) < MIN_SEED_DOCUMENTS:
            continue

        cluster_keywords = [keyword]
        cluster_docs = set(doc_indices)

        for other_keyword, other_docs in keyword_index.items():
            if other_keyword == keyword or other_keyword in processed:
                continue
            if keyword_overlap(doc_indices, other_docs) >= MERGE_OVERLAP_THRESHOLD:
                cluster_keywords.append(other_keyword)
                cluster_docs |= other_docs
                processed.add(other_keyword)

        processed.add(keyword)

        clusters.append(
            TopicCluster(
                topic_name=keyword,
                document_count=len(cluster_docs),
                confidence=len(doc_indices) / len(documents),
                keywords=cluster_keywords,
                representative_documents=[
                    documents[idx].display_name
                    for idx in sorted(cluster_docs)[:MAX_REPRESENTATIVE_DOCUMENTS]
                ],
            )
        )

    clusters.sort(key=lambda cluster: cluster.document_count, reverse=True)
    logger.debug(f"Identified {len(clusters)} topic clusters over {len(documents)} documents")
    return clusters[:MAX_CLUSTERS]
