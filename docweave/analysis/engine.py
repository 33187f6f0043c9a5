"""Relationship engine: pair analysis, corpus scans and related-document queries."""

import asyncio
import time
from collections.abc import Sequence
from datetime import datetime, timezone

from loguru import logger

from docweave.domain.document import DocumentRecord
from docweave.domain.relationships import (
    AnalysisMetadata,
    DocumentRelationship,
    RelationshipAnalysisResult,
    RelationshipConfig,
    TopicCluster,
)
from docweave.embedders.base import EmbeddingCapability

from . import clusters, signals, statistics

PairOutcome = tuple[bool, list[DocumentRelationship] | None]  # (started, relationships)

SYNC_SIGNALS = (
    signals.analyze_topic_similarity,
    signals.analyze_concept_overlap,
    signals.analyze_cross_references,
    signals.analyze_structural_similarity,
)


class RelationshipEngine:
    """Detects and scores relationships between documents of a corpus."""

    def __init__(
        self,
        config: RelationshipConfig | None = None,
        *,
        embedder: EmbeddingCapability | None = None,
        max_concurrency: int = 1,
    ):
        """Initialize the engine.

        Args:
            config: Analysis thresholds, defaults to RelationshipConfig()
            embedder: Optional embedding capability for semantic similarity
            max_concurrency: Pair analyses allowed in flight during a corpus scan,
                1 analyzes pairs one after another
        """
        self.config = config or RelationshipConfig()
        self.embedder = embedder
        self.max_concurrency = max(1, max_concurrency)

    @property
    def semantic_enabled(self) -> bool:
        return self.config.use_semantic_analysis and self.embedder is not None

    async def analyze_pair(
        self, doc_a: DocumentRecord, doc_b: DocumentRecord
    ) -> list[DocumentRelationship]:
        """Run every applicable signal on one pair of documents.

        Args:
            doc_a: First document
            doc_b: Second document

        Returns:
            Relationships found by the signals, zero to five of them
        """
        relationships = []

        for signal in SYNC_SIGNALS:
            relationship = signal(doc_a, doc_b, self.config)
            if relationship is not None:
                relationships.append(relationship)

        if self.semantic_enabled:
            relationship = await signals.analyze_semantic_similarity(
                doc_a, doc_b, self.config, self.embedder
            )
            if relationship is not None:
                relationships.append(relationship)

        return relationships

    async def analyze_relationships(
        self,
        documents: Sequence[DocumentRecord],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> RelationshipAnalysisResult:
        """Analyze every unordered pair of documents in the corpus.

        A pair whose analysis fails is logged and skipped. Setting cancel_event
        stops the scan before the next pair; the result then covers the pairs
        analyzed so far.

        Args:
            documents: Corpus snapshot, ids unique
            cancel_event: Optional event requesting cooperative cancellation

        Returns:
            RelationshipAnalysisResult with filtered, score-ordered relationships
        """
        documents = list(documents)
        start_time = time.perf_counter()
        logger.info(f"Starting relationship analysis for {len(documents)} documents")

        pairs = [
            (documents[i], documents[j])
            for i in range(len(documents))
            for j in range(i + 1, len(documents))
        ]
        outcomes = await self._scan_pairs(pairs, cancel_event)

        started = [found for was_started, found in outcomes if was_started]
        failed_pairs = sum(1 for found in started if found is None)
        all_relationships = [rel for found in started if found for rel in found]

        relationships = statistics.filter_by_confidence(
            all_relationships, self.config.min_confidence_threshold
        )
        relationships = statistics.sort_by_score(relationships)
        relationships = statistics.cap_per_document(
            relationships, self.config.max_relationships_per_document
        )
        stats = statistics.compute_stats(documents, relationships)

        cancelled = len(started) < len(pairs)
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        metadata = AnalysisMetadata(
            analyzed_at=datetime.now(timezone.utc),
            config_summary=self.config.summary(),
            duration_ms=duration_ms,
            used_semantic_analysis=self.semantic_enabled,
            pairs_analyzed=len(started) - failed_pairs,
            failed_pairs=failed_pairs,
            cancelled=cancelled,
        )

        if cancelled:
            logger.warning(
                f"Relationship analysis cancelled after {len(started)} of {len(pairs)} pairs"
            )
        logger.info(
            f"Relationship analysis completed: {len(relationships)} relationships "
            f"found in {duration_ms}ms"
        )

        return RelationshipAnalysisResult(
            relationships=relationships, stats=stats, metadata=metadata
        )

    async def find_related_documents(
        self,
        target: DocumentRecord,
        candidates: Sequence[DocumentRecord],
        max_results: int = 10,
    ) -> list[DocumentRelationship]:
        """Rank candidate documents by their relationships with a target document.

        Args:
            target: Document to find related documents for
            candidates: Documents to compare against; the target itself is skipped
            max_results: Maximum relationships returned

        Returns:
            Relationships ordered by score, highest first
        """
        relationships = []
        for candidate in candidates:
            if candidate.id == target.id:
                continue
            found = await self._analyze_pair_safely(target, candidate)
            if found:
                relationships.extend(found)

        return statistics.sort_by_score(relationships)[: max(0, max_results)]

    def identify_topic_clusters(self, documents: Sequence[DocumentRecord]) -> list[TopicCluster]:
        return clusters.identify_topic_clusters(documents)

    async def _scan_pairs(
        self,
        pairs: list[tuple[DocumentRecord, DocumentRecord]],
        cancel_event: asyncio.Event | None,
    ) -> list[PairOutcome]:
        """Analyze pairs sequentially or as bounded concurrent tasks.

        Returns:
            One outcome per pair, in pair order
        """

        def cancel_requested() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        if self.max_concurrency == 1:
            outcomes: list[PairOutcome] = []
            for doc_a, doc_b in pairs:
                if cancel_requested():
                    outcomes.append((False, None))
                    continue
                outcomes.append((True, await self._analyze_pair_safely(doc_a, doc_b)))
            return outcomes

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(doc_a: DocumentRecord, doc_b: DocumentRecord) -> PairOutcome:
            async with semaphore:
                if cancel_requested():
                    return False, None
                return True, await self._analyze_pair_safely(doc_a, doc_b)

        return list(await asyncio.gather(*(bounded(doc_a, doc_b) for doc_a, doc_b in pairs)))

    async def _analyze_pair_safely(
        self, doc_a: DocumentRecord, doc_b: DocumentRecord
    ) -> list[DocumentRelationship] | None:
        """Analyze a pair, returning None instead of raising on failure."""
        try:
            return await self.analyze_pair(doc_a, doc_b)
        except Exception as e:
            logger.warning(f"Skipping pair {doc_a.id} / {doc_b.id}: {e}")
            return None
