from typing import Callable

import pytest

from docweave.analysis import RelationshipEngine
from docweave.domain.document import DocumentRecord, DocumentStructure
from docweave.domain.relationships import RelationshipConfig

DocumentFactory = Callable[..., DocumentRecord]


@pytest.fixture
def make_document() -> DocumentFactory:
    """Factory building document records with sensible defaults."""

    def _make(
        doc_id: str,
        title: str = "",
        content: str = "",
        keywords: list[str] | None = None,
        structure: DocumentStructure | None = None,
        summary: str | None = None,
        path: str | None = None,
    ) -> DocumentRecord:
        return DocumentRecord(
            id=doc_id,
            title=title,
            path=path or f"/docs/{doc_id}.docx",
            content=content,
            keywords=keywords or [],
            structure=structure or DocumentStructure(),
            summary=summary,
        )

    return _make


@pytest.fixture
def auth_guide(make_document: DocumentFactory) -> DocumentRecord:
    return make_document(
        "doc1",
        title="User Authentication Guide",
        content="This guide covers user authentication and security procedures.",
        keywords=["authentication", "user", "security"],
    )


@pytest.fixture
def password_manual(make_document: DocumentFactory) -> DocumentRecord:
    return make_document(
        "doc2",
        title="Password Security Manual",
        content="Manual for password security and authentication best practices.",
        keywords=["password", "security", "authentication"],
    )


@pytest.fixture
def upgrade_runbook(make_document: DocumentFactory) -> DocumentRecord:
    return make_document(
        "doc1",
        title="Kubernetes Cluster Upgrade",
        content=(
            "Kubernetes cluster upgrade procedure: drain worker nodes, "
            "upgrade control plane, verify workloads."
        ),
    )


@pytest.fixture
def maintenance_runbook(make_document: DocumentFactory) -> DocumentRecord:
    return make_document(
        "doc2",
        title="Kubernetes Cluster Maintenance",
        content=(
            "Kubernetes cluster maintenance: drain worker nodes before patching, "
            "verify workloads afterwards."
        ),
    )


@pytest.fixture
def budget_report(make_document: DocumentFactory) -> DocumentRecord:
    return make_document(
        "doc3",
        title="Quarterly Marketing Budget",
        content=(
            "Quarterly marketing budget allocation across advertising channels "
            "and regional campaigns."
        ),
    )


@pytest.fixture
def runbook_corpus(
    upgrade_runbook: DocumentRecord,
    maintenance_runbook: DocumentRecord,
    budget_report: DocumentRecord,
) -> list[DocumentRecord]:
    """Two related runbooks and one unrelated report."""
    return [upgrade_runbook, maintenance_runbook, budget_report]


@pytest.fixture
def default_config() -> RelationshipConfig:
    return RelationshipConfig()


@pytest.fixture
def engine(default_config: RelationshipConfig) -> RelationshipEngine:
    """Engine without embeddings."""
    return RelationshipEngine(default_config)
