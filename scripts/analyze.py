"""CLI for analyzing relationships in a JSON snapshot of indexed documents"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter

from docweave.analysis import RelationshipEngine
from docweave.config import Settings, settings
from docweave.domain.document import DocumentRecord
from docweave.domain.relationships import RELATIONSHIP_TYPE_CATALOG
from docweave.embedders.factory import build_embedder

documents_adapter = TypeAdapter(list[DocumentRecord])


def load_documents(snapshot_path: Path) -> list[DocumentRecord]:
    """Load document records from a JSON snapshot.

    The snapshot is either a list of records or an object with a "documents" list.

    Args:
        snapshot_path: Path to the snapshot file

    Returns:
        List of DocumentRecord objects
    """
    if not snapshot_path.exists():
        raise FileNotFoundError(f"Snapshot not found: {snapshot_path}")

    with open(snapshot_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        if "documents" not in data:
            raise ValueError(f"Snapshot {snapshot_path} has no 'documents' list")
        data = data["documents"]

    return documents_adapter.validate_python(data)


async def run(
    *,
    command: str,
    documents: list[DocumentRecord],
    app_settings: Settings,
    document_id: str | None = None,
    max_results: int = 10,
) -> object:
    """Run one analysis command and return its JSON-serializable payload."""
    if command == "types":
        return [info.model_dump(mode="json") for info in RELATIONSHIP_TYPE_CATALOG]

    engine = RelationshipEngine(
        app_settings.relationship_config(),
        embedder=build_embedder(app_settings),
        max_concurrency=app_settings.max_concurrency,
    )

    if command == "relationships":
        result = await engine.analyze_relationships(documents)
        return result.model_dump(mode="json")

    if command == "clusters":
        clusters = engine.identify_topic_clusters(documents)
        return [cluster.model_dump(mode="json") for cluster in clusters]

    if command == "related":
        target = next((doc for doc in documents if doc.id == document_id), None)
        if target is None:
            raise ValueError(f"Document not found in snapshot: {document_id}")
        related = await engine.find_related_documents(target, documents, max_results)
        return [relationship.model_dump(mode="json") for relationship in related]

    raise ValueError(f"Unknown command: {command}")


def main(
    command: str,
    snapshot: str | None,
    outfile: str | None,
    document_id: str | None,
    max_results: int,
) -> None:
    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    documents = []
    if snapshot:
        documents = load_documents(Path(snapshot))
        logger.info(f"Loaded {len(documents)} documents from {snapshot}")

    payload = asyncio.run(
        run(
            command=command,
            documents=documents,
            app_settings=settings,
            document_id=document_id,
            max_results=max_results,
        )
    )

    output = json.dumps(payload, indent=2)
    if outfile:
        Path(outfile).write_text(output, encoding="utf-8")
        logger.info(f"Wrote {command} payload to {outfile}")
    else:
        print(output)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "command",
        choices=["relationships", "clusters", "related", "types"],
        help="Analysis to run, or 'types' to list the relationship types",
    )
    parser.add_argument(
        "--snapshot", type=str, required=False, help="JSON file containing document records"
    )
    parser.add_argument(
        "--outfile", type=str, required=False, help="Write the JSON payload here instead of stdout"
    )
    parser.add_argument(
        "--document-id", type=str, required=False, help="Target document for 'related'"
    )
    parser.add_argument(
        "--max-results",
        type=int,
        required=False,
        help="Maximum relationships returned by 'related'",
        default=10,
    )

    args = parser.parse_args()
    if args.command != "types" and not args.snapshot:
        parser.error(f"--snapshot is required for '{args.command}'")

    main(
        command=args.command,
        snapshot=args.snapshot,
        outfile=args.outfile,
        document_id=args.document_id,
        max_results=args.max_results,
    )
