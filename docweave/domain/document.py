"""Document domain models."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class DocumentType(str, Enum):
    """Document type tags assigned by the indexer."""

    MANUAL = "manual"
    GUIDE = "guide"
    PROCEDURE = "procedure"
    REFERENCE = "reference"
    TRAINING = "training"
    POLICY = "policy"
    TEMPLATE = "template"
    OTHER = "other"


class DocumentSection(BaseModel):
    """A section heading of an indexed document."""

    title: str
    level: int = 0  # 0 = top level


class DocumentStructure(BaseModel):
    """Structural summary of a document.

    Attributes:
        document_type: Type tag from the indexer, None when it could not be detected
        sections: Section headings in document order
        has_images: Document contains images
        has_tables: Document contains tables
        has_code: Document contains code blocks
    """

    model_config = {"frozen": True}

    document_type: str | None = None
    sections: list[DocumentSection] = []
    has_images: bool = False
    has_tables: bool = False
    has_code: bool = False

    @field_validator("document_type", mode="before")
    @classmethod
    def normalize_document_type(cls, value: Any) -> Any:
        if isinstance(value, DocumentType):
            return value.value
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("sections", mode="before")
    @classmethod
    def accept_plain_titles(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"title": item} if isinstance(item, str) else item for item in value]
        return value

    @property
    def section_titles(self) -> list[str]:
        return [section.title for section in self.sections]


class DocumentRecord(BaseModel):
    """Represents an indexed document as handed over by the indexer.

    Attributes:
        id: Unique identifier within a corpus
        title: Document title
        path: File path of the source document
        content: Full extracted text content
        keywords: Ordered keywords extracted by the indexer, may be empty
        structure: Structural summary (type, sections, feature flags)
        summary: Optional short summary text
    """

    model_config = {"frozen": True}

    id: str
    title: str
    path: str
    content: str
    keywords: list[str] = []
    structure: DocumentStructure = Field(default_factory=DocumentStructure)
    summary: str | None = None

    @property
    def file_stem(self) -> str:
        """File name without directory and extension."""
        return Path(self.path).stem

    @property
    def display_name(self) -> str:
        """Title, or the file name when the title is empty."""
        return self.title or Path(self.path).name
