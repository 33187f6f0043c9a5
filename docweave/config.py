from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from docweave.domain.relationships import RelationshipConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCWEAVE_", env_file=".env", extra="ignore")

    # Relationship analysis defaults
    topic_similarity_threshold: float = 0.3
    concept_overlap_threshold: float = 0.25
    shared_terms_threshold: int = 3
    use_semantic_analysis: bool = True
    max_relationships_per_document: int = 10
    min_confidence_threshold: float = 0.2

    # Number of pair analyses allowed in flight, 1 = sequential scan
    max_concurrency: int = 1

    # Embedding settings
    embedding_provider: Literal["none", "voyage", "openai"] = "none"
    voyage_ai_api_key: str | None = None
    voyage_model: str = "voyage-3"
    openai_api_key: str | None = None
    openai_embedding_model: str = "text-embedding-3-large"

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    def relationship_config(self) -> RelationshipConfig:
        return RelationshipConfig(
            topic_similarity_threshold=self.topic_similarity_threshold,
            concept_overlap_threshold=self.concept_overlap_threshold,
            shared_terms_threshold=self.shared_terms_threshold,
            use_semantic_analysis=self.use_semantic_analysis,
            max_relationships_per_document=self.max_relationships_per_document,
            min_confidence_threshold=self.min_confidence_threshold,
        )


settings = Settings()
