from tests.fakes.fake_embedder import FailingEmbedder, FakeEmbedder

__all__ = ["FakeEmbedder", "FailingEmbedder"]
