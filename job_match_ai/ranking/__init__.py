"""Ranking: pairwise similarity scorer and K-NN ranker."""

from .knn_ranker import KnnRanker
from .similarity_scorer import SimilarityScorer

__all__ = ["KnnRanker", "SimilarityScorer"]
