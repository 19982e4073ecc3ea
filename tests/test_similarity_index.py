"""
Unit tests for SimilarityIndex ranking and immutability.
"""

import dataclasses
import pytest

from rag_index.domain.index import SimilarityIndex
from rag_index.domain.models import Record
from rag_index.domain.vector_math import similarity

from conftest import CREATED, KITCHEN_VECTORS


def _index(*records):
    return SimilarityIndex.build("src", "model", CREATED, records)


@pytest.mark.unit
class TestQuery:
    """Test top-K query behaviour."""

    def test_returns_best_matches_first(self, kitchen_index):
        """Test records come back in descending similarity."""
        q = KITCHEN_VECTORS["how do I bake a cake?"]
        texts = [r.text for r in kitchen_index.query(q, 3)]
        assert texts == ["baking a cake", "apple pie recipe", "stock market news"]

    def test_at_most_k_with_non_increasing_scores(self, kitchen_index):
        """Test result size is capped by k and scores never increase."""
        q = (0.3, 0.3, 0.3)
        for k in range(1, 5):
            scored = kitchen_index.query_scored(q, k)
            assert len(scored) <= k
            scores = [s.score for s in scored]
            assert scores == sorted(scores, reverse=True)
            for s in scored:
                assert s.score == similarity(q, s.record.vector)

    def test_k_zero_returns_empty(self, kitchen_index):
        """Test k=0 is an empty result, not an error."""
        assert kitchen_index.query((1.0, 0.0, 0.0), 0) == ()

    def test_negative_k_returns_empty(self, kitchen_index):
        """Test negative k is treated like zero."""
        assert kitchen_index.query((1.0, 0.0, 0.0), -3) == ()

    def test_k_larger_than_index(self, kitchen_index):
        """Test k=100 against 3 records returns all 3."""
        assert len(kitchen_index.query((1.0, 0.0, 0.0), 100)) == 3

    def test_empty_index(self):
        """Test querying an empty index returns nothing."""
        assert _index().query((1.0,), 5) == ()

    def test_ties_keep_insertion_order(self):
        """Test identical vectors rank in insertion order."""
        same = (0.5, 0.5)
        idx = _index(
            Record("a", "first", same),
            Record("x", "other", (0.0, 1.0)),
            Record("b", "second", same),
            Record("c", "third", same),
        )
        ids = [r.id for r in idx.query((1.0, 1.0), 4)]
        assert ids == ["a", "b", "c", "x"]

    def test_zero_vector_record_does_not_break_ranking(self):
        """Test a degenerate record scores 0 and sorts below positive matches."""
        idx = _index(Record("z", "zero", (0.0, 0.0)), Record("p", "positive", (1.0, 0.0)))
        scored = idx.query_scored((1.0, 0.0), 2)
        assert [s.record.id for s in scored] == ["p", "z"]
        assert scored[1].score == 0.0

    def test_mixed_dimensions_are_compared_on_prefix(self):
        """Test records of different length are still ranked."""
        idx = _index(Record("short", "s", (1.0,)), Record("long", "l", (0.0, 1.0, 0.0)))
        assert idx.dimensions() == {1, 3}
        assert [r.id for r in idx.query((1.0, 0.0, 0.0), 2)] == ["short", "long"]


@pytest.mark.unit
class TestImmutability:
    """Test the index is a read-only value."""

    def test_query_does_not_reorder_records(self, kitchen_index):
        """Test querying leaves stored order untouched."""
        before = kitchen_index.records
        kitchen_index.query((0.0, 0.0, 1.0), 3)
        assert kitchen_index.records == before
        assert [r.id for r in kitchen_index] == ["r1", "r2", "r3"]

    def test_fields_cannot_be_assigned(self, kitchen_index):
        """Test frozen dataclass rejects mutation."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            kitchen_index.records = ()

    def test_build_copies_input_list(self):
        """Test later changes to the caller's list do not leak into the index."""
        records = [Record("a", "t", (1.0,))]
        idx = SimilarityIndex.build("s", "m", CREATED, records)
        records.append(Record("b", "u", (2.0,)))
        assert len(idx) == 1
