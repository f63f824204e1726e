import numpy as np
import pytest

from gibbslda.errors import CountInvariantError
from gibbslda.sufficient_stats import SufficientStatistics


def build(docs, topics, n_topic=3):
    stats = SufficientStatistics(docs, n_topic)
    stats.populate(topics)
    return stats


def test_populate_counts():
    docs = [['a', 'b', 'a'], ['b']]
    stats = build(docs, [[0, 2, 0], [2]])

    assert stats.doc_topic_count.tolist() == [[2, 0, 1], [0, 0, 1]]
    assert stats.doc_topic_sum.tolist() == [3, 1]
    assert stats.topic_term_count == [{'a': 2}, {}, {'b': 2}]
    assert stats.topic_term_sum.tolist() == [2, 0, 2]
    stats.check_invariants()


def test_populate_rejects_misshaped_topics():
    stats = SufficientStatistics([['a', 'b']], 2)
    with pytest.raises(CountInvariantError):
        stats.populate([[0]])


def test_decrement_increment_roundtrip():
    docs = [['a', 'b', 'a'], ['b']]
    stats = build(docs, [[0, 2, 0], [2]])

    stats.decrement(0, 1)
    assert stats.detached == (0, 1)
    assert stats.doc_topic_sum[0] == 2
    assert stats.topic_term_count[2] == {'b': 1}
    assert stats.topic_term_sum[2] == 1

    stats.assign(0, 1, 1)
    stats.increment(0, 1)
    assert stats.detached is None
    assert stats.topic_term_count[1] == {'b': 1}
    assert stats.doc_topic_count[0].tolist() == [2, 1, 0]
    stats.check_invariants()


def test_decrement_removes_exhausted_terms():
    stats = build([['a']], [[1]], n_topic=2)
    stats.decrement(0, 0)
    assert 'a' not in stats.topic_term_count[1]
    assert stats.topic_term_sum.tolist() == [0, 0]


def test_double_decrement_rejected():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    stats.decrement(0, 0)
    with pytest.raises(CountInvariantError):
        stats.decrement(0, 1)


def test_increment_of_other_token_rejected():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    stats.decrement(0, 0)
    with pytest.raises(CountInvariantError):
        stats.increment(0, 1)


def test_assign_requires_detached_token():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    with pytest.raises(CountInvariantError):
        stats.assign(0, 0, 1)
    stats.decrement(0, 0)
    with pytest.raises(CountInvariantError):
        stats.assign(0, 0, 2)


def test_check_invariants_detects_tampering():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    stats.topic_term_sum[0] += 1
    with pytest.raises(CountInvariantError):
        stats.check_invariants()

    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    stats.topic_assignment[0][0] = 1
    with pytest.raises(CountInvariantError):
        stats.check_invariants()


def test_check_invariants_rejects_detached_token():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    stats.decrement(0, 1)
    with pytest.raises(CountInvariantError):
        stats.check_invariants()


def test_decrement_of_uncounted_token_rejected():
    stats = SufficientStatistics([['a']], 2)
    with pytest.raises(CountInvariantError):
        stats.decrement(0, 0)


def test_describe_lists_tables():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    text = stats.describe()
    assert 'topic 0: a:1' in text
    assert 'topic 1: b:1' in text
    assert np.array_equal(stats.doc_topic_sum, [2])


def test_populate_twice_rejected():
    stats = build([['a', 'b']], [[0, 1]], n_topic=2)
    with pytest.raises(CountInvariantError):
        stats.populate([[0, 1]])
    assert stats.doc_topic_sum.tolist() == [2]
    assert stats.topic_term_sum.tolist() == [1, 1]
    stats.check_invariants()
