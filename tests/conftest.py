import itertools

import pytest

from gibbslda.utils import CategoricalSampler


class FixedSequenceSampler(CategoricalSampler):
    """ returns a fixed, cycled sequence of topics and records the weights it was given """

    def __init__(self, topics):
        self._topics = itertools.cycle(topics)
        self.calls = list()

    def sample(self, weights):
        self.calls.append(list(weights))
        return next(self._topics)


class FixedUniform(object):
    """ stands in for a RandomState whose rand() always returns `u` """

    def __init__(self, u):
        self.u = u

    def rand(self):
        return self.u


@pytest.fixture
def small_corpus():
    return [['a', 'b', 'c', 'a'], ['b', 'b', 'd'], ['c', 'a', 'd', 'd', 'e']]


@pytest.fixture
def fixed_sequence_sampler():
    return FixedSequenceSampler


@pytest.fixture
def fixed_uniform():
    return FixedUniform
