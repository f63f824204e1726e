import numpy as np

from .errors import DegenerateDistributionError


def check_weights(prob):
    """ Validate an unnormalised probability vector and return it as a float ndarray

    Raises
    ------
    DegenerateDistributionError
        if `prob` is empty, has a negative or non-finite entry, or sums to zero
    """
    prob = np.asarray(prob, dtype=float)
    if prob.ndim != 1 or prob.size == 0:
        raise DegenerateDistributionError('cannot sample from an empty weight vector')
    if not np.all(np.isfinite(prob)):
        raise DegenerateDistributionError('weight vector contains non-finite values: %r' % (prob,))
    if np.any(prob < 0):
        raise DegenerateDistributionError('weight vector contains negative values: %r' % (prob,))
    if prob.sum() <= 0:
        raise DegenerateDistributionError('weight vector has zero total mass')
    return prob


def sampling_from_dist(prob, random_state=None):
    """ Sample index from a list of unnormalised probability distribution
        same as np.random.multinomial(1, prob/np.sum(prob)).argmax()

    A single uniform value u in [0, sum(prob)) is drawn, and the smallest
    index whose cumulative weight exceeds u is returned.

    Parameters
    ----------
    prob: array_like
        array of unnormalised, non-negative probabilities
    random_state: np.random.RandomState
        source of the uniform draw. numpy's global state if None

    Returns
    -------
    new_topic: int
        a sampled index in [0, len(prob))
    """
    prob = check_weights(prob)
    if random_state is None:
        random_state = np.random

    c_sum = prob.cumsum()
    thr = c_sum[-1] * random_state.rand()
    new_topic = int(np.searchsorted(c_sum, thr, side='right'))
    # thr on the last cumulative value runs past the end; fall back to the last index with mass
    if new_topic >= prob.size:
        new_topic = int(np.flatnonzero(prob)[-1])
    return new_topic


class CategoricalSampler(object):
    """ Draws an index from a discrete, possibly unnormalised, distribution

    Subclasses implement `sample`. The Gibbs sampler only talks to this
    interface, so deterministic doubles can replace the random generator.
    """

    def sample(self, weights):
        raise NotImplementedError


class RandomCategoricalSampler(CategoricalSampler):
    """ Inverse-CDF sampler backed by a numpy RandomState

    Attributes
    ----------
    random_state: np.random.RandomState
        seeded once by the owner; never reseeded here
    """

    def __init__(self, random_state=None):
        if random_state is None:
            random_state = np.random.RandomState()
        self.random_state = random_state

    def sample(self, weights):
        return sampling_from_dist(weights, self.random_state)


def get_top_terms(phi_sorted, topic, n_terms=20):
    """ return the `n_terms` most probable terms of `topic`

    Parameters
    ----------
    phi_sorted: list
        per-topic lists of (term, probability), highest probability first
    topic: int
    n_terms: int
    """
    return [term for term, _ in phi_sorted[topic][:n_terms]]
