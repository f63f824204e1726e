import numbers

import numpy as np

from .errors import ConfigurationError


def _check_count(name, value, minimum):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < minimum:
        raise ConfigurationError('%s must be an integer >= %d, got %r' % (name, minimum, value))
    return int(value)


def _check_prior(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real) \
            or not np.isfinite(value) or value <= 0:
        raise ConfigurationError('%s must be a positive finite real, got %r' % (name, value))
    return float(value)


def check_max_iter(max_iter):
    """ number of sweeps; zero is allowed and leaves the initial state untouched """
    return _check_count('max_iter', max_iter, 0)


class BaseTopicModel(object):
    """
    Attributes
    ----------
    n_doc: int
        the number of total documents in the corpus
    n_voca: int
        the vocabulary size of the corpus
    verbose: boolean
        if True, log each iteration step while inference.
    """
    def __init__(self, n_doc, n_voca, **kwargs):
        self.n_doc = _check_count('n_doc', n_doc, 0)
        self.n_voca = _check_count('n_voca', n_voca, 1)
        self.verbose = kwargs.pop('verbose', True)


class BaseGibbsParamTopicModel(BaseTopicModel):
    """ Base class of parametric topic models with Gibbs sampling inference

    Attributes
    ----------
    n_topic: int
        a number of topics to be inferred through the Gibbs sampling
    alpha: float
        symmetric parameter of Dirichlet prior for document-topic distribution
    beta: float
        symmetric parameter of Dirichlet prior for topic-word distribution
    stats: SufficientStatistics
        count tables and topic assignment of the current run, None before initialization
    """

    def __init__(self, n_doc, n_voca, n_topic, alpha, beta, **kwargs):
        super(BaseGibbsParamTopicModel, self).__init__(n_doc=n_doc, n_voca=n_voca, **kwargs)
        self.n_topic = _check_count('n_topic', n_topic, 1)
        self.alpha = _check_prior('alpha', alpha)
        self.beta = _check_prior('beta', beta)

        self.stats = None
