import logging
import time

import numpy as np
from scipy.special import gammaln

from .base import BaseGibbsParamTopicModel, check_max_iter
from .errors import ConfigurationError, CountInvariantError, NotInitializedError
from .estimators import estimate_phi, estimate_theta, unseen_term_probability
from .formatted_logger import formatted_logger
from .sufficient_stats import SufficientStatistics
from .utils import RandomCategoricalSampler

logger = formatted_logger('GibbsLDA')


def time_seed():
    """ seed derived from the wall clock, for runs without an explicit seed """
    return int(time.time() * 1000) % (2 ** 32)


class GibbsLDA(BaseGibbsParamTopicModel):
    """
    Latent dirichlet allocation,
    Blei, David M and Ng, Andrew Y and Jordan, Michael I, 2003

    Latent Dirichlet allocation with collapsed Gibbs sampling over a token
    matrix of term strings. Topic-term counts are kept sparse, so `n_voca`
    only enters the normalisers and need not match the observed vocabulary.

    Attributes
    ----------
    seed: int
        seed of `random_state`; derived from the clock when not given
    random_state: np.random.RandomState
        source of the initial topic draws, shared with the default sampler
    sampler: CategoricalSampler
        draws the new topic of a token from its conditional distribution
    check_invariants: boolean
        if True, recount the sufficient statistics after every sweep
    stats: SufficientStatistics
        count tables of the current run
    """

    def __init__(self, n_doc, n_voca, n_topic, alpha=0.1, beta=0.01, **kwargs):
        seed = kwargs.pop('seed', None)
        sampler = kwargs.pop('sampler', None)
        self.check_invariants = kwargs.pop('check_invariants', False)
        super(GibbsLDA, self).__init__(n_doc=n_doc, n_voca=n_voca, n_topic=n_topic, alpha=alpha, beta=beta, **kwargs)

        if seed is None:
            seed = time_seed()
            logger.info('[SEED] no seed given, using clock seed %d', seed)
        self.seed = seed
        self.random_state = np.random.RandomState(seed)

        if sampler is None:
            sampler = RandomCategoricalSampler(self.random_state)
        self.sampler = sampler

    def _initialized_stats(self):
        if self.stats is None:
            raise NotInitializedError('call random_init or fit before sampling or estimating')
        return self.stats

    def random_init(self, docs):
        """ Random initialization of topics

        Every token gets a topic drawn uniformly from [0, n_topic), then the
        count tables are built from this assignment.

        Parameters
        ----------
        docs: list, size=n_doc
            list of documents, each a list of terms

        """
        if len(docs) != self.n_doc:
            raise ConfigurationError('model declares %d documents but corpus has %d' % (self.n_doc, len(docs)))

        stats = SufficientStatistics(docs, self.n_topic)
        topics = [self.random_state.randint(self.n_topic, size=len(doc)) for doc in docs]
        stats.populate(topics)
        self.stats = stats

        logger.debug('[INIT] %d documents, %d tokens, topic sizes %s',
                     self.n_doc, stats.doc_topic_sum.sum(), stats.topic_term_sum.tolist())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug('[INIT] count tables\n%s', stats.describe())

    def conditional(self, di, wi):
        """ normalised conditional distribution over topics of token (di, wi)

        The token's own contribution has to be removed from the counts beforehand.
        """
        stats = self._initialized_stats()
        term = stats.docs[di][wi]

        tw = np.array([stats.topic_term_count[ki].get(term, 0) for ki in range(self.n_topic)], dtype=float)
        numerator = (tw + self.beta) * (stats.doc_topic_count[di] + self.alpha)
        denominator = (stats.topic_term_sum + self.n_voca * self.beta) * \
                      (stats.doc_topic_sum[di] + self.n_topic * self.alpha)
        prob = numerator / denominator
        return prob / prob.sum()

    def update_topic(self, di, wi):
        """ draw a new topic for the detached token (di, wi)

        Returns
        -------
        new_topic: int
        """
        stats = self._initialized_stats()
        if stats.detached != (di, wi):
            raise CountInvariantError('token %r has to be decremented before its topic is resampled' % ((di, wi),))
        return self.sampler.sample(self.conditional(di, wi))

    def sample_token(self, di, wi):
        """ resample the topic of one token: decrement, draw, reassign and increment

        Returns
        -------
        new_topic: int
        """
        stats = self._initialized_stats()
        stats.decrement(di, wi)
        new_topic = self.update_topic(di, wi)
        stats.assign(di, wi, new_topic)
        stats.increment(di, wi)
        return new_topic

    def sweep(self):
        """ one pass over every token, documents in order, positions in order """
        stats = self._initialized_stats()
        for di in range(stats.n_doc):
            for wi in range(len(stats.docs[di])):
                self.sample_token(di, wi)

    def gibbs_sampling(self, max_iter):
        """ run `max_iter` sweeps over the initialized corpus

        Parameters
        ----------
        max_iter: int
            number of sweeps. 0 keeps the initial assignment
        """
        max_iter = check_max_iter(max_iter)
        stats = self._initialized_stats()

        for iteration in range(max_iter):
            prev = time.time()
            self.sweep()

            if self.check_invariants:
                stats.check_invariants()
            if self.verbose:
                logger.info('[ITER] %d,\telapsed time:%.2f,\tlog_likelihood:%.2f', iteration, time.time() - prev,
                            self.log_likelihood())

    def fit(self, docs, max_iter=100):
        """ Gibbs sampling for LDA

        Parameters
        ----------
        docs: list, size=n_doc
            list of documents, each a list of terms
        max_iter: int
            number of Gibbs sampling sweeps

        """
        check_max_iter(max_iter)
        self.random_init(docs)
        self.gibbs_sampling(max_iter)
        return self

    def log_likelihood(self):
        """
        collapsed joint log likelihood log p(w, z | alpha, beta)
        """
        stats = self._initialized_stats()
        n_doc, n_topic, n_voca = self.n_doc, self.n_topic, self.n_voca

        ll = n_doc * gammaln(self.alpha * n_topic)
        ll -= n_doc * n_topic * gammaln(self.alpha)
        ll += gammaln(stats.doc_topic_count + self.alpha).sum()
        ll -= gammaln(stats.doc_topic_sum + self.alpha * n_topic).sum()

        ll += n_topic * gammaln(self.beta * n_voca)
        for ki in range(n_topic):
            counts = np.fromiter(stats.topic_term_count[ki].values(), dtype=float,
                                 count=len(stats.topic_term_count[ki]))
            ll += (gammaln(counts + self.beta) - gammaln(self.beta)).sum()
            ll -= gammaln(stats.topic_term_sum[ki] + self.beta * n_voca)

        return ll

    def estimate_theta(self):
        """ document-topic distribution, ndarray of shape (n_doc, n_topic) """
        return estimate_theta(self._initialized_stats(), self.alpha)

    def estimate_phi(self):
        """ topic-term distributions over observed support and their ranked view """
        return estimate_phi(self._initialized_stats(), self.n_voca, self.beta)

    def unseen_term_probability(self, topic):
        return unseen_term_probability(self._initialized_stats(), self.n_voca, self.beta, topic)

    def sample_heldout_doc(self, max_iter, heldout_docs):
        """ infer topic proportions of unseen documents with the trained topics kept fixed

        Parameters
        ----------
        max_iter: int
            number of sweeps over the held-out documents
        heldout_docs: list
            list of documents, each a list of terms

        Returns
        -------
        theta: ndarray, shape (len(heldout_docs), n_topic)
        """
        max_iter = check_max_iter(max_iter)
        stats = self._initialized_stats()

        h_doc_topics = list()
        h_doc_topic_count = np.zeros([len(heldout_docs), self.n_topic], dtype=int)

        # random init
        for di in range(len(heldout_docs)):
            doc = heldout_docs[di]
            topics = self.random_state.randint(self.n_topic, size=len(doc))
            h_doc_topics.append(topics)

            for topic in topics:
                h_doc_topic_count[di, topic] += 1

        topic_norm = stats.topic_term_sum + self.n_voca * self.beta
        for iteration in range(max_iter):
            for di in range(len(heldout_docs)):
                doc = heldout_docs[di]
                for wi in range(len(doc)):
                    word = doc[wi]
                    old_topic = h_doc_topics[di][wi]

                    h_doc_topic_count[di, old_topic] -= 1

                    tw = np.array([stats.topic_term_count[ki].get(word, 0) for ki in range(self.n_topic)], dtype=float)
                    prob = (tw + self.beta) / topic_norm * (h_doc_topic_count[di] + self.alpha)

                    new_topic = self.sampler.sample(prob)

                    h_doc_topics[di][wi] = new_topic
                    h_doc_topic_count[di, new_topic] += 1

        doc_len = h_doc_topic_count.sum(1)
        return (h_doc_topic_count + self.alpha) / (doc_len[:, np.newaxis] + self.n_topic * self.alpha)


def run_gibbs_sampling(docs, n_topic, n_voca, alpha, beta, max_iter, n_doc=None, **kwargs):
    """ initialize and sample an LDA model over `docs`

    Parameters
    ----------
    docs: list
        list of documents, each a list of terms
    n_topic: int
    n_voca: int
    alpha: float
    beta: float
    max_iter: int
        number of sweeps
    n_doc: int
        declared number of documents, len(docs) if None
    kwargs:
        `seed`, `sampler`, `verbose`, `check_invariants`, passed to GibbsLDA

    Returns
    -------
    model: GibbsLDA
        fitted model; call `estimate_theta` / `estimate_phi` for the distributions
    """
    if n_doc is None:
        n_doc = len(docs)
    model = GibbsLDA(n_doc, n_voca, n_topic, alpha=alpha, beta=beta, **kwargs)
    return model.fit(docs, max_iter=max_iter)
