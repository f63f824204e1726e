import numpy as np

from .errors import CountInvariantError


class SufficientStatistics:
    """ Count tables of a collapsed Gibbs sampling run for LDA

    The tables are only mutated through `increment` and `decrement`.
    A `decrement` detaches one token; the next mutation has to be the
    matching `increment` of that same token.

    Attributes
    ----------
    docs: list
        token matrix, list of documents where each document is a list of terms
    n_topic: int
        number of topics
    topic_assignment: list of ndarray
        topic_assignment[di][wi] is the topic of token wi in document di
    doc_topic_count: ndarray, shape (n_doc, n_topic)
        number of tokens of each document assigned to each topic
    doc_topic_sum: ndarray, shape (n_doc)
        number of tokens of each document
    topic_term_count: list of dict, size n_topic
        topic_term_count[k][term] is the number of tokens of `term` assigned to topic k.
        terms with zero count are removed, so the keys are the observed support of the topic
    topic_term_sum: ndarray, shape (n_topic)
        number of tokens assigned to each topic
    """

    def __init__(self, docs, n_topic):
        self.docs = docs
        self.n_topic = n_topic

        n_doc = len(docs)
        self.topic_assignment = [np.zeros(len(doc), dtype=int) for doc in docs]
        self.doc_topic_count = np.zeros([n_doc, n_topic], dtype=int)
        self.doc_topic_sum = np.zeros(n_doc, dtype=int)
        self.topic_term_count = [dict() for _ in range(n_topic)]
        self.topic_term_sum = np.zeros(n_topic, dtype=int)

        self._detached = None
        self._populated = False

    @property
    def n_doc(self):
        return len(self.docs)

    @property
    def detached(self):
        """ (di, wi) of the token whose contribution is currently removed, or None """
        return self._detached

    def populate(self, topics):
        """ set the initial topic assignment and count every token in row-major order

        Parameters
        ----------
        topics: list of array_like
            topics[di][wi] is the initial topic of token wi in document di

        Raises
        ------
        CountInvariantError
            if the store was already populated, or a document and its topics differ in length
        """
        if self._populated:
            raise CountInvariantError('sufficient statistics are already populated; build a new store per run')

        for di in range(self.n_doc):
            self.topic_assignment[di] = np.asarray(topics[di], dtype=int).copy()
            if len(self.topic_assignment[di]) != len(self.docs[di]):
                raise CountInvariantError('document %d has %d tokens but %d initial topics'
                                          % (di, len(self.docs[di]), len(self.topic_assignment[di])))

        self._populated = True
        for di in range(self.n_doc):
            for wi in range(len(self.docs[di])):
                self.increment(di, wi)

    def increment(self, di, wi):
        """ add the contribution of token (di, wi) under its current topic """
        if self._detached is not None:
            if self._detached != (di, wi):
                raise CountInvariantError('token %r is detached, cannot increment %r' % (self._detached, (di, wi)))
            self._detached = None

        topic = self.topic_assignment[di][wi]
        term = self.docs[di][wi]

        self.doc_topic_count[di, topic] += 1
        self.doc_topic_sum[di] += 1
        self.topic_term_count[topic][term] = self.topic_term_count[topic].get(term, 0) + 1
        self.topic_term_sum[topic] += 1

    def decrement(self, di, wi):
        """ remove the contribution of token (di, wi) under its current topic """
        if self._detached is not None:
            raise CountInvariantError('token %r is already detached, cannot decrement %r'
                                      % (self._detached, (di, wi)))

        topic = self.topic_assignment[di][wi]
        term = self.docs[di][wi]

        count = self.topic_term_count[topic].get(term, 0)
        if count <= 0 or self.doc_topic_count[di, topic] <= 0:
            raise CountInvariantError('token %r (term %r) is not counted under topic %d' % ((di, wi), term, topic))

        self.doc_topic_count[di, topic] -= 1
        self.doc_topic_sum[di] -= 1
        if count == 1:
            del self.topic_term_count[topic][term]
        else:
            self.topic_term_count[topic][term] = count - 1
        self.topic_term_sum[topic] -= 1

        self._detached = (di, wi)

    def assign(self, di, wi, topic):
        """ change the topic of the detached token (di, wi) """
        if self._detached != (di, wi):
            raise CountInvariantError('token %r must be detached before reassignment' % ((di, wi),))
        if not 0 <= topic < self.n_topic:
            raise CountInvariantError('topic %r out of range [0, %d)' % (topic, self.n_topic))
        self.topic_assignment[di][wi] = topic

    def check_invariants(self):
        """ recount every table from the topic assignment and compare

        Raises
        ------
        CountInvariantError
            when any table disagrees with the topic assignment or a token is detached
        """
        if self._detached is not None:
            raise CountInvariantError('token %r is detached' % (self._detached,))

        doc_topic_count = np.zeros_like(self.doc_topic_count)
        topic_term_count = [dict() for _ in range(self.n_topic)]
        for di, doc in enumerate(self.docs):
            topics = self.topic_assignment[di]
            if len(topics) != len(doc):
                raise CountInvariantError('document %d has %d tokens but %d topics' % (di, len(doc), len(topics)))
            for term, topic in zip(doc, topics):
                doc_topic_count[di, topic] += 1
                topic_term_count[topic][term] = topic_term_count[topic].get(term, 0) + 1

        if not np.array_equal(doc_topic_count, self.doc_topic_count):
            raise CountInvariantError('document-topic counts disagree with topic assignment')
        doc_len = np.array([len(doc) for doc in self.docs], dtype=int)
        if not np.array_equal(self.doc_topic_sum, doc_len) \
                or not np.array_equal(self.doc_topic_count.sum(1), self.doc_topic_sum):
            raise CountInvariantError('document-topic sums disagree with document lengths')
        for ki in range(self.n_topic):
            if topic_term_count[ki] != self.topic_term_count[ki]:
                raise CountInvariantError('topic-term counts of topic %d disagree with topic assignment' % ki)
            if sum(self.topic_term_count[ki].values()) != self.topic_term_sum[ki]:
                raise CountInvariantError('topic-term sum of topic %d disagrees with its counts' % ki)

    def describe(self):
        """ human readable dump of every count table, for debug logging """
        lines = ['topic assignment:']
        lines.extend(' '.join(str(k) for k in topics) for topics in self.topic_assignment)
        lines.append('document-topic count:')
        lines.extend(' '.join(str(c) for c in row) for row in self.doc_topic_count)
        lines.append('document-topic sum:')
        lines.append(' '.join(str(c) for c in self.doc_topic_sum))
        lines.append('topic-term count:')
        for ki in range(self.n_topic):
            lines.append('topic %d: %s' % (ki, ' '.join('%s:%d' % (term, cnt) for term, cnt
                                                       in sorted(self.topic_term_count[ki].items()))))
        lines.append('topic-term sum:')
        lines.append(' '.join(str(c) for c in self.topic_term_sum))
        return '\n'.join(lines)
