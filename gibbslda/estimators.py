import numpy as np


def estimate_theta(stats, alpha):
    """ posterior mean of the document-topic distributions

    Parameters
    ----------
    stats: SufficientStatistics
    alpha: float
        symmetric Dirichlet prior of document-topic distribution

    Returns
    -------
    theta: ndarray, shape (n_doc, n_topic)
        each row sums to one
    """
    n_topic = stats.n_topic
    return (stats.doc_topic_count + alpha) / (stats.doc_topic_sum[:, np.newaxis] + n_topic * alpha)


def estimate_phi(stats, n_voca, beta):
    """ posterior mean of the topic-term distributions over the observed support

    Only terms with a nonzero count under a topic are materialised; the
    probability of any other term is given by `unseen_term_probability`.
    Hence the values of phi[k] sum to (n_k + beta * |support|) / (n_k + beta * n_voca).

    Parameters
    ----------
    stats: SufficientStatistics
    n_voca: int
        vocabulary size used in the normaliser
    beta: float
        symmetric Dirichlet prior of topic-term distribution

    Returns
    -------
    phi: list of dict, size n_topic
        phi[k][term] = probability of term under topic k
    phi_sorted: list of list, size n_topic
        (term, probability) pairs of each topic, highest probability first.
        ties keep the sorted term order
    """
    phi = list()
    phi_sorted = list()
    for ki in range(stats.n_topic):
        denominator = stats.topic_term_sum[ki] + beta * n_voca
        topic_phi = dict()
        for term in sorted(stats.topic_term_count[ki]):
            topic_phi[term] = (stats.topic_term_count[ki][term] + beta) / denominator
        phi.append(topic_phi)
        phi_sorted.append(sorted(topic_phi.items(), key=lambda item: item[1], reverse=True))
    return phi, phi_sorted


def unseen_term_probability(stats, n_voca, beta, topic):
    """ probability that `topic` assigns to a term outside its observed support """
    return beta / (stats.topic_term_sum[topic] + beta * n_voca)
