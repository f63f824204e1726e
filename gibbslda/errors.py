class GibbsLDAError(Exception):
    """ Base class of every error raised by gibbslda
    """


class ConfigurationError(GibbsLDAError, ValueError):
    """ Invalid hyperparameters, iteration count, or a document count that
    does not match the supplied corpus
    """


class DegenerateDistributionError(GibbsLDAError, ValueError):
    """ Categorical sampling requested from an empty, negative, or zero-mass weight vector
    """


class CountInvariantError(GibbsLDAError, RuntimeError):
    """ Sufficient statistics are inconsistent with the topic assignment.
    Raised as a fatal error; the sampling run has to be discarded.
    """


class NotInitializedError(GibbsLDAError, RuntimeError):
    """ Sampling or estimation requested before the model was initialized
    """
