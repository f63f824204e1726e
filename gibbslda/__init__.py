from .lda_gibbs import GibbsLDA, run_gibbs_sampling
from .sufficient_stats import SufficientStatistics
from .estimators import estimate_theta, estimate_phi, unseen_term_probability
from .utils import CategoricalSampler, RandomCategoricalSampler, sampling_from_dist, get_top_terms
from .errors import (GibbsLDAError, ConfigurationError, DegenerateDistributionError, CountInvariantError,
                     NotInitializedError)
