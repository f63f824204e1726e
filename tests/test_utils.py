import numpy as np
import pytest

from gibbslda.errors import DegenerateDistributionError
from gibbslda.utils import RandomCategoricalSampler, get_top_terms, sampling_from_dist


@pytest.mark.parametrize('u, expected', [
    (0.0, 0),
    (0.2, 0),
    (0.25, 1),  # cumulative weight of index 0 equals u, so it does not exceed it
    (0.5, 1),
    (0.76, 2),
    (0.9999, 2),
])
def test_sampling_from_dist_inverse_cdf(u, expected, fixed_uniform):
    assert sampling_from_dist([1., 2., 1.], fixed_uniform(u)) == expected


def test_sampling_from_dist_skips_zero_weights(fixed_uniform):
    assert sampling_from_dist([0., 1.], fixed_uniform(0.)) == 1
    assert sampling_from_dist([1., 0., 0.], fixed_uniform(0.9999)) == 0
    assert sampling_from_dist([0., 0., 3.], fixed_uniform(0.5)) == 2


def test_sampling_from_dist_unnormalised_equals_normalised(fixed_uniform):
    weights = np.array([0.3, 5., 1.2, 0.01])
    for u in np.linspace(0, 0.999, 17):
        assert sampling_from_dist(weights, fixed_uniform(u)) == \
            sampling_from_dist(weights / weights.sum(), fixed_uniform(u))


@pytest.mark.parametrize('weights', [
    [],
    [0., 0.],
    [1., -0.5],
    [1., np.nan],
    [np.inf, 1.],
])
def test_sampling_from_dist_degenerate(weights, fixed_uniform):
    with pytest.raises(DegenerateDistributionError):
        sampling_from_dist(weights, fixed_uniform(0.5))


def test_random_sampler_reproducible():
    weights = [0.1, 0.4, 0.2, 0.3]
    first = RandomCategoricalSampler(np.random.RandomState(3))
    second = RandomCategoricalSampler(np.random.RandomState(3))
    draws = [first.sample(weights) for _ in range(200)]
    assert draws == [second.sample(weights) for _ in range(200)]
    assert set(draws) == {0, 1, 2, 3}


def test_random_sampler_frequencies():
    sampler = RandomCategoricalSampler(np.random.RandomState(11))
    draws = np.array([sampler.sample([1., 3.]) for _ in range(4000)])
    assert abs((draws == 1).mean() - 0.75) < 0.03


def test_get_top_terms():
    phi_sorted = [[('x', 0.5), ('y', 0.3), ('z', 0.1)], []]
    assert get_top_terms(phi_sorted, 0, n_terms=2) == ['x', 'y']
    assert get_top_terms(phi_sorted, 0) == ['x', 'y', 'z']
    assert get_top_terms(phi_sorted, 1) == []


def test_sampling_from_dist_upper_edge_skips_trailing_zeros(fixed_uniform):
    # u == 1 puts the threshold on the total mass, past every cumulative value
    assert sampling_from_dist([1., 0.], fixed_uniform(1.)) == 0
    assert sampling_from_dist([1., 0., 2., 0., 0.], fixed_uniform(1.)) == 2
    assert sampling_from_dist([0., 3.], fixed_uniform(1.)) == 1
