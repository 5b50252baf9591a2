import pytest

from agentforge.distance import (
    angular_distance,
    chebyshev_distance,
    cosine_similarity,
    dot_product,
    euclidean_distance,
    manhattan_distance,
)
from agentforge.embedding import Embedding


@pytest.fixture
def embeddings():
    return (
        Embedding(document="test", vec=[1.0, 2.0, 3.0]),
        Embedding(document="test", vec=[1.0, 5.0, 7.0]),
    )


def test_dot_product(embeddings):
    a, b = embeddings
    assert dot_product(a, b) == 32.0


def test_cosine_similarity(embeddings):
    a, b = embeddings
    assert cosine_similarity(a, b, False) == pytest.approx(0.9875414397573881, rel=1e-14)


def test_angular_distance(embeddings):
    a, b = embeddings
    assert angular_distance(a, b, False) == pytest.approx(0.0502980301830343, rel=1e-12)


def test_euclidean_distance(embeddings):
    a, b = embeddings
    assert euclidean_distance(a, b) == 5.0


def test_manhattan_distance(embeddings):
    a, b = embeddings
    assert manhattan_distance(a, b) == 7.0


def test_chebyshev_distance(embeddings):
    a, b = embeddings
    assert chebyshev_distance(a, b) == 4.0


def test_plain_sequences_are_accepted():
    assert dot_product([1.0, 2.0, 3.0], (1.0, 5.0, 7.0)) == 32.0
    assert euclidean_distance([1.0, 2.0, 3.0], [1.0, 5.0, 7.0]) == 5.0


def test_normalized_cosine_is_dot_product():
    assert cosine_similarity([0.6, 0.8], [0.8, 0.6], True) == pytest.approx(0.96)


def test_identical_vectors():
    v = [3.0, 4.0]
    assert cosine_similarity(v, v, False) == pytest.approx(1.0)
    assert euclidean_distance(v, v) == 0.0
    assert chebyshev_distance(v, v) == 0.0


def test_orthogonal_angular_distance_is_half():
    assert angular_distance([1.0, 0.0], [0.0, 1.0], False) == pytest.approx(0.5)


def test_zero_vector_gives_nan():
    similarity = cosine_similarity([0.0, 0.0], [1.0, 2.0], False)
    angle = angular_distance([0.0, 0.0], [1.0, 2.0], False)
    assert str(similarity) == "nan"
    assert str(angle) == "nan"


def test_out_of_range_cosine_gives_nan_angle():
    angle = angular_distance([2.0], [2.0], True)
    assert str(angle) == "nan"


def test_different_lengths_use_common_prefix():
    assert manhattan_distance([1.0, 2.0, 10.0], [2.0, 4.0]) == 3.0
    assert chebyshev_distance([], [1.0]) == 0.0