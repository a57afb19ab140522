"""Unit tests for the spherical k-means engine."""

import warnings

import pytest
import numpy as np
from scipy.sparse import csr_matrix
from sklearn.exceptions import ConvergenceWarning

from spkmeans.clustering.spherical import (
    SphericalKMeans,
    run_spkmeans,
    refine,
    validate_parameters,
    txn_scheme,
    initial_partitions,
    compute_concept,
    compute_concepts,
    compute_quality,
    assign_partitions,
    resolve_empty_partitions
)
from spkmeans.clustering.state import ClusterState
from spkmeans.config import SPKMeansConfig
from spkmeans.exceptions import (
    ConvergenceError,
    DegenerateVectorError,
    EmptyPartitionError,
    InvalidParameterError
)


def make_topic_documents(seed=42, docs_per_topic=20, n_words=12):
    """Three topics, each concentrated on its own block of words."""
    rng = np.random.default_rng(seed)
    docs = []
    for topic in range(3):
        weights = rng.random((docs_per_topic, n_words)) * 0.1
        block = slice(topic * 4, topic * 4 + 4)
        weights[:, block] += rng.random((docs_per_topic, 4)) + 1.0
        docs.append(weights)
    return np.vstack(docs).astype(np.float32)


def as_sets(groups):
    return sorted(sorted(int(i) for i in g) for g in groups)


class TestValidateParameters:
    """Test cases for parameter validation."""

    def test_valid(self):
        validate_parameters(k=2, dc=4, wc=3)
        validate_parameters(k=4, dc=4, wc=3)

    @pytest.mark.parametrize('k, dc, wc', [
        (0, 4, 3),
        (-1, 4, 3),
        (5, 4, 3),
        (1, 0, 3),
        (1, 4, 0),
    ])
    def test_invalid(self, k, dc, wc):
        with pytest.raises(InvalidParameterError):
            validate_parameters(k=k, dc=dc, wc=wc)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            run_spkmeans(np.eye(3, dtype=np.float32), k=4)


class TestSteps:
    """Test cases for the individual algorithm steps."""

    def test_txn_scheme_unit_norm(self):
        docs = make_topic_documents()

        txn_scheme(docs)

        np.testing.assert_allclose(np.linalg.norm(docs, axis=1), 1.0, atol=1e-5)

    def test_txn_scheme_rejects_zero_document(self):
        docs = np.array([[1.0, 0.0], [0.0, 0.0]], dtype=np.float32)

        with pytest.raises(DegenerateVectorError):
            txn_scheme(docs)

    def test_initial_partitions_even_split(self):
        groups = initial_partitions(dc=6, k=3)

        assert [g.tolist() for g in groups] == [[0, 1], [2, 3], [4, 5]]

    def test_initial_partitions_last_block_takes_remainder(self):
        groups = initial_partitions(dc=7, k=3)

        assert [g.tolist() for g in groups] == [[0, 1], [2, 3], [4, 5, 6]]

    def test_initial_partitions_deterministic(self):
        first = initial_partitions(dc=101, k=7)
        second = initial_partitions(dc=101, k=7)

        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize('dc, k', [(1, 1), (5, 1), (5, 5), (10, 3), (100, 7)])
    def test_initial_partitions_cover_all_documents(self, dc, k):
        groups = initial_partitions(dc=dc, k=k)

        assert len(groups) == k
        assert sorted(np.concatenate(groups).tolist()) == list(range(dc))
        assert all(len(g) > 0 for g in groups)

    def test_compute_concept_unit_norm(self):
        docs = make_topic_documents()
        txn_scheme(docs)

        cv = compute_concept(docs, np.arange(10))

        assert np.linalg.norm(cv) == pytest.approx(1.0, abs=1e-5)

    def test_compute_concept_direction_is_mean_direction(self):
        docs = np.array([[1.0, 0.0], [0.0, 1.0]], dtype=np.float32)

        cv = compute_concept(docs, np.array([0, 1]))

        np.testing.assert_allclose(cv, [np.sqrt(0.5), np.sqrt(0.5)], atol=1e-6)

    def test_compute_concept_does_not_modify_documents(self):
        docs = np.array([[1.0, 0.0], [0.0, 1.0]], dtype=np.float32)
        original = docs.copy()

        compute_concept(docs, np.array([0, 1]))

        np.testing.assert_array_equal(docs, original)

    def test_compute_concepts_empty_partition(self):
        docs = np.eye(3, dtype=np.float32)

        with pytest.raises(EmptyPartitionError) as exc_info:
            compute_concepts(docs, [np.array([0, 1, 2]), np.array([], dtype=int)])

        assert exc_info.value.partition == 1

    def test_compute_quality(self):
        docs = np.array([[1.0, 0.0], [0.0, 1.0]], dtype=np.float32)
        partitions = [np.array([0]), np.array([1])]
        concepts = compute_concepts(docs, partitions)

        assert compute_quality(docs, partitions, concepts) == pytest.approx(2.0)

    def test_assign_partitions_nearest_concept(self):
        docs = np.array([[1.0, 0.0], [0.0, 1.0], [0.8, 0.6]], dtype=np.float32)
        concepts = np.array([[0.0, 1.0], [1.0, 0.0]], dtype=np.float32)

        groups, scores = assign_partitions(docs, concepts)

        assert [g.tolist() for g in groups] == [[1], [0, 2]]
        np.testing.assert_allclose(scores, [1.0, 1.0, 0.8], atol=1e-6)

    def test_assign_partitions_tie_goes_to_lowest_index(self):
        docs = np.array([[np.sqrt(0.5), np.sqrt(0.5)]], dtype=np.float32)
        concepts = np.array([[1.0, 0.0], [0.0, 1.0]], dtype=np.float32)

        groups, _ = assign_partitions(docs, concepts)

        assert [g.tolist() for g in groups] == [[0], []]

    def test_assign_partitions_parallel_matches_sequential(self):
        docs = make_topic_documents(seed=7)
        txn_scheme(docs)
        concepts = compute_concepts(docs, initial_partitions(len(docs), 3))

        sequential, seq_scores = assign_partitions(docs, concepts, n_jobs=1)
        parallel, par_scores = assign_partitions(docs, concepts, n_jobs=4)

        for a, b in zip(sequential, parallel):
            np.testing.assert_array_equal(a, b)
        np.testing.assert_allclose(seq_scores, par_scores, atol=1e-6)

    def test_assign_partitions_cover_all_documents(self):
        docs = make_topic_documents()
        txn_scheme(docs)
        concepts = compute_concepts(docs, initial_partitions(len(docs), 4))

        groups, _ = assign_partitions(docs, concepts, n_jobs=3)

        assert sorted(np.concatenate(groups).tolist()) == list(range(len(docs)))


class TestEmptyPartitionPolicy:
    """Test cases for empty partition handling."""

    def setup_method(self):
        self.groups = [np.array([0, 1, 2]), np.array([], dtype=np.intp), np.array([3])]
        self.scores = np.array([0.9, 0.2, 0.95, 0.1])

    def test_no_empty_partitions_unchanged(self):
        groups = [np.array([0, 1]), np.array([2, 3])]

        result, reseeded = resolve_empty_partitions(groups, self.scores)

        assert reseeded == 0
        assert result is groups

    def test_error_policy(self):
        with pytest.raises(EmptyPartitionError) as exc_info:
            resolve_empty_partitions(self.groups, self.scores, policy='error')

        assert exc_info.value.partition == 1

    def test_reseed_moves_farthest_outlier(self):
        result, reseeded = resolve_empty_partitions(self.groups, self.scores, policy='reseed')

        # Document 3 scores lowest but is alone in its partition
        assert reseeded == 1
        assert [g.tolist() for g in result] == [[0, 2], [1], [3]]

    def test_reseed_multiple_empty_partitions(self):
        groups = [np.arange(4), np.array([], dtype=np.intp), np.array([], dtype=np.intp)]
        scores = np.array([0.5, 0.4, 0.3, 0.9])

        result, reseeded = resolve_empty_partitions(groups, scores)

        assert reseeded == 2
        assert [g.tolist() for g in result] == [[0, 3], [2], [1]]

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            resolve_empty_partitions(self.groups, self.scores, policy='ignore')


class TestRunSPKMeans:
    """End-to-end scenarios for the iteration loop."""

    def test_two_pairs_of_near_duplicates(self):
        docs = np.array([[1, 0], [0, 1], [1, 0.1], [0.1, 1]], dtype=np.float32)

        result = run_spkmeans(docs, k=2)

        assert result.converged
        assert result.iterations <= 5
        assert as_sets(result.state.partitions) == [[0, 2], [1, 3]]

    def test_single_partition(self):
        docs = make_topic_documents()

        result = run_spkmeans(docs, k=1)

        assert result.converged
        assert result.iterations == 1
        assert result.state.partitions[0].tolist() == list(range(len(docs)))
        assert result.state.concepts.shape == (1, docs.shape[1])

    def test_one_partition_per_document(self):
        docs = np.eye(4, dtype=np.float32)

        result = run_spkmeans(docs, k=4)

        assert result.converged
        assert [p.tolist() for p in result.state.partitions] == [[0], [1], [2], [3]]
        np.testing.assert_allclose(result.state.concepts, docs, atol=1e-6)

    def test_zero_document_rejected(self):
        docs = np.array([[1.0, 0.0], [0.0, 0.0], [0.0, 1.0]], dtype=np.float32)

        with pytest.raises(DegenerateVectorError):
            run_spkmeans(docs, k=2)

    def test_recovers_topics(self):
        docs = make_topic_documents()

        result = run_spkmeans(docs, k=3)

        assert as_sets(result.state.partitions) == [
            list(range(0, 20)),
            list(range(20, 40)),
            list(range(40, 60))
        ]

    def test_partition_invariant(self):
        docs = make_topic_documents(seed=3)

        result = run_spkmeans(docs, k=5)

        assert result.state.p_sizes.sum() == len(docs)
        assert sorted(np.concatenate(result.state.partitions).tolist()) == list(range(len(docs)))

    def test_documents_normalized_in_place(self):
        docs = make_topic_documents()

        run_spkmeans(docs, k=3)

        np.testing.assert_allclose(np.linalg.norm(docs, axis=1), 1.0, atol=1e-5)

    def test_concepts_unit_norm(self):
        result = run_spkmeans(make_topic_documents(), k=4)

        np.testing.assert_allclose(np.linalg.norm(result.state.concepts, axis=1), 1.0, atol=1e-5)

    def test_quality_non_decreasing(self):
        rng = np.random.default_rng(11)
        docs = rng.random((80, 15)).astype(np.float32)

        result = run_spkmeans(docs, k=4)

        history = np.array(result.quality_history)
        assert len(history) == result.iterations + 1
        assert np.all(np.diff(history) >= -1e-4)
        assert result.quality == pytest.approx(history[-1])

    def test_idempotent_at_convergence(self):
        docs = make_topic_documents(seed=5)
        config = SPKMeansConfig.default()
        result = run_spkmeans(docs, k=3, config=config)

        new_quality = refine(result.doc_matrix, result.state)

        assert new_quality - result.quality <= config.convergence.q_threshold

    def test_accepts_lists_and_sparse_input(self):
        docs = [[1, 0], [0, 1], [1, 0.1], [0.1, 1]]

        from_list = run_spkmeans(docs, k=2)
        from_sparse = run_spkmeans(csr_matrix(np.array(docs)), k=2)

        assert as_sets(from_list.state.partitions) == as_sets(from_sparse.state.partitions)

    def test_rejects_nan(self):
        docs = np.array([[1.0, np.nan], [0.0, 1.0]], dtype=np.float32)

        with pytest.raises(ValueError):
            run_spkmeans(docs, k=1)

    def test_parallel_matches_sequential(self):
        sequential = run_spkmeans(make_topic_documents(seed=9), k=3)

        config = SPKMeansConfig.default()
        config.engine.n_jobs = 3
        parallel = run_spkmeans(make_topic_documents(seed=9), k=3, config=config)

        assert as_sets(sequential.state.partitions) == as_sets(parallel.state.partitions)
        assert sequential.iterations == parallel.iterations

    def test_float64_engine(self):
        config = SPKMeansConfig.default()
        config.engine.dtype = 'float64'

        result = run_spkmeans(make_topic_documents(), k=3, config=config)

        assert result.state.concepts.dtype == np.float64
        assert result.converged

    def test_timings_recorded(self):
        result = run_spkmeans(make_topic_documents(), k=3)

        assert set(result.timings) == {'partition', 'concepts', 'quality', 'total'}
        assert all(value >= 0 for value in result.timings.values())


class TestIterationCap:
    """Test cases for the maximum iteration bound."""

    def setup_method(self):
        # Iteration 1 moves document 0 into partition 1; iteration 2 changes nothing
        self.docs = np.array([
            [1.0, 0.0],
            [0.0, 1.0],
            [1.0, 0.0],
            [1.0, 0.0],
        ], dtype=np.float32)
        self.config = SPKMeansConfig.default()
        self.config.convergence.q_threshold = 0.0
        self.config.convergence.max_iter = 1

    def test_cap_returns_unconverged_result(self):
        with pytest.warns(ConvergenceWarning):
            result = run_spkmeans(self.docs, k=2, config=self.config)

        assert result.converged is False
        assert result.iterations == 1
        assert result.quality_history == [pytest.approx(2 + np.sqrt(2), abs=1e-5),
                                          pytest.approx(4.0, abs=1e-5)]
        assert result.quality == pytest.approx(4.0, abs=1e-5)
        assert as_sets(result.state.partitions) == [[0, 2, 3], [1]]

    def test_cap_raises_when_strict(self):
        self.config.convergence.raise_on_max_iter = True

        with pytest.raises(ConvergenceError) as exc_info:
            run_spkmeans(self.docs, k=2, config=self.config)

        assert exc_info.value.result.converged is False
        assert exc_info.value.result.iterations == 1

    def test_converges_below_cap(self):
        self.config.convergence.max_iter = 2

        with warnings.catch_warnings():
            warnings.simplefilter('error', ConvergenceWarning)
            result = run_spkmeans(self.docs, k=2, config=self.config)

        assert result.converged is True
        assert result.iterations == 2
        assert result.quality_history[-1] == pytest.approx(result.quality_history[-2])


class TestSphericalKMeans:
    """Test cases for the SphericalKMeans clusterer."""

    def setup_method(self):
        self.data = make_topic_documents()

    def test_cluster(self):
        clusterer = SphericalKMeans(n_clusters=3)
        clusters = clusterer.cluster(self.data)

        assert len(clusters) == 3
        assert sum(len(indices) for indices in clusters.values()) == len(self.data)
        assert clusterer.n_iter_ >= 1
        assert clusterer.converged_

    def test_fit_predict_matches_cluster(self):
        labels = SphericalKMeans(n_clusters=3, copy=True).fit_predict(self.data)
        clusters = SphericalKMeans(n_clusters=3, copy=True).cluster(self.data)

        assert labels.shape == (len(self.data),)
        for cid, indices in clusters.items():
            assert np.flatnonzero(labels == cid).tolist() == indices

    def test_prepare_clusters_keeps_empty_partitions(self):
        clusters = SphericalKMeans.prepare_clusters(np.array([2, 0, 2]), n_clusters=3)

        assert clusters == {0: [1], 1: [], 2: [0, 2]}
        assert SphericalKMeans.prepare_clusters(np.array([1, 0])) == {0: [1], 1: [0]}

    def test_copy_leaves_input_untouched(self):
        original = self.data.copy()

        SphericalKMeans(n_clusters=3, copy=True).fit(self.data)

        np.testing.assert_array_equal(self.data, original)

    def test_predict(self):
        clusterer = SphericalKMeans(n_clusters=3, copy=True).fit(self.data)

        predicted = clusterer.predict(self.data)

        np.testing.assert_array_equal(predicted, clusterer.labels_)

    def test_predict_before_fit(self):
        with pytest.raises(RuntimeError):
            SphericalKMeans(n_clusters=3).predict(self.data)

    def test_get_params(self):
        clusterer = SphericalKMeans(n_clusters=3)
        clusterer.cluster(self.data)

        params = clusterer.get_params()

        assert params['algorithm'] == 'spkmeans'
        assert params['n_clusters'] == 3
        assert params['q_threshold'] == pytest.approx(0.001)
        assert params['converged'] is True
        assert params['quality'] > 0


if __name__ == '__main__':
    pytest.main([__file__])
