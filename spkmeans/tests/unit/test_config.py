"""Unit tests for configuration presets."""

import pytest
from spkmeans.config import SPKMeansConfig, Q_THRESHOLD, MAX_ITERATIONS


class TestSPKMeansConfig:
    """Test cases for SPKMeansConfig."""
    
    def test_defaults(self):
        config = SPKMeansConfig.default()
        
        assert config.convergence.q_threshold == Q_THRESHOLD == 0.001
        assert config.convergence.max_iter == MAX_ITERATIONS
        assert config.engine.empty_partition == 'reseed'
        assert config.engine.n_jobs == 1
    
    def test_presets(self):
        strict = SPKMeansConfig.from_preset('strict')
        fast = SPKMeansConfig.from_preset('fast')
        
        assert strict.convergence.q_threshold < Q_THRESHOLD
        assert strict.engine.empty_partition == 'error'
        assert strict.convergence.raise_on_max_iter
        assert fast.convergence.q_threshold > Q_THRESHOLD
    
    def test_presets_are_independent(self):
        first = SPKMeansConfig.default()
        first.engine.n_jobs = 4
        
        assert SPKMeansConfig.default().engine.n_jobs == 1
    
    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            SPKMeansConfig.from_preset('reckless')
    
    def test_unsampled_silhouette(self):
        config = SPKMeansConfig.default().update_from_dict({
            'display': {'silhouette_sample_size': None, 'metrics': False}
        })
        
        assert config.display.silhouette_sample_size is None
        assert config.display.metrics is False
    
    def test_update_from_dict(self):
        config = SPKMeansConfig.default().update_from_dict({
            'convergence': {'max_iter': 50},
            'engine': {'n_jobs': 2}
        })
        
        assert config.convergence.max_iter == 50
        assert config.engine.n_jobs == 2
    
    @pytest.mark.parametrize('data', [
        {'bogus': {}},
        {'engine': {'bogus': 1}},
        {'engine': {'empty_partition': 'ignore'}},
        {'convergence': {'max_iter': 0}},
        {'display': {'silhouette_sample_size': 1}},
        {'display': {'top_terms': -1}},
    ])
    def test_update_from_dict_rejects(self, data):
        with pytest.raises(ValueError):
            SPKMeansConfig.default().update_from_dict(data)
    
    def test_to_dict(self):
        data = SPKMeansConfig.default().to_dict()
        
        assert data['convergence']['q_threshold'] == 0.001
        assert data['engine']['empty_partition'] == 'reseed'
        assert data['display']['top_terms'] == 10
        assert data['display']['metrics'] is True
        assert data['display']['silhouette_sample_size'] == 1000


if __name__ == '__main__':
    pytest.main([__file__])
