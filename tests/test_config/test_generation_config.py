"""Tests for generation configuration."""

import pytest

from treeforge.config import GenerationConfig


class TestGenerationConfig:
    """Test GenerationConfig defaults and validation."""

    def test_defaults(self):
        """Test default generation parameters."""
        config = GenerationConfig()

        assert config.max_depth == 8
        assert config.const_prob == 0.2
        assert config.subtree_prob == 0.5
        assert config.formal_prefix == "x"
        assert config.formal_idx == 1

    @pytest.mark.parametrize("kwargs", [
        {"max_depth": 0},
        {"const_prob": 1.5},
        {"subtree_prob": -0.1},
        {"formal_prefix": "1x"},
        {"formal_idx": -1},
    ])
    def test_invalid_values(self, kwargs):
        """Test rejecting out-of-range parameters."""
        with pytest.raises(ValueError):
            GenerationConfig(**kwargs)

    def test_to_dict(self):
        """Test config serialization."""
        assert GenerationConfig(seed=3).to_dict()["seed"] == 3
