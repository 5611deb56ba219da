"""Tests for EngineConfig and regulatory constants."""

import pytest

from fuelbank.config import (
    DEFAULT_ENGINE_CONFIG,
    DEFAULT_TARGET_INTENSITY,
    MJ_PER_TONNE,
    POOL_TOLERANCE_G,
    EngineConfig,
)


class TestConstants:
    """Tests for module-level regulatory constants."""

    def test_target_intensity(self):
        assert DEFAULT_TARGET_INTENSITY == 89.3368

    def test_energy_conversion(self):
        assert MJ_PER_TONNE == 41_000

    def test_pool_tolerance(self):
        assert POOL_TOLERANCE_G == 1e-6


class TestEngineConfig:
    """Tests for EngineConfig model."""

    def test_default_values(self):
        """Default config carries the regulatory constants."""
        config = EngineConfig()
        assert config.target_intensity == DEFAULT_TARGET_INTENSITY
        assert config.pool_tolerance_g == POOL_TOLERANCE_G

    def test_default_instance(self):
        assert DEFAULT_ENGINE_CONFIG == EngineConfig()

    def test_custom_values(self):
        """Config accepts custom values."""
        config = EngineConfig(target_intensity=85.0, pool_tolerance_g=1e-3)
        assert config.target_intensity == 85.0
        assert config.pool_tolerance_g == 1e-3

    def test_target_intensity_must_be_positive(self):
        with pytest.raises(ValueError):
            EngineConfig(target_intensity=0)
        with pytest.raises(ValueError):
            EngineConfig(target_intensity=-1.0)

    def test_pool_tolerance_must_be_positive(self):
        with pytest.raises(ValueError):
            EngineConfig(pool_tolerance_g=0)
