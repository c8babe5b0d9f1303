"""
Tests to verify simulator configuration defaults and validation.
Ensures invalid parameters fail before any season is simulated.
"""

import dataclasses

import pytest

from ladder_sim.config import (
    BOTTOM_RANK,
    FAILED_MATCHMAKING,
    MAX_PIECES,
    PRO_TIER_SIZE,
    RANK_COUNT,
    TOP_RANK,
    SimulationConfig,
)


class TestConfigCompliance:
    """Test that configuration values are correct"""

    def test_ladder_shape(self):
        """Verify the ladder runs from pro (0) to entry (30)"""
        assert TOP_RANK == 0
        assert BOTTOM_RANK == 30
        assert RANK_COUNT == 31

    def test_max_pieces(self):
        """Verify MAX_PIECES is 5"""
        assert MAX_PIECES == 5

    def test_failed_matchmaking(self):
        """Verify the ragequit threshold is 10"""
        assert FAILED_MATCHMAKING == 10

    def test_pro_tier_size(self):
        """Verify the pro cutoff keeps the top 500"""
        assert PRO_TIER_SIZE == 500

    def test_defaults_are_valid(self):
        """Verify a default config constructs without errors"""
        config = SimulationConfig()
        assert config.skill_mode == "flat"
        assert config.derank is False
        assert config.run_label == "NoDerankNoLearn"

    def test_config_is_immutable(self):
        """Verify the config record can't be changed after construction"""
        config = SimulationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.seasons = 3


class TestConfigValidation:
    """Test that invalid parameters are rejected up front"""

    @pytest.mark.parametrize("field,value,message", [
        ("learn_factor", 0.0, "learn_factor"),
        ("learn_scale", -1.0, "learn_scale"),
        ("skill_offset_scale", 0, "skill_offset_scale"),
        ("skill_mode", "sideways", "skill_mode"),
        ("skill_win_weight", 1.5, "skill_win_weight"),
        ("players_per_season", 0, "players_per_season"),
        ("seasons", 0, "seasons"),
        ("games_per_season", -1, "games_per_season"),
        ("seasonal_variance", -5, "seasonal_variance"),
        ("failed_matchmaking", -1, "failed_matchmaking"),
        ("pro_tier_size", 0, "pro_tier_size"),
        ("output_formats", ("xml",), "output format"),
    ])
    def test_invalid_values_fail_fast(self, field, value, message):
        """Test that each invalid parameter raises ValueError"""
        with pytest.raises(ValueError, match=message):
            SimulationConfig(**{field: value})

    def test_run_label_reflects_switches(self):
        """Test that the file label names derank and learning"""
        config = SimulationConfig(derank=True, skill_mode="growth")
        assert config.run_label == "DerankLearn"


class TestConfigFromEnv:
    """Test environment overrides"""

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test that LADDER_* variables override the constants"""
        monkeypatch.setenv("LADDER_SEASONS", "3")
        monkeypatch.setenv("LADDER_SKILL_MODE", "Growth")
        monkeypatch.setenv("LADDER_DERANK", "true")
        monkeypatch.setenv("LADDER_SEED", "99")
        monkeypatch.setenv("LADDER_OUTPUT_FORMATS", "csv, json")

        config = SimulationConfig.from_env(str(tmp_path / "missing.env"))

        assert config.seasons == 3
        assert config.skill_mode == "growth"
        assert config.derank is True
        assert config.seed == 99
        assert config.output_formats == ("csv", "json")

    def test_env_file(self, monkeypatch, tmp_path):
        """Test that a .env file is loaded"""
        # Set then delete so teardown removes whatever load_dotenv adds
        monkeypatch.setenv("LADDER_PLAYERS_PER_SEASON", "1")
        monkeypatch.delenv("LADDER_PLAYERS_PER_SEASON")
        env_file = tmp_path / ".env"
        env_file.write_text("LADDER_PLAYERS_PER_SEASON=250\n")

        config = SimulationConfig.from_env(str(env_file))
        assert config.players_per_season == 250

    def test_invalid_env_value_fails(self, monkeypatch, tmp_path):
        """Test that a bad override is caught at construction"""
        monkeypatch.setenv("LADDER_LEARN_SCALE", "0")
        with pytest.raises(ValueError, match="learn_scale"):
            SimulationConfig.from_env(str(tmp_path / "missing.env"))
