"""Tests for configuration module."""

import pytest
from morsetype.config import (
    MorseTypeConfig,
    SpeedProfile,
    SPEED_PROFILES,
    InvalidSpeedLevel,
    profile_for,
)


class TestSpeedProfiles:
    """Test the speed profile table."""

    def test_all_levels_present(self):
        """Test that levels 1-9 all have a profile."""
        assert sorted(SPEED_PROFILES) == list(range(1, 10))
        for level in range(1, 10):
            assert isinstance(profile_for(level), SpeedProfile)

    def test_higher_level_is_faster(self):
        """Test thresholds shrink strictly as the level rises."""
        for level in range(1, 9):
            slower = profile_for(level)
            faster = profile_for(level + 1)
            assert faster.dit_threshold < slower.dit_threshold
            assert faster.char_boundary < slower.char_boundary
            assert faster.word_boundary < slower.word_boundary

    def test_thresholds_positive(self):
        """Test every duration is positive and the dit is the shortest."""
        for profile in SPEED_PROFILES.values():
            assert 0 < profile.dit_threshold < profile.char_boundary
            assert profile.word_boundary > 0

    def test_classic_timing_level(self):
        """Test level 7 uses the classic 0.15/0.9/1.05s timing."""
        profile = profile_for(7)
        assert profile.dit_threshold == pytest.approx(0.15)
        assert profile.char_boundary == pytest.approx(0.9)
        assert profile.word_boundary == pytest.approx(1.05)

    @pytest.mark.parametrize("level", [0, 10, -1, 100])
    def test_out_of_range(self, level):
        """Test levels outside 1-9 are rejected."""
        with pytest.raises(InvalidSpeedLevel):
            profile_for(level)

    @pytest.mark.parametrize("level", ["5", 5.0, None, True])
    def test_non_integer(self, level):
        """Test non-integer levels are rejected."""
        with pytest.raises(InvalidSpeedLevel):
            profile_for(level)

    def test_invalid_level_is_value_error(self):
        """Test InvalidSpeedLevel can be caught as ValueError."""
        with pytest.raises(ValueError):
            profile_for(0)

    def test_profile_immutable(self):
        """Test profiles cannot be modified."""
        profile = profile_for(5)
        with pytest.raises(AttributeError):
            profile.dit_threshold = 1.0


class TestMorseTypeConfig:
    """Test MorseTypeConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = MorseTypeConfig()
        assert config.speed_level == 5
        assert config.cancel_key == "backspace"
        assert config.space_after_unrecognized is False
        assert config.speed_keys["1"] == 1
        assert config.speed_keys["9"] == 9
        assert "0" not in config.speed_keys

    def test_profile_follows_level(self):
        """Test the profile property tracks the speed level."""
        config = MorseTypeConfig(speed_level=3)
        assert config.profile == profile_for(3)

    def test_set_speed(self):
        """Test setting the speed level."""
        config = MorseTypeConfig()
        config.set_speed(8)
        assert config.speed_level == 8
        assert config.profile == profile_for(8)

    def test_set_invalid_speed(self):
        """Test an invalid level leaves the speed unchanged."""
        config = MorseTypeConfig(speed_level=4)
        with pytest.raises(InvalidSpeedLevel):
            config.set_speed(0)
        assert config.speed_level == 4

    def test_invalid_initial_speed(self):
        """Test construction rejects an invalid level."""
        with pytest.raises(InvalidSpeedLevel):
            MorseTypeConfig(speed_level=12)

    def test_tracked_keys(self):
        """Test the key allow-list."""
        config = MorseTypeConfig()
        assert config.is_tracked_key("a")
        assert config.is_tracked_key("z")
        assert config.is_tracked_key("7")
        assert config.is_tracked_key("backspace")
        assert not config.is_tracked_key("0")
        assert not config.is_tracked_key("space")
        assert not config.is_tracked_key("ab")
        assert not config.is_tracked_key("")

    def test_speed_keys_not_shared(self):
        """Test each config gets its own speed key mapping."""
        first = MorseTypeConfig()
        second = MorseTypeConfig()
        first.speed_keys["0"] = 10
        assert "0" not in second.speed_keys
