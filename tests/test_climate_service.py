"""Tests for the climate zone resolver."""

import pytest

from app.models.schemas import ClimateZone
from app.services.climate_service import CLIMATE_ZONES, ClimateZoneResolver


class TestClimateZoneResolver:
    @pytest.mark.parametrize("state,zone,adoption", [
        ("FL", "Hot-Humid", 0.92),
        ("TX", "Hot-Humid", 0.92),
        ("AZ", "Hot-Dry", 0.88),
        ("NC", "Mixed-Humid", 0.83),
        ("CO", "Mixed-Dry", 0.78),
        ("MI", "Cold", 0.88),
        ("ME", "Very Cold", 0.83),
        ("OR", "Marine", 0.68),
    ])
    def test_known_states(self, state, zone, adoption):
        result = ClimateZoneResolver().resolve(state)
        assert result.zone_name == zone
        assert result.adoption_fraction == adoption

    def test_unknown_state_falls_back(self):
        result = ClimateZoneResolver().resolve("ZZ")
        assert result.zone_name == "Unknown"
        assert result.adoption_fraction == 0.75

    def test_illinois_is_not_in_any_zone(self):
        assert ClimateZoneResolver().resolve("IL").adoption_fraction == 0.75

    def test_lookup_is_case_sensitive(self):
        assert ClimateZoneResolver().resolve("fl").zone_name == "Unknown"

    def test_table_covers_twenty_states(self):
        states = [state for zone in CLIMATE_ZONES for state in zone.states]
        assert len(states) == len(set(states)) == 20

    def test_injected_table(self):
        resolver = ClimateZoneResolver([
            ClimateZone(name="Test", states=frozenset({"IL"}), adoption_fraction=0.5),
        ])
        assert resolver.resolve("IL").zone_name == "Test"
        assert resolver.resolve("FL").zone_name == "Unknown"
