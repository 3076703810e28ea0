"""
Climate Zone Service

Maps a state code to a named climate zone and the fraction of housing units
assumed to have adopted climate-control service.
"""
from typing import Iterable

from app.models.schemas import ClimateZone, ClimateZoneResult

UNKNOWN_ZONE = ClimateZoneResult(zone_name="Unknown", adoption_fraction=0.75)

CLIMATE_ZONES: tuple[ClimateZone, ...] = (
    ClimateZone(name="Hot-Humid", states=frozenset({"FL", "TX", "LA"}), adoption_fraction=0.92),
    ClimateZone(name="Hot-Dry", states=frozenset({"AZ", "NV", "NM"}), adoption_fraction=0.88),
    ClimateZone(name="Mixed-Humid", states=frozenset({"GA", "NC", "SC"}), adoption_fraction=0.83),
    ClimateZone(name="Mixed-Dry", states=frozenset({"CA", "CO", "UT"}), adoption_fraction=0.78),
    ClimateZone(name="Cold", states=frozenset({"MN", "WI", "MI"}), adoption_fraction=0.88),
    ClimateZone(name="Very Cold", states=frozenset({"ND", "MT", "ME"}), adoption_fraction=0.83),
    ClimateZone(name="Marine", states=frozenset({"WA", "OR"}), adoption_fraction=0.68),
)


class ClimateZoneResolver:
    """Looks up states in an ordered table of climate zones."""

    def __init__(self, zones: Iterable[ClimateZone] = CLIMATE_ZONES):
        self.zones = tuple(zones)

    def resolve(self, state_code: str) -> ClimateZoneResult:
        """Zone for an uppercase state code; the first listing zone wins."""
        for zone in self.zones:
            if state_code in zone.states:
                return ClimateZoneResult(
                    zone_name=zone.name, adoption_fraction=zone.adoption_fraction
                )
        return UNKNOWN_ZONE


def get_climate_resolver() -> ClimateZoneResolver:
    return ClimateZoneResolver()
