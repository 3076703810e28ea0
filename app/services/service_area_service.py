"""
Service Area Service

Partitions the city dataset into primary and secondary service rings around a
geocoded target and derives housing-unit estimates for every city in them.

Housing units are an approximation from fixed ratios until real housing data
is wired in: 2.5 people per household, a 70/30 single/multi-family split and
one commercial unit per 50 residents.
"""
import logging
import math
from typing import Iterable, Optional

from app.models.schemas import (
    CityEstimate,
    CityRecord,
    Coordinate,
    HousingEstimate,
    ServiceAreaResult,
)

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8

PEOPLE_PER_HOUSEHOLD = 2.5
SINGLE_FAMILY_SHARE = 0.7
MULTI_FAMILY_SHARE = 0.3
PEOPLE_PER_COMMERCIAL_UNIT = 50


def round_half_up(value: float) -> int:
    """Round half away from zero for non-negative values (2.5 -> 3)."""
    return math.floor(value + 0.5)


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in statute miles."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lng = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def estimate_housing(population: int) -> HousingEstimate:
    """
    Estimate housing units for a population.

    Each component is rounded on its own and the total is the sum of the
    rounded parts, so it can drift by a unit from a direct computation.
    """
    total_units = round_half_up(population / PEOPLE_PER_HOUSEHOLD)
    single_family = round_half_up(total_units * SINGLE_FAMILY_SHARE)
    multi_family = round_half_up(total_units * MULTI_FAMILY_SHARE)
    commercial = round_half_up(population / PEOPLE_PER_COMMERCIAL_UNIT)
    return HousingEstimate(
        single_family_units=single_family,
        multi_family_units=multi_family,
        commercial_units=commercial,
        total_housing_units=single_family + multi_family + commercial,
    )


def to_city_estimate(record: CityRecord, distance_miles: Optional[float] = None) -> CityEstimate:
    """Attach housing estimates to a complete dataset record."""
    housing = estimate_housing(record.population)
    return CityEstimate(
        name=record.name,
        state=record.state,
        population=record.population,
        single_family_units=housing.single_family_units,
        multi_family_units=housing.multi_family_units,
        commercial_units=housing.commercial_units,
        total_housing_units=housing.total_housing_units,
        coordinates=Coordinate(lat=record.latitude, lng=record.longitude),
        distance_miles=distance_miles,
    )


def find_city(dataset: Iterable[CityRecord], city: str, state: str) -> Optional[CityRecord]:
    """First record whose name and state match case-insensitively."""
    city_lower = city.lower()
    state_lower = state.lower()
    for record in dataset:
        if not record.name or not record.state:
            continue
        if record.name.lower() == city_lower and record.state.lower() == state_lower:
            return record
    return None


def resolve_state_code(dataset: Iterable[CityRecord], city: str, state: str) -> str:
    """State code as recorded in the dataset, else the caller's state verbatim."""
    match = find_city(dataset, city, state)
    return match.state if match else state


def partition(
    dataset: Iterable[CityRecord],
    target: Coordinate,
    target_state_code: str,
    primary_radius_miles: float,
    secondary_radius_miles: float,
) -> tuple[tuple[CityEstimate, ...], tuple[CityEstimate, ...]]:
    """
    Split same-state cities into primary and secondary rings.

    Cities in other states are never included, however close. Both radius
    bounds are inclusive and rings keep dataset order.

    Returns:
        (primary, secondary) tuples of CityEstimate
    """
    state_lower = target_state_code.lower()
    primary: list[CityEstimate] = []
    secondary: list[CityEstimate] = []

    for record in dataset:
        if not record.is_complete or record.state.lower() != state_lower:
            continue

        distance = haversine_distance(
            target, Coordinate(lat=record.latitude, lng=record.longitude)
        )
        if distance <= primary_radius_miles:
            primary.append(to_city_estimate(record, distance))
        elif distance <= secondary_radius_miles:
            secondary.append(to_city_estimate(record, distance))

    return tuple(primary), tuple(secondary)


def build_service_area(
    dataset: Iterable[CityRecord],
    city: str,
    state: str,
    target: Coordinate,
    primary_radius_miles: float,
    secondary_radius_miles: float,
) -> ServiceAreaResult:
    """
    Build the service area around an already geocoded target city.

    The target city's own figures come from a second lookup keyed on the
    resolved state code; they are None when the city is not in the dataset.
    """
    dataset = tuple(dataset)
    state_code = resolve_state_code(dataset, city, state)

    primary, secondary = partition(
        dataset, target, state_code, primary_radius_miles, secondary_radius_miles
    )

    target_record = find_city(dataset, city, state_code)
    target_city = None
    if target_record is not None and target_record.is_complete:
        target_city = to_city_estimate(target_record)
    else:
        logger.info(f"Target city {city}, {state_code} not found in dataset")

    logger.info(
        f"Service area for {city}, {state_code}: {len(primary)} primary, "
        f"{len(secondary)} secondary cities"
    )

    return ServiceAreaResult(
        city=city,
        state=state_code,
        population=target_city.population if target_city else None,
        single_family_units=target_city.single_family_units if target_city else None,
        multi_family_units=target_city.multi_family_units if target_city else None,
        commercial_units=target_city.commercial_units if target_city else None,
        total_housing_units=target_city.total_housing_units if target_city else None,
        primary_radius=primary_radius_miles,
        secondary_radius=secondary_radius_miles,
        cities_in_primary_radius=primary,
        cities_in_secondary_radius=secondary,
        coordinates=target,
    )
