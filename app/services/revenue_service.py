"""
Revenue Estimator Service

Projects annual job counts and revenue per service from the housing units of
a service area, scaled by the climate zone's adoption fraction.

Lifecycle descriptors drive how often a service recurs per unit:
- "N-M months": 12 / N jobs per year
- "Annually": 1 job per year
- "N-M years": 1 / N jobs per year
Any other descriptor contributes no jobs and is logged as a warning.
"""
import logging
import math
import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from app.models.schemas import (
    CityEstimate,
    CityRevenue,
    ClimateZoneResult,
    CostRange,
    HousingUnits,
    Industry,
    RevenueSummary,
    Ring,
    SanityCheck,
    ServiceAreaResult,
    ServiceDefinition,
    ServiceEstimate,
)
from app.services.climate_service import ClimateZoneResolver
from app.services.exceptions import ValidationError

logger = logging.getLogger(__name__)

_RANGE_LIFECYCLE = re.compile(r"^\s*(\d+)\s*-\s*\d+\s+(months|years)\s*$")

# Sanity check: 15% of residents as customers at $500/year
SANITY_CUSTOMER_SHARE = 0.15
SANITY_ANNUAL_SPEND = 500


def _service(name: str, lifecycle: str, single: tuple, multi: tuple, commercial: tuple) -> ServiceDefinition:
    return ServiceDefinition(
        name=name,
        lifecycle=lifecycle,
        single_family_cost=CostRange(min=single[0], max=single[1]),
        multi_family_cost=CostRange(min=multi[0], max=multi[1]),
        commercial_cost=CostRange(min=commercial[0], max=commercial[1]),
    )


HVAC_SERVICES: tuple[ServiceDefinition, ...] = (
    _service("Filter Replacement", "1-3 months", (25, 50), (30, 75), (50, 150)),
    _service("Coil Cleaning", "Annually", (45, 350), (100, 500), (200, 800)),
    _service("Drain Line Cleaning", "Annually", (75, 200), (150, 400), (300, 800)),
    _service("System Tune-up", "Annually", (70, 200), (200, 500), (400, 1000)),
    _service("Refrigerant Recharge", "2-3 years", (100, 500), (300, 800), (500, 1500)),
    _service("Duct Cleaning", "3-5 years", (250, 1000), (500, 2000), (1000, 5000)),
    _service("Electrical Component Check", "Annually", (100, 250), (200, 600), (500, 1200)),
    _service("Motor Lubrication", "Annually", (50, 150), (100, 300), (200, 600)),
)

SERVICE_CATALOGS: Mapping[str, tuple[ServiceDefinition, ...]] = MappingProxyType({
    "hvac": HVAC_SERVICES,
})


def parse_lifecycle(lifecycle: str, service_name: Optional[str] = None) -> float:
    """Annual job frequency for a lifecycle descriptor, 0.0 if unrecognized."""
    if lifecycle == "Annually":
        return 1.0

    match = _RANGE_LIFECYCLE.match(lifecycle)
    if match and int(match.group(1)) > 0:
        first = int(match.group(1))
        return 12 / first if match.group(2) == "months" else 1 / first

    subject = f" for service '{service_name}'" if service_name else ""
    logger.warning(f"Unrecognized lifecycle '{lifecycle}'{subject} - counting zero jobs per year")
    return 0.0


def _pooled_units(cities: Iterable[CityEstimate]) -> tuple[int, int, int]:
    single = multi = commercial = 0
    for city in cities:
        single += city.single_family_units
        multi += city.multi_family_units
        commercial += city.commercial_units
    return single, multi, commercial


def estimate_service(
    service: ServiceDefinition,
    units: tuple[int, int, int],
    adoption_fraction: float,
    jobs_per_year: Optional[float] = None,
) -> ServiceEstimate:
    """
    Estimate jobs and revenue for one service over pooled unit counts.

    Args:
        service: Service definition with cost ranges
        units: (single-family, multi-family, commercial) unit totals
        adoption_fraction: Climate zone adoption fraction in [0, 1]
        jobs_per_year: Pre-parsed frequency; parsed from the lifecycle if None
    """
    if jobs_per_year is None:
        jobs_per_year = parse_lifecycle(service.lifecycle, service.name)

    single, multi, commercial = (math.floor(total * adoption_fraction) for total in units)

    estimated_jobs = math.floor((single + multi + commercial) * jobs_per_year)
    estimated_revenue = math.floor(
        (
            single * service.single_family_cost.average
            + multi * service.multi_family_cost.average
            + commercial * service.commercial_cost.average
        )
        * jobs_per_year
    )

    return ServiceEstimate(
        **service.model_dump(by_alias=False),
        estimated_jobs=estimated_jobs,
        estimated_revenue=estimated_revenue,
    )


def estimate_services(
    cities: Iterable[CityEstimate],
    services: Sequence[ServiceDefinition],
    adoption_fraction: float,
    frequencies: Optional[Sequence[float]] = None,
) -> tuple[ServiceEstimate, ...]:
    """Estimate every service over the pooled units of the given cities."""
    units = _pooled_units(cities)
    if frequencies is None:
        frequencies = [parse_lifecycle(service.lifecycle, service.name) for service in services]
    return tuple(
        estimate_service(service, units, adoption_fraction, jobs_per_year)
        for service, jobs_per_year in zip(services, frequencies)
    )


def sanity_check(population: Optional[int], adoption_fraction: float) -> SanityCheck:
    """Population-based cross-check, independent of the per-service total."""
    population = population or 0
    return SanityCheck(
        method="Population-based estimation",
        description=(
            f"Based on {population:,} population with "
            f"{adoption_fraction * 100:g}% adoption rate"
        ),
        estimated_revenue=math.floor(
            population * adoption_fraction * SANITY_CUSTOMER_SHARE * SANITY_ANNUAL_SPEND
        ),
        confidence="High",
    )


def _total(estimates: Iterable[ServiceEstimate]) -> int:
    return sum(estimate.estimated_revenue for estimate in estimates)


def _city_revenue(
    city: CityEstimate,
    ring: Ring,
    services: Sequence[ServiceDefinition],
    adoption_fraction: float,
    frequencies: Sequence[float],
) -> CityRevenue:
    estimates = estimate_services([city], services, adoption_fraction, frequencies)
    return CityRevenue(
        city=city.name,
        state=city.state,
        ring=ring,
        total_revenue=_total(estimates),
        services=estimates,
        housing_units=HousingUnits(
            single_family=city.single_family_units,
            multi_family=city.multi_family_units,
            commercial=city.commercial_units,
        ),
    )


def estimate_revenue(
    service_area: ServiceAreaResult,
    services: Sequence[ServiceDefinition],
    climate_zone: ClimateZoneResult,
    industry: str = "hvac",
) -> RevenueSummary:
    """
    Estimate revenue potential for a service area.

    Units from both rings are pooled with equal weight. Ring and per-city
    figures are computed independently with the same formula and are not
    reconciled against the pooled total.
    """
    adoption = climate_zone.adoption_fraction
    frequencies = [parse_lifecycle(service.lifecycle, service.name) for service in services]

    pooled = estimate_services(service_area.all_cities, services, adoption, frequencies)
    primary = estimate_services(service_area.cities_in_primary_radius, services, adoption, frequencies)
    secondary = estimate_services(service_area.cities_in_secondary_radius, services, adoption, frequencies)

    by_city = [
        _city_revenue(city, Ring.primary, services, adoption, frequencies)
        for city in service_area.cities_in_primary_radius
    ] + [
        _city_revenue(city, Ring.secondary, services, adoption, frequencies)
        for city in service_area.cities_in_secondary_radius
    ]

    if service_area.population is None:
        logger.warning(
            f"No population for {service_area.city}, {service_area.state} - sanity check uses 0"
        )

    total_revenue = _total(pooled)
    logger.info(
        f"Estimated {industry} revenue for {service_area.city}, {service_area.state}: "
        f"${total_revenue:,} ({climate_zone.zone_name} zone)"
    )

    return RevenueSummary(
        industry=industry,
        services=pooled,
        total_revenue=total_revenue,
        market_penetration=adoption * 100,
        climate_zone=climate_zone,
        primary_revenue=_total(primary),
        secondary_revenue=_total(secondary),
        sanity_check=sanity_check(service_area.population, adoption),
        revenue_by_city=tuple(by_city),
    )


class RevenueEstimator:
    """Revenue estimation over injected service catalogs and climate zones."""

    def __init__(
        self,
        catalogs: Mapping[str, Sequence[ServiceDefinition]] = SERVICE_CATALOGS,
        climate_resolver: Optional[ClimateZoneResolver] = None,
    ):
        self.catalogs = MappingProxyType({k: tuple(v) for k, v in catalogs.items()})
        self.climate_resolver = climate_resolver or ClimateZoneResolver()

    def industries(self) -> list[Industry]:
        return [
            Industry(industry=name, services=services)
            for name, services in self.catalogs.items()
        ]

    def estimate(self, service_area: ServiceAreaResult, industry: str = "hvac") -> RevenueSummary:
        """Estimate revenue for a catalogued industry in a service area."""
        services = self.catalogs.get(industry.lower())
        if services is None:
            raise ValidationError(
                f"Unsupported industry '{industry}'. Available: {', '.join(self.catalogs)}"
            )

        climate_zone = self.climate_resolver.resolve(service_area.state)
        return estimate_revenue(service_area, services, climate_zone, industry.lower())


def get_revenue_estimator() -> RevenueEstimator:
    return RevenueEstimator()
