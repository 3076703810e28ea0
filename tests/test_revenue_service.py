"""Tests for revenue estimation."""

import logging

import pytest

from app.models.schemas import ClimateZoneResult, CostRange, ServiceDefinition
from app.services.exceptions import ValidationError
from app.services.revenue_service import (
    HVAC_SERVICES,
    RevenueEstimator,
    estimate_revenue,
    estimate_service,
    parse_lifecycle,
    sanity_check,
)

from conftest import make_city, make_service_area

UNKNOWN = ClimateZoneResult(zone_name="Unknown", adoption_fraction=0.75)


def service(lifecycle, single=(25, 50), multi=(30, 75), commercial=(50, 150), name="Test"):
    return ServiceDefinition(
        name=name,
        lifecycle=lifecycle,
        single_family_cost=CostRange(min=single[0], max=single[1]),
        multi_family_cost=CostRange(min=multi[0], max=multi[1]),
        commercial_cost=CostRange(min=commercial[0], max=commercial[1]),
    )


class TestParseLifecycle:
    def test_months_uses_first_number(self):
        assert parse_lifecycle("1-3 months") == 12
        assert parse_lifecycle("6-12 months") == 2

    def test_annually(self):
        assert parse_lifecycle("Annually") == 1

    def test_years_uses_first_number(self):
        assert parse_lifecycle("3-5 years") == pytest.approx(1 / 3)
        assert parse_lifecycle("2-3 years") == 0.5

    def test_unrecognized_is_zero_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.services.revenue_service"):
            assert parse_lifecycle("Weekly") == 0
        assert "Weekly" in caplog.text

    def test_unrecognized_warning_names_the_service(self, caplog):
        with caplog.at_level(logging.WARNING, logger="app.services.revenue_service"):
            estimate_service(service("Weekly", name="Coil Polishing"), (10, 10, 10), 0.75)
        assert "Weekly" in caplog.text
        assert "Coil Polishing" in caplog.text

    def test_zero_interval_is_unrecognized(self):
        assert parse_lifecycle("0-2 months") == 0


class TestEstimateService:
    def test_filter_replacement(self):
        # 28000/12000/2000 units at 0.75 adoption -> 21000/9000/1500
        estimate = estimate_service(HVAC_SERVICES[0], (28000, 12000, 2000), 0.75)
        assert estimate.name == "Filter Replacement"
        assert estimate.estimated_jobs == 378000
        # (21000*37.5 + 9000*52.5 + 1500*100) * 12
        assert estimate.estimated_revenue == 16920000

    def test_annual_service(self):
        estimate = estimate_service(service("Annually", (45, 350), (100, 500), (200, 800)),
                                    (28000, 12000, 2000), 0.75)
        assert estimate.estimated_jobs == 31500
        assert estimate.estimated_revenue == 7597500

    def test_adoption_floors_each_unit_type(self):
        # floor(3*0.5)=1, floor(5*0.5)=2, floor(1*0.5)=0
        estimate = estimate_service(service("Annually", (10, 10), (20, 20), (100, 100)), (3, 5, 1), 0.5)
        assert estimate.estimated_jobs == 3
        assert estimate.estimated_revenue == 50

    def test_unrecognized_lifecycle_contributes_nothing(self):
        estimate = estimate_service(service("Every so often"), (1000, 1000, 1000), 0.9)
        assert estimate.estimated_jobs == 0
        assert estimate.estimated_revenue == 0

    def test_non_negative(self):
        for definition in HVAC_SERVICES:
            for units in [(0, 0, 0), (1, 1, 1), (12345, 678, 9)]:
                estimate = estimate_service(definition, units, 0.68)
                assert estimate.estimated_jobs >= 0
                assert estimate.estimated_revenue >= 0


class TestSanityCheck:
    def test_population_based_estimate(self):
        check = sanity_check(100000, 0.75)
        assert check.estimated_revenue == 5625000
        assert check.method == "Population-based estimation"
        assert check.confidence == "High"
        assert check.description == "Based on 100,000 population with 75% adoption rate"

    def test_unknown_population_counts_as_zero(self):
        assert sanity_check(None, 0.92).estimated_revenue == 0


class TestEstimateRevenue:
    def test_rings_are_pooled(self):
        primary = [make_city("A", sf=28000, mf=12000, commercial=2000)]
        secondary = [make_city("B", sf=28000, mf=12000, commercial=2000)]
        area = make_service_area(primary, secondary, population=100000)

        summary = estimate_revenue(area, [HVAC_SERVICES[0]], UNKNOWN)

        assert summary.services[0].estimated_jobs == 756000
        assert summary.total_revenue == 33840000
        assert summary.primary_revenue == 16920000
        assert summary.secondary_revenue == 16920000
        assert summary.market_penetration == 75
        assert summary.sanity_check.estimated_revenue == 5625000

    def test_total_is_sum_of_services(self):
        area = make_service_area([make_city("A", sf=5000, mf=2000, commercial=300)])
        summary = estimate_revenue(area, HVAC_SERVICES, UNKNOWN)
        assert len(summary.services) == len(HVAC_SERVICES)
        assert summary.total_revenue == sum(s.estimated_revenue for s in summary.services)

    def test_revenue_by_city(self):
        area = make_service_area(
            [make_city("A", sf=100, mf=40, commercial=10)],
            [make_city("B", sf=50, mf=20, commercial=4)],
        )
        summary = estimate_revenue(area, [service("Annually", (10, 10), (20, 20), (100, 100))], UNKNOWN)

        by_city = {c.city: c for c in summary.revenue_by_city}
        assert [c.city for c in summary.revenue_by_city] == ["A", "B"]
        assert by_city["A"].ring == "primary"
        assert by_city["B"].ring == "secondary"
        # 75*10 + 30*20 + 7*100
        assert by_city["A"].total_revenue == 2050
        assert by_city["A"].housing_units.single_family == 100

    def test_empty_service_area(self):
        summary = estimate_revenue(make_service_area(), HVAC_SERVICES, UNKNOWN)
        assert summary.total_revenue == 0
        assert summary.revenue_by_city == ()


class TestRevenueEstimator:
    def test_resolves_climate_from_state(self):
        area = make_service_area([make_city("Houston", state="TX", sf=100)], state="TX")
        summary = RevenueEstimator().estimate(area, "hvac")
        assert summary.climate_zone.zone_name == "Hot-Humid"
        assert summary.market_penetration == pytest.approx(92)

    def test_unknown_industry(self):
        with pytest.raises(ValidationError, match="Unsupported industry"):
            RevenueEstimator().estimate(make_service_area(), "plumbing")

    def test_injected_catalog(self):
        estimator = RevenueEstimator(catalogs={"cleaning": [service("Annually", name="Deep Clean")]})
        assert [i.industry for i in estimator.industries()] == ["cleaning"]
        summary = estimator.estimate(make_service_area([make_city("A", sf=4)]), "cleaning")
        assert [s.name for s in summary.services] == ["Deep Clean"]
        # floor(4*0.75)=3 units at $37.50
        assert summary.total_revenue == 112
