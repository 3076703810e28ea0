"""
Report Summary Service

Assembles the market report summary and map data from a service area and its
revenue estimate. Document export is handled outside this backend.
"""
from datetime import date, datetime, timezone
from typing import Optional

from app.models.schemas import (
    Coordinate,
    MapData,
    ReportData,
    ReportSummary,
    RevenueSummary,
    ServiceAreaResult,
)

# Used when neither a geocoded target nor any primary city is available
DEFAULT_MAP_CENTER = Coordinate(lat=37.7749, lng=-122.4194)

RECOMMENDATIONS: tuple[str, ...] = (
    "Focus marketing efforts on the primary service area for maximum ROI",
    "Consider expanding to secondary service area as business grows",
    "Develop service packages targeting different housing types",
    "Monitor market penetration and adjust pricing strategy accordingly",
    "Build relationships with property managers in multi-family units",
)


def build_map_data(service_area: ServiceAreaResult) -> MapData:
    """Map payload centred on the target, then the first primary city."""
    center = service_area.coordinates
    if center is None and service_area.cities_in_primary_radius:
        center = service_area.cities_in_primary_radius[0].coordinates

    return MapData(
        center=center or DEFAULT_MAP_CENTER,
        primary_radius=service_area.primary_radius,
        secondary_radius=service_area.secondary_radius,
        cities=service_area.all_cities,
    )


def build_report(
    service_area: ServiceAreaResult,
    revenue: RevenueSummary,
    generated_on: Optional[date] = None,
) -> ReportData:
    generated_on = generated_on or datetime.now(timezone.utc).date()

    return ReportData(
        title=f"Market Revenue Analysis - {service_area.city}, {service_area.state}",
        generated_date=generated_on.isoformat(),
        summary=ReportSummary(
            total_revenue=revenue.total_revenue,
            total_cities=len(service_area.all_cities),
            primary_market_revenue=revenue.primary_revenue,
            secondary_market_revenue=revenue.secondary_revenue,
        ),
        recommendations=RECOMMENDATIONS,
        map=build_map_data(service_area),
    )
