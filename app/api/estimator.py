"""
Estimator API Router

Service-area, revenue and report endpoints for the revenue estimator wizard.
Failures are rendered as ``{"success": false, "message": ...}`` by the
handlers in app.middleware.error_handlers.
"""

from fastapi import APIRouter, Depends

from app.models.schemas import (
    CensusDataRequest,
    CensusDataResponse,
    ClimateZoneResponse,
    ErrorResponse,
    IndustriesResponse,
    ReportRequest,
    ReportResponse,
    RevenueRequest,
    RevenueResponse,
)
from app.services.city_dataset import CityDataset, get_city_dataset
from app.services.climate_service import ClimateZoneResolver, get_climate_resolver
from app.services.geocoding_service import GoogleGeocoder, get_geocoder
from app.services.report_service import build_report
from app.services.revenue_service import RevenueEstimator, get_revenue_estimator
from app.services.service_area_service import build_service_area

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Configuration or dataset failure"},
}


# =============================================================================
# Step 1: Service area
# =============================================================================

@router.post(
    "/census-data",
    response_model=CensusDataResponse,
    responses={**ERROR_RESPONSES, 502: {"model": ErrorResponse, "description": "Geocoding failed"}},
)
async def census_data(
    request: CensusDataRequest,
    dataset: CityDataset = Depends(get_city_dataset),
    geocoder: GoogleGeocoder = Depends(get_geocoder),
):
    """
    Geocode the target city and collect the cities in its service rings.

    Returns housing-unit estimates for the target city (null when it is not
    in the dataset) and for every city in the primary and secondary rings.
    """
    target = await geocoder.geocode(request.city, request.state)

    service_area = build_service_area(
        dataset,
        city=request.city,
        state=request.state,
        target=target,
        primary_radius_miles=request.primary_radius,
        secondary_radius_miles=request.secondary_radius,
    )
    return CensusDataResponse(data=service_area)


# =============================================================================
# Step 2: Revenue
# =============================================================================

@router.get("/industries", response_model=IndustriesResponse)
async def list_industries(
    estimator: RevenueEstimator = Depends(get_revenue_estimator),
):
    """List the service catalogs available for revenue estimation."""
    return IndustriesResponse(data=estimator.industries())


@router.get("/climate-zones/{state}", response_model=ClimateZoneResponse)
async def climate_zone(
    state: str,
    resolver: ClimateZoneResolver = Depends(get_climate_resolver),
):
    """Climate zone and adoption fraction for a state code."""
    return ClimateZoneResponse(data=resolver.resolve(state.strip().upper()))


@router.post("/revenue", response_model=RevenueResponse, responses=ERROR_RESPONSES)
async def revenue(
    request: RevenueRequest,
    estimator: RevenueEstimator = Depends(get_revenue_estimator),
):
    """Estimate annual revenue for an industry across a service area."""
    return RevenueResponse(data=estimator.estimate(request.service_area, request.industry))


# =============================================================================
# Step 4: Report
# =============================================================================

@router.post("/report", response_model=ReportResponse, responses=ERROR_RESPONSES)
async def report(request: ReportRequest):
    """Summarize a service area and its revenue estimate for the report step."""
    return ReportResponse(data=build_report(request.service_area, request.revenue))
