from pydantic import BaseModel, Field, field_validator
from typing import Optional
from enum import Enum


class CamelModel(BaseModel):
    """Immutable model that reads either naming and always writes camelCase."""

    model_config = {
        "populate_by_name": True,
        "serialize_by_alias": True,  # Always serialize using camelCase aliases
        "frozen": True,
    }


class Ring(str, Enum):
    primary = "primary"
    secondary = "secondary"


# Geography
class Coordinate(CamelModel):
    latitude: float = Field(alias="lat")
    longitude: float = Field(alias="lng")


class CityRecord(CamelModel):
    """A municipality from the city dataset.

    Coordinates and population are None when the source row did not carry a
    usable numeric value; such records never enter a service area.
    """
    name: Optional[str] = None
    state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    population: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.state) and None not in (
            self.latitude, self.longitude, self.population
        )


class HousingEstimate(CamelModel):
    single_family_units: int = Field(alias="singleFamilyUnits")
    multi_family_units: int = Field(alias="multiFamilyUnits")
    commercial_units: int = Field(alias="commercialUnits")
    total_housing_units: int = Field(alias="totalHousingUnits")


class CityEstimate(CamelModel):
    name: str
    state: str
    population: int
    single_family_units: int = Field(alias="singleFamilyUnits")
    multi_family_units: int = Field(alias="multiFamilyUnits")
    commercial_units: int = Field(alias="commercialUnits")
    total_housing_units: int = Field(alias="totalHousingUnits")
    coordinates: Coordinate
    distance_miles: Optional[float] = Field(None, alias="distanceMiles")


class ServiceAreaResult(CamelModel):
    city: str
    state: str
    population: Optional[int] = None
    single_family_units: Optional[int] = Field(None, alias="singleFamilyUnits")
    multi_family_units: Optional[int] = Field(None, alias="multiFamilyUnits")
    commercial_units: Optional[int] = Field(None, alias="commercialUnits")
    total_housing_units: Optional[int] = Field(None, alias="totalHousingUnits")
    primary_radius: float = Field(alias="primaryRadius")
    secondary_radius: float = Field(alias="secondaryRadius")
    cities_in_primary_radius: tuple[CityEstimate, ...] = Field((), alias="citiesInPrimaryRadius")
    cities_in_secondary_radius: tuple[CityEstimate, ...] = Field((), alias="citiesInSecondaryRadius")
    coordinates: Optional[Coordinate] = None  # Geocoded target

    @property
    def all_cities(self) -> tuple[CityEstimate, ...]:
        return self.cities_in_primary_radius + self.cities_in_secondary_radius


# Climate
class ClimateZone(CamelModel):
    name: str
    states: frozenset[str]
    adoption_fraction: float = Field(alias="adoptionFraction", ge=0.0, le=1.0)


class ClimateZoneResult(CamelModel):
    zone_name: str = Field(alias="zoneName")
    adoption_fraction: float = Field(alias="adoptionFraction")


# Services and revenue
class CostRange(CamelModel):
    min: float = Field(ge=0)
    max: float = Field(ge=0)

    @property
    def average(self) -> float:
        return (self.min + self.max) / 2


class ServiceDefinition(CamelModel):
    name: str
    lifecycle: str
    single_family_cost: CostRange = Field(alias="singleFamilyCost")
    multi_family_cost: CostRange = Field(alias="multiFamilyCost")
    commercial_cost: CostRange = Field(alias="commercialCost")


class ServiceEstimate(ServiceDefinition):
    estimated_jobs: int = Field(alias="estimatedJobs")
    estimated_revenue: int = Field(alias="estimatedRevenue")


class SanityCheck(CamelModel):
    method: str
    description: str
    estimated_revenue: int = Field(alias="estimatedRevenue")
    confidence: str


class HousingUnits(CamelModel):
    single_family: int = Field(alias="singleFamily")
    multi_family: int = Field(alias="multiFamily")
    commercial: int


class CityRevenue(CamelModel):
    city: str
    state: str
    ring: Ring
    total_revenue: int = Field(alias="totalRevenue")
    services: tuple[ServiceEstimate, ...]
    housing_units: HousingUnits = Field(alias="housingUnits")


class RevenueSummary(CamelModel):
    industry: str
    services: tuple[ServiceEstimate, ...]
    total_revenue: int = Field(alias="totalRevenue")
    market_penetration: float = Field(alias="marketPenetration")
    climate_zone: ClimateZoneResult = Field(alias="climateZone")
    primary_revenue: int = Field(alias="primaryRevenue")
    secondary_revenue: int = Field(alias="secondaryRevenue")
    sanity_check: SanityCheck = Field(alias="sanityCheck")
    revenue_by_city: tuple[CityRevenue, ...] = Field((), alias="revenueByCity")


class Industry(CamelModel):
    industry: str
    services: tuple[ServiceDefinition, ...]


# Report
class ReportSummary(CamelModel):
    total_revenue: int = Field(alias="totalRevenue")
    total_cities: int = Field(alias="totalCities")
    primary_market_revenue: int = Field(alias="primaryMarketRevenue")
    secondary_market_revenue: int = Field(alias="secondaryMarketRevenue")


class MapData(CamelModel):
    center: Coordinate
    primary_radius: float = Field(alias="primaryRadius")
    secondary_radius: float = Field(alias="secondaryRadius")
    cities: tuple[CityEstimate, ...]


class ReportData(CamelModel):
    title: str
    generated_date: str = Field(alias="generatedDate")
    summary: ReportSummary
    recommendations: tuple[str, ...]
    map: MapData


# Requests
class CensusDataRequest(BaseModel):
    city: str = Field(..., min_length=1, description="Target city name")
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter state code")
    primary_radius: float = Field(..., alias="primaryRadius", gt=0, allow_inf_nan=False, description="Primary service radius in miles")
    secondary_radius: float = Field(..., alias="secondaryRadius", gt=0, allow_inf_nan=False, description="Secondary service radius in miles")

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
    }

    @field_validator("state")
    @classmethod
    def validate_state(cls, v: str) -> str:
        if not v.isalpha():
            raise ValueError("state must be a two-letter code")
        return v.upper()


class RevenueRequest(BaseModel):
    service_area: ServiceAreaResult = Field(..., alias="serviceArea")
    industry: str = Field(default="hvac", min_length=1)

    model_config = {"populate_by_name": True}


class ReportRequest(BaseModel):
    service_area: ServiceAreaResult = Field(..., alias="serviceArea")
    revenue: RevenueSummary

    model_config = {"populate_by_name": True}


# Responses
class CensusDataResponse(BaseModel):
    success: bool = True
    data: ServiceAreaResult


class RevenueResponse(BaseModel):
    success: bool = True
    data: RevenueSummary


class ClimateZoneResponse(BaseModel):
    success: bool = True
    data: ClimateZoneResult


class IndustriesResponse(BaseModel):
    success: bool = True
    data: list[Industry]


class ReportResponse(BaseModel):
    success: bool = True
    data: ReportData


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
