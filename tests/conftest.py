"""Shared fixtures for estimator tests."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.schemas import CityEstimate, Coordinate, ServiceAreaResult
from app.services.city_dataset import get_city_dataset, parse_city_rows
from app.services.geocoding_service import get_geocoder

SPRINGFIELD = Coordinate(lat=39.78, lng=-89.65)


class FakeGeocoder:
    """Records calls and returns a fixed coordinate or raises."""

    def __init__(self, coordinate: Coordinate = SPRINGFIELD, error: Exception | None = None):
        self.coordinate = coordinate
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def geocode(self, city: str, state: str) -> Coordinate:
        self.calls.append((city, state))
        if self.error:
            raise self.error
        return self.coordinate


@pytest.fixture
def springfield_dataset():
    return parse_city_rows([
        {"city": "Springfield", "state_id": "IL", "lat": 39.78, "lng": -89.65, "population": 100000},
    ])


@pytest.fixture
def fake_geocoder():
    return FakeGeocoder()


@pytest.fixture
def client(springfield_dataset, fake_geocoder):
    app.dependency_overrides[get_city_dataset] = lambda: springfield_dataset
    app.dependency_overrides[get_geocoder] = lambda: fake_geocoder
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_city(name: str, state: str = "IL", sf: int = 0, mf: int = 0, commercial: int = 0,
              population: int = 0) -> CityEstimate:
    return CityEstimate(
        name=name,
        state=state,
        population=population,
        single_family_units=sf,
        multi_family_units=mf,
        commercial_units=commercial,
        total_housing_units=sf + mf + commercial,
        coordinates=Coordinate(lat=0.0, lng=0.0),
    )


def make_service_area(primary=(), secondary=(), state: str = "IL",
                      population: int | None = None) -> ServiceAreaResult:
    return ServiceAreaResult(
        city="Springfield",
        state=state,
        population=population,
        primary_radius=10,
        secondary_radius=25,
        cities_in_primary_radius=tuple(primary),
        cities_in_secondary_radius=tuple(secondary),
    )
