"""Pytest configuration and fixtures for salesdw tests."""

import pandas as pd
import pytest
import sqlalchemy as sa

from salesdw.core.segment import TierDefinition


# =============================================================================
# TIER FIXTURES
# =============================================================================

@pytest.fixture
def value_tiers() -> TierDefinition:
    """High / Medium / Low lifetime-value tiers."""
    return TierDefinition([("High Value", 0.80), ("Medium Value", 0.50), ("Low Value", 0.0)])


@pytest.fixture
def short_tiers() -> TierDefinition:
    return TierDefinition([("High", 0.80), ("Medium", 0.50), ("Low", 0.0)])


# =============================================================================
# WAREHOUSE FIXTURES
#
# Lifetime sales per customer:
#   1 -> 30050, 2 -> 25000, 3 -> 15100, 4 -> 9000, 5 -> 80, 6 -> none
# =============================================================================

@pytest.fixture
def dim_date() -> pd.DataFrame:
    return pd.DataFrame({
        "DateKey": [20120105, 20120210, 20130107, 20130215, 20140120],
        "CalendarYear": [2012, 2012, 2013, 2013, 2014],
        "MonthNumberOfYear": [1, 2, 1, 2, 1],
        "EnglishMonthName": ["January", "February", "January", "February", "January"],
    })


@pytest.fixture
def dim_product_category() -> pd.DataFrame:
    return pd.DataFrame({
        "ProductCategoryKey": [1, 2, 3],
        "EnglishProductCategoryName": ["Bikes", "Accessories", "Clothing"],
    })


@pytest.fixture
def dim_product_subcategory() -> pd.DataFrame:
    return pd.DataFrame({
        "ProductSubcategoryKey": [10, 11, 12, 13, 20, 21, 30],
        "ProductCategoryKey": [1, 1, 1, 1, 2, 2, 3],
        "EnglishProductSubcategoryName": [
            "Road Bikes", "Mountain Bikes", "Touring Bikes", "Cargo Bikes",
            "Helmets", "Bottles and Cages", "Jerseys",
        ],
    })


@pytest.fixture
def dim_product() -> pd.DataFrame:
    # Product 400 has no subcategory
    return pd.DataFrame({
        "ProductKey": [100, 101, 102, 103, 200, 201, 300, 400],
        "ProductSubcategoryKey": pd.array([10, 11, 12, 13, 20, 21, 30, None], dtype="Int64"),
    })


@pytest.fixture
def dim_geography() -> pd.DataFrame:
    return pd.DataFrame({
        "GeographyKey": [1, 2, 3],
        "City": ["Seattle", "Paris", "Berlin"],
    })


@pytest.fixture
def dim_customer() -> pd.DataFrame:
    return pd.DataFrame({
        "CustomerKey": [1, 2, 3, 4, 5, 6],
        "GeographyKey": [1, 1, 2, 2, 3, 3],
        "BirthDate": pd.to_datetime([
            "1950-06-01", "1979-03-10", "1989-12-31", "1990-01-01", None, "1959-05-05",
        ]),
        "Gender": ["M", "F", "F", "M", "F", "M"],
        "MaritalStatus": ["M", "S", "M", "S", "M", "M"],
    })


@pytest.fixture
def fact_internet_sales() -> pd.DataFrame:
    return pd.DataFrame(
        [
            ("SO1", 20120105, 1, 100, 30000.0),
            ("SO1", 20120105, 1, 200, 50.0),
            ("SO2", 20120210, 2, 101, 20000.0),
            ("SO3", 20130107, 3, 102, 15000.0),
            ("SO4", 20130215, 4, 103, 9000.0),
            ("SO5", 20140120, 5, 201, 20.0),
            ("SO5", 20140120, 5, 300, 60.0),
            ("SO6", 20130107, 2, 100, 5000.0),
            ("SO7", 20140120, 3, 400, 100.0),
        ],
        columns=["SalesOrderNumber", "OrderDateKey", "CustomerKey", "ProductKey", "SalesAmount"],
    )


@pytest.fixture
def warehouse_tables(
    fact_internet_sales,
    dim_date,
    dim_customer,
    dim_geography,
    dim_product,
    dim_product_subcategory,
    dim_product_category,
):
    return {
        "FactInternetSales": fact_internet_sales,
        "DimDate": dim_date,
        "DimCustomer": dim_customer,
        "DimGeography": dim_geography,
        "DimProduct": dim_product,
        "DimProductSubcategory": dim_product_subcategory,
        "DimProductCategory": dim_product_category,
    }


@pytest.fixture
def warehouse_url(tmp_path, warehouse_tables) -> str:
    """SQLite file holding the warehouse tables."""
    url = f"sqlite:///{tmp_path / 'warehouse.db'}"
    engine = sa.create_engine(url)
    try:
        for name, frame in warehouse_tables.items():
            frame.to_sql(name, engine, index=False)
    finally:
        engine.dispose()
    return url


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path."""
    def _write(text: str) -> str:
        path = tmp_path / "segmentation.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
