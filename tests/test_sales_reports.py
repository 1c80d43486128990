"""Tests for the pandas sales reports."""

import pandas as pd
import pytest

from salesdw.core.reports import (
    build_reports,
    city_sales,
    customer_demographics,
    same_month_last_year,
    top_subcategories,
    yearly_sales,
)


def test_yearly_sales_latest_year_first(fact_internet_sales, dim_date):
    result = yearly_sales(fact_internet_sales, dim_date)

    assert list(result["CalendarYear"]) == [2014, 2013, 2012]
    assert list(result["TotalAnnualSales"]) == pytest.approx([180.0, 29000.0, 50050.0])


def test_yearly_sales_requires_columns(dim_date):
    with pytest.raises(ValueError):
        yearly_sales(pd.DataFrame({"SalesAmount": [1.0]}), dim_date)


def test_customer_demographics_counts_all_customers(dim_customer):
    result = customer_demographics(dim_customer)

    assert result["TotalCustomers"].sum() == len(dim_customer)
    assert list(result["TotalCustomers"]) == [2, 2, 1, 1]
    counts = result.set_index(["Gender", "MaritalStatus"])["TotalCustomers"].to_dict()
    assert counts == {("F", "M"): 2, ("M", "M"): 2, ("F", "S"): 1, ("M", "S"): 1}


def test_customer_demographics_keeps_missing_attributes():
    customers = pd.DataFrame({
        "CustomerKey": [1, 2, 3],
        "Gender": ["M", None, "M"],
        "MaritalStatus": ["S", "S", "S"],
    })

    result = customer_demographics(customers)

    assert result["TotalCustomers"].sum() == 3
    assert len(result) == 2


def test_top_subcategories_filters_and_ranks(
    fact_internet_sales, dim_product, dim_product_subcategory, dim_product_category
):
    result = top_subcategories(
        fact_internet_sales, dim_product, dim_product_subcategory, dim_product_category
    )

    assert list(result.columns) == ["Category", "Subcategory", "TotalSales", "CategoryRank"]
    assert list(result["Category"]) == ["Bikes", "Bikes", "Bikes"]
    assert list(result["Subcategory"]) == ["Road Bikes", "Mountain Bikes", "Touring Bikes"]
    assert list(result["TotalSales"]) == pytest.approx([35000.0, 20000.0, 15000.0])
    assert list(result["CategoryRank"]) == [1, 2, 3]


def test_top_subcategories_without_minimum(
    fact_internet_sales, dim_product, dim_product_subcategory, dim_product_category
):
    result = top_subcategories(
        fact_internet_sales,
        dim_product,
        dim_product_subcategory,
        dim_product_category,
        n=1,
        min_total=0,
    )

    assert result[["Category", "Subcategory"]].values.tolist() == [
        ["Accessories", "Helmets"],
        ["Bikes", "Road Bikes"],
        ["Clothing", "Jerseys"],
    ]


def test_same_month_last_year(fact_internet_sales, dim_date):
    result = same_month_last_year(fact_internet_sales, dim_date)

    assert result[["CalendarYear", "MonthNumberOfYear"]].values.tolist() == [
        [2014, 1], [2013, 2], [2013, 1], [2012, 2], [2012, 1],
    ]
    assert list(result["TotalSales"]) == pytest.approx([180.0, 9000.0, 20000.0, 20000.0, 30050.0])
    assert list(result["SalesSameMonthLastYear"]) == pytest.approx([20000.0, 20000.0, 30050.0, 0.0, 0.0])
    assert list(result["YoYChange"]) == pytest.approx([-19820.0, -11000.0, -10050.0, 20000.0, 30050.0])


def test_same_month_last_year_uses_previous_available_year():
    dates = pd.DataFrame({
        "DateKey": [1, 2],
        "CalendarYear": [2012, 2014],
        "MonthNumberOfYear": [3, 3],
        "EnglishMonthName": ["March", "March"],
    })
    fact = pd.DataFrame({"OrderDateKey": [1, 2], "SalesAmount": [10.0, 40.0]})

    result = same_month_last_year(fact, dates)

    assert list(result["CalendarYear"]) == [2014, 2012]
    assert list(result["SalesSameMonthLastYear"]) == [10.0, 0.0]


def test_city_sales_applies_exclusive_minimum(fact_internet_sales, dim_customer, dim_geography):
    result = city_sales(fact_internet_sales, dim_customer, dim_geography)

    assert result.to_dict("records") == [
        {"City": "Seattle", "TotalSales": 55050.0, "OrdersCount": 3},
    ]


def test_city_sales_orders_by_total(fact_internet_sales, dim_customer, dim_geography):
    result = city_sales(fact_internet_sales, dim_customer, dim_geography, min_sales=0)

    assert list(result["City"]) == ["Seattle", "Paris", "Berlin"]
    assert list(result["OrdersCount"]) == [3, 3, 1]

    at_boundary = city_sales(fact_internet_sales, dim_customer, dim_geography, min_sales=24100)
    assert list(at_boundary["City"]) == ["Seattle"]


def test_build_reports_uses_config_parameters(warehouse_tables):
    config = {
        "segmentation": {
            "reports": {"top_n": 1, "min_subcategory_sales": 0, "min_city_sales": 0},
        }
    }

    reports = build_reports(warehouse_tables, config)

    assert set(reports) == {
        "yearly_sales",
        "customer_demographics",
        "top_subcategories",
        "same_month_last_year",
        "city_sales",
        "age_segments",
    }
    assert len(reports["top_subcategories"]) == 3
    assert len(reports["city_sales"]) == 3
    assert list(reports["age_segments"]["Segment"])[0] == "Youth"


def test_build_reports_reads_age_brackets_from_config(warehouse_tables):
    config = {
        "age_brackets": {
            "as_of": "2014-01-01",
            "fallback_label": "Unknown",
            "tiers": [{"label": "50+", "threshold": 50}, {"label": "Under 50", "threshold": 0}],
        }
    }

    reports = build_reports(warehouse_tables, config)
    ages = reports["age_segments"].set_index("Segment")["CustomersCount"].to_dict()

    assert ages == {"Under 50": 3, "50+": 2, "Unknown": 1}
