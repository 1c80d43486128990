# core/reports/sales_reports.py
"""
Sales reports over the internet-sales star schema.

Every function takes raw warehouse frames (column names as in the
warehouse) and returns one result table. Joins are inner joins unless a
report says otherwise.
"""

from typing import Any, Dict

import pandas as pd  # type: ignore

from salesdw.utils import load_config, require_columns
from salesdw.core.segment.age_segment import AgeSegmenter
from salesdw.core.segment.ranking import top_n_per_group


DEFAULT_REPORT_PARAMS = {
    "top_n": 3,
    "min_subcategory_sales": 10000,
    "min_city_sales": 50000,
}


def yearly_sales(fact: pd.DataFrame, dates: pd.DataFrame) -> pd.DataFrame:
    """Total sales per calendar year, latest year first."""
    require_columns(fact, ["OrderDateKey", "SalesAmount"], "fact")
    require_columns(dates, ["DateKey", "CalendarYear"], "dates")

    merged = fact.merge(dates, left_on="OrderDateKey", right_on="DateKey", how="inner")
    result = (
        merged.groupby("CalendarYear", as_index=False)["SalesAmount"]
        .sum()
        .rename(columns={"SalesAmount": "TotalAnnualSales"})
    )
    return result.sort_values("CalendarYear", ascending=False).reset_index(drop=True)


def customer_demographics(customers: pd.DataFrame) -> pd.DataFrame:
    """
    Customer count per gender and marital status.

    Counts every customer in the dimension, with or without sales.
    Missing attributes form their own group.
    """
    require_columns(customers, ["CustomerKey", "Gender", "MaritalStatus"], "customers")

    result = (
        customers.groupby(["Gender", "MaritalStatus"], dropna=False)["CustomerKey"]
        .count()
        .reset_index(name="TotalCustomers")
    )
    return result.sort_values("TotalCustomers", ascending=False, kind="stable").reset_index(drop=True)


def top_subcategories(
    fact: pd.DataFrame,
    products: pd.DataFrame,
    subcategories: pd.DataFrame,
    categories: pd.DataFrame,
    n: int = 3,
    min_total: float = 10000,
) -> pd.DataFrame:
    """
    Top ``n`` product subcategories by sales within each category.

    Subcategories whose total does not exceed ``min_total`` are left out
    before ranking. Ranks are dense, so ties share a rank.
    """
    require_columns(fact, ["ProductKey", "SalesAmount"], "fact")
    require_columns(products, ["ProductKey", "ProductSubcategoryKey"], "products")
    require_columns(
        subcategories,
        ["ProductSubcategoryKey", "ProductCategoryKey", "EnglishProductSubcategoryName"],
        "subcategories",
    )
    require_columns(categories, ["ProductCategoryKey", "EnglishProductCategoryName"], "categories")

    hierarchy = (
        products[["ProductKey", "ProductSubcategoryKey"]]
        .merge(subcategories, on="ProductSubcategoryKey", how="inner")
        .merge(categories, on="ProductCategoryKey", how="inner")
        .rename(columns={
            "EnglishProductSubcategoryName": "Subcategory",
            "EnglishProductCategoryName": "Category",
        })
    )
    sales = (
        fact[["ProductKey", "SalesAmount"]]
        .merge(hierarchy[["ProductKey", "Category", "Subcategory"]], on="ProductKey", how="inner")
        .rename(columns={"SalesAmount": "TotalSales"})
    )

    return top_n_per_group(
        sales,
        group_col="Category",
        item_col="Subcategory",
        measure_col="TotalSales",
        n=n,
        min_total=min_total,
        rank_col="CategoryRank",
    )


def same_month_last_year(fact: pd.DataFrame, dates: pd.DataFrame) -> pd.DataFrame:
    """
    Monthly sales next to the same month's sales one year earlier.

    The comparison value comes from the closest earlier year that has
    sales in that month, or 0 when there is none. Rows are ordered latest
    year and month first.
    """
    require_columns(fact, ["OrderDateKey", "SalesAmount"], "fact")
    require_columns(
        dates, ["DateKey", "CalendarYear", "MonthNumberOfYear", "EnglishMonthName"], "dates"
    )

    keys = ["CalendarYear", "MonthNumberOfYear", "EnglishMonthName"]
    merged = fact.merge(dates, left_on="OrderDateKey", right_on="DateKey", how="inner")
    monthly = (
        merged.groupby(keys, as_index=False)["SalesAmount"]
        .sum()
        .rename(columns={"SalesAmount": "TotalSales"})
        .sort_values(["CalendarYear", "MonthNumberOfYear"], ascending=False)
    )

    monthly["SalesSameMonthLastYear"] = (
        monthly.groupby("EnglishMonthName", sort=False)["TotalSales"]
        .shift(-1)
        .fillna(0)
    )
    monthly["YoYChange"] = monthly["TotalSales"] - monthly["SalesSameMonthLastYear"]
    return monthly.reset_index(drop=True)


def city_sales(
    fact: pd.DataFrame,
    customers: pd.DataFrame,
    geography: pd.DataFrame,
    min_sales: float = 50000,
) -> pd.DataFrame:
    """
    Total sales and distinct order count per customer city.

    Only cities with total sales strictly above ``min_sales`` are kept,
    highest total first.
    """
    require_columns(fact, ["CustomerKey", "SalesOrderNumber", "SalesAmount"], "fact")
    require_columns(customers, ["CustomerKey", "GeographyKey"], "customers")
    require_columns(geography, ["GeographyKey", "City"], "geography")

    merged = (
        geography[["GeographyKey", "City"]]
        .merge(customers[["CustomerKey", "GeographyKey"]], on="GeographyKey", how="inner")
        .merge(fact, on="CustomerKey", how="inner")
    )
    result = merged.groupby("City", as_index=False).agg(
        TotalSales=("SalesAmount", "sum"),
        OrdersCount=("SalesOrderNumber", "nunique"),
    )
    result = result[result["TotalSales"] > min_sales]
    return result.sort_values("TotalSales", ascending=False, kind="stable").reset_index(drop=True)


def build_reports(tables: Dict[str, pd.DataFrame], config: Dict[str, Any] = None) -> Dict[str, pd.DataFrame]:
    """
    Run every sales report over a set of warehouse tables.

    Parameters
    ----------
    tables : Dict[str, pd.DataFrame]
        Frames keyed by warehouse table name, as returned by
        ``WarehouseLoader.load_tables()``
    config : Dict[str, Any], optional
        Parsed configuration; read from config/segmentation.yaml when omitted

    Returns
    -------
    Dict[str, pd.DataFrame]
        Report tables keyed by report name
    """
    if config is None:
        config = load_config()
    config = config.get("segmentation", config)
    params = {**DEFAULT_REPORT_PARAMS, **config.get("reports", {})}

    fact = tables["FactInternetSales"]
    dates = tables["DimDate"]
    customers = tables["DimCustomer"]

    print("[REPORTS] Building sales reports...")
    reports = {
        "yearly_sales": yearly_sales(fact, dates),
        "customer_demographics": customer_demographics(customers),
        "top_subcategories": top_subcategories(
            fact,
            tables["DimProduct"],
            tables["DimProductSubcategory"],
            tables["DimProductCategory"],
            n=params["top_n"],
            min_total=params["min_subcategory_sales"],
        ),
        "same_month_last_year": same_month_last_year(fact, dates),
        "city_sales": city_sales(
            fact, customers, tables["DimGeography"], min_sales=params["min_city_sales"]
        ),
    }

    if "age_brackets" in config:
        segmenter = AgeSegmenter.from_config(config["age_brackets"])
    else:
        segmenter = AgeSegmenter()
    reports["age_segments"] = segmenter.segment(customers, fact)

    print(f"✅ {len(reports)} reports built")
    return reports
