"""
SQL queries against the internet-sales star schema.

The aggregation queries produce the inputs of the segmentation
calculator; the table queries fetch the raw frames used by the pandas
sales reports. All queries are read-only and plain ANSI SQL.
"""

# ============================================
# SEGMENTATION INPUTS
# ============================================

# One row per customer: the entity and its measure
CUSTOMER_LIFETIME_SALES = """
SELECT
    fs.CustomerKey AS entity_id,
    SUM(fs.SalesAmount) AS measure
FROM FactInternetSales fs
GROUP BY fs.CustomerKey
ORDER BY fs.CustomerKey
"""

# One row per (customer, product category): the detail records
CUSTOMER_CATEGORY_SALES = """
SELECT
    fs.CustomerKey AS entity_id,
    dpc.EnglishProductCategoryName AS group_key,
    SUM(fs.SalesAmount) AS amount
FROM FactInternetSales fs
JOIN DimProduct dp ON fs.ProductKey = dp.ProductKey
JOIN DimProductSubcategory dpsc ON dp.ProductSubcategoryKey = dpsc.ProductSubcategoryKey
JOIN DimProductCategory dpc ON dpsc.ProductCategoryKey = dpc.ProductCategoryKey
GROUP BY fs.CustomerKey, dpc.EnglishProductCategoryName
ORDER BY fs.CustomerKey, dpc.EnglishProductCategoryName
"""

# ============================================
# RAW TABLES
# ============================================

# Columns fetched per table, in warehouse spelling. Backends that fold
# unquoted identifiers (PostgreSQL) return them lowercased; the loader
# maps them back to these names.
TABLE_COLUMNS = {
    "FactInternetSales": [
        "SalesOrderNumber",
        "OrderDateKey",
        "CustomerKey",
        "ProductKey",
        "SalesAmount",
    ],
    "DimDate": ["DateKey", "CalendarYear", "MonthNumberOfYear", "EnglishMonthName"],
    "DimCustomer": ["CustomerKey", "GeographyKey", "BirthDate", "Gender", "MaritalStatus"],
    "DimGeography": ["GeographyKey", "City"],
    "DimProduct": ["ProductKey", "ProductSubcategoryKey"],
    "DimProductSubcategory": [
        "ProductSubcategoryKey",
        "ProductCategoryKey",
        "EnglishProductSubcategoryName",
    ],
    "DimProductCategory": ["ProductCategoryKey", "EnglishProductCategoryName"],
}


def select_table(table_name: str) -> str:
    """Plain SELECT of the known columns of one table."""
    columns = ",\n    ".join(TABLE_COLUMNS[table_name])
    return f"SELECT\n    {columns}\nFROM {table_name}\n"


FACT_INTERNET_SALES = select_table("FactInternetSales")
DIM_DATE = select_table("DimDate")
DIM_CUSTOMER = select_table("DimCustomer")
DIM_GEOGRAPHY = select_table("DimGeography")
DIM_PRODUCT = select_table("DimProduct")
DIM_PRODUCT_SUBCATEGORY = select_table("DimProductSubcategory")
DIM_PRODUCT_CATEGORY = select_table("DimProductCategory")

TABLE_QUERIES = {
    "FactInternetSales": FACT_INTERNET_SALES,
    "DimDate": DIM_DATE,
    "DimCustomer": DIM_CUSTOMER,
    "DimGeography": DIM_GEOGRAPHY,
    "DimProduct": DIM_PRODUCT,
    "DimProductSubcategory": DIM_PRODUCT_SUBCATEGORY,
    "DimProductCategory": DIM_PRODUCT_CATEGORY,
}
