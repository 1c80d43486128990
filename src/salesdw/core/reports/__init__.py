from .sales_reports import (
    yearly_sales,
    customer_demographics,
    top_subcategories,
    same_month_last_year,
    city_sales,
    build_reports,
)

__all__ = [
    'yearly_sales',
    'customer_demographics',
    'top_subcategories',
    'same_month_last_year',
    'city_sales',
    'build_reports',
]
