# src/salesdw/core/processing/load_data.py

# type: ignore
from typing import Dict

import pandas as pd  # type: ignore

from salesdw.db import Database
from salesdw.utils import require_columns, restore_column_case, to_datetime
from .queries import (
    CUSTOMER_LIFETIME_SALES,
    CUSTOMER_CATEGORY_SALES,
    TABLE_COLUMNS,
    TABLE_QUERIES,
)


class WarehouseLoader:
    def __init__(self, db: Database = None):
        """
        Initializes the WarehouseLoader with an optional Database instance.
        """
        self.db = db or Database()

    def load_table(self, table_name: str) -> pd.DataFrame:
        """
        Loads one of the known warehouse tables.

        Args:
            table_name (str): Table name as in the warehouse (e.g. 'DimDate').

        Returns:
            pd.DataFrame: Loaded data.
        """
        if table_name not in TABLE_QUERIES:
            raise ValueError(
                f"❌ Unknown table '{table_name}'. Allowed: {list(TABLE_QUERIES)}"
            )
        print(f"🌐 Loading table '{table_name}' from the warehouse...")
        df = self.db.execute_query(TABLE_QUERIES[table_name])
        df = restore_column_case(df, TABLE_COLUMNS[table_name])
        require_columns(df, TABLE_COLUMNS[table_name], table_name)
        if table_name == "DimCustomer":
            df = to_datetime(df, ["BirthDate"])
        if df.empty:
            print(f"⚠️ No rows found for table '{table_name}'")
        return df

    def load_tables(self, *table_names: str) -> Dict[str, pd.DataFrame]:
        """
        Loads several tables, keyed by name. Without arguments all known tables are loaded.
        """
        names = table_names or tuple(TABLE_QUERIES)
        return {name: self.load_table(name) for name in names}

    def customer_lifetime_sales(self) -> pd.DataFrame:
        """
        Entities for value segmentation: one row per customer with columns
        entity_id and measure (total lifetime sales).
        """
        print("📄 Aggregating customer lifetime sales...")
        df = self.db.execute_query(CUSTOMER_LIFETIME_SALES)
        return restore_column_case(df, ["entity_id", "measure"])

    def customer_category_sales(self) -> pd.DataFrame:
        """
        Detail records for value segmentation: entity_id, group_key
        (product category) and amount.
        """
        print("📄 Aggregating customer sales per product category...")
        df = self.db.execute_query(CUSTOMER_CATEGORY_SALES)
        return restore_column_case(df, ["entity_id", "group_key", "amount"])
