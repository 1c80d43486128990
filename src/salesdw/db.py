# src/salesdw/db.py
# type: ignore
import os
import pandas as pd  # type: ignore
import sqlalchemy as sa  # type: ignore
from sqlalchemy.exc import SQLAlchemyError  # type: ignore
from sqlalchemy.engine import URL
from dotenv import load_dotenv

load_dotenv()  # loads DB_* variables from .env


class Database:
    """Read-only connection to the sales data warehouse."""

    def __init__(self, url=None):
        self._url = url
        self._engine = None
        self._connection = None
        self._connect()

    @staticmethod
    def url_from_env() -> URL:
        """
        Build the PostgreSQL URL from environment variables.
        """
        return URL.create(
            drivername="postgresql",
            username=os.getenv("DB_USER"),
            password=os.getenv("DB_PASSWORD"),
            host=os.getenv("DB_HOST"),
            database=os.getenv("DB_NAME"),
            query={"sslmode": os.getenv("DB_SSLMODE", "require")}
        )

    def _connect(self):
        """
        Open the engine and a connection.
        On failure the instance stays unconnected and queries raise ConnectionError.
        """
        try:
            db_url = self._url or self.url_from_env()
            self._engine = sa.create_engine(db_url, pool_pre_ping=True)
            self._connection = self._engine.connect()
            print("✅ Connected to the sales warehouse.")
        except SQLAlchemyError as e:
            print(f"❌ Connection error: {e}")
            self._engine = None
            self._connection = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def engine(self):
        return self._engine

    def execute_query(self, query: str, params: dict = None) -> pd.DataFrame:
        """
        Run a SQL query and return the result as a DataFrame.
        """
        if not self._connection:
            raise ConnectionError("⚠️ No active database connection.")
        try:
            df = pd.read_sql(sa.text(query), self._connection, params=params)
        except (SQLAlchemyError, pd.errors.DatabaseError) as e:
            print(f"❌ Query error: {e}")
            raise
        print(f"✅ Query succeeded. {len(df)} rows fetched.")
        return df

    def execute_sql_file(self, sql_file_path: str) -> pd.DataFrame:
        """
        Run the query stored in a .sql file.
        """
        if not os.path.exists(sql_file_path):
            raise FileNotFoundError(f"⚠️ SQL file not found: {sql_file_path}")
        with open(sql_file_path, "r") as file:
            sql_query = file.read()
        print(f"📄 Running SQL file: {sql_file_path}")
        return self.execute_query(sql_query)

    def close(self):
        """
        Close the connection and dispose of the engine.
        """
        if self._connection:
            self._connection.close()
            self._connection = None
            print("🔒 Connection closed.")
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
