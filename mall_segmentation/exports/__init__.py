"""
Customer dataset export/import.
"""
from .csv_export import (
    CSV_COLUMNS,
    CSV_FILENAME,
    customers_to_csv,
    customers_to_dataframe,
    iter_customers_csv,
    read_customers_csv,
)

__all__ = [
    "CSV_COLUMNS",
    "CSV_FILENAME",
    "customers_to_csv",
    "customers_to_dataframe",
    "iter_customers_csv",
    "read_customers_csv",
]
