"""
CSV export and import of customer records.

Export format (one row per customer, cluster left empty when unassigned):

    ID,Customer ID,Gender,Age,Annual Income,Spending Score,Cluster

The reader also accepts the raw Kaggle ``Mall_Customers.csv`` layout
(``CustomerID,Genre,Age,Annual Income (k$),Spending Score (1-100)``).
"""

from pathlib import Path
from typing import IO, Iterable, Iterator, List, Sequence, Union

import pandas as pd
from pydantic import ValidationError

from mall_segmentation.core.exceptions import DatasetLoadError
from mall_segmentation.models.customer import Customer

CSV_COLUMNS = ["ID", "Customer ID", "Gender", "Age", "Annual Income", "Spending Score", "Cluster"]
CSV_FILENAME = "Mall_Customers.csv"

_KAGGLE_COLUMNS = {
    "CustomerID": "Customer ID",
    "Genre": "Gender",
    "Annual Income (k$)": "Annual Income",
    "Spending Score (1-100)": "Spending Score",
}

_REQUIRED_COLUMNS = ["Customer ID", "Gender", "Age", "Annual Income", "Spending Score"]


def _whole_number(value, column: str) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{column} must be a whole number, got {value!r}")
    return int(number)


def customers_to_dataframe(customers: Iterable[Customer]) -> pd.DataFrame:
    rows = [
        (
            c.id,
            c.customer_id,
            c.gender.value,
            c.age,
            c.annual_income,
            c.spending_score,
            c.cluster,
        )
        for c in customers
    ]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    # Nullable ints keep "3" from turning into "3.0" when some clusters are missing
    df["Cluster"] = df["Cluster"].astype("Int64")
    return df


def customers_to_csv(customers: Iterable[Customer]) -> str:
    return customers_to_dataframe(customers).to_csv(index=False, lineterminator="\n")


def iter_customers_csv(customers: Sequence[Customer], chunk_size: int = 500) -> Iterator[str]:
    """Yield the CSV export in chunks: the header first, then rows."""
    df = customers_to_dataframe(customers)
    yield ",".join(CSV_COLUMNS) + "\n"
    for start in range(0, len(df), chunk_size):
        yield df.iloc[start:start + chunk_size].to_csv(index=False, header=False, lineterminator="\n")


def read_customers_csv(source: Union[str, Path, IO[str]]) -> List[Customer]:
    """
    Parse customers from a CSV file path or text buffer.

    Missing ``ID`` assigns sequential ids from 1; missing ``Cluster`` leaves
    customers unassigned. IDs must be unique and integer columns must hold
    whole numbers.

    Raises:
        DatasetLoadError: unreadable file, missing columns or invalid values
    """
    try:
        df = pd.read_csv(source, float_precision="round_trip")
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DatasetLoadError(f"Could not read customer CSV: {e}") from e

    df = df.rename(columns=_KAGGLE_COLUMNS)
    missing = [column for column in _REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise DatasetLoadError("Customer CSV is missing columns", {"missing_columns": missing})

    if "ID" not in df.columns:
        df["ID"] = range(1, len(df) + 1)
    if "Cluster" not in df.columns:
        df["Cluster"] = None

    duplicated = df.loc[df["ID"].duplicated(), "ID"]
    if not duplicated.empty:
        raise DatasetLoadError(
            "Customer CSV has duplicate IDs",
            {"duplicate_ids": duplicated.unique().tolist()},
        )

    customers = []
    for line, values in enumerate(df.to_dict("records"), start=2):
        cluster = values["Cluster"]
        try:
            customers.append(Customer(
                id=_whole_number(values["ID"], "ID"),
                customer_id=_whole_number(values["Customer ID"], "Customer ID"),
                gender=str(values["Gender"]).strip().capitalize(),
                age=_whole_number(values["Age"], "Age"),
                annual_income=float(values["Annual Income"]),
                spending_score=float(values["Spending Score"]),
                cluster=None if pd.isna(cluster) else _whole_number(cluster, "Cluster"),
            ))
        except (ValueError, TypeError, ValidationError) as e:
            raise DatasetLoadError(
                f"Invalid customer row at line {line}",
                {"line": line, "error": str(e)},
            ) from e

    return customers
