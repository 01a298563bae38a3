import pandas as pd
import pytest

from src.models.growth.reference import ReferenceTableStore, default_store, tables_from_frame


@pytest.fixture(scope="session")
def store():
    return default_store()


@pytest.fixture
def normal_store(store):
    """Shipped height tables plus a small mean/SD weight table."""
    weight = pd.DataFrame(
        {
            "sex": ["male", "male", "male", "female", "female", "female"],
            "age": [0.0, 5.0, 10.0, 0.0, 5.0, 10.0],
            "mean": [3.0, 18.0, 32.0, 2.9, 17.5, 31.5],
            "sd": [0.4, 2.0, 5.0, 0.4, 2.1, 5.2],
        }
    )
    tables = {k: v for k, v in store.tables.items() if k[1] == "height"}
    tables.update(tables_from_frame(weight, "weight"))
    return ReferenceTableStore(tables=tables, version="test-normal")
