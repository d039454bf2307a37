import importlib
import sys

import pandas as pd


def test_mock_orders_export_to_csv(tmp_path):
    """Scripts import the packages as installed, without touching sys.path."""
    path_before = list(sys.path)
    generate = importlib.import_module("scripts.generate_mock_orders")
    export = importlib.import_module("scripts.export_orders")
    assert sys.path == path_before

    storage_path = str(tmp_path / "orders.json")
    output_file = tmp_path / "orders.csv"

    generate.generate_mock_orders(num_orders=5, storage_path=storage_path, seed=11)
    export.export_orders(storage_path=storage_path, output_file=str(output_file))

    df = pd.read_csv(output_file)
    assert len(df) == 5
    assert set(df["status"]) == {"pending"}
    assert list(df.columns) == export.COLUMNS
