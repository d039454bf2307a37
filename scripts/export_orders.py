import logging

import pandas as pd

import config
from orders.repository import OrderRepository
from storage.backends import JsonFileStore

COLUMNS = [
    "id", "status", "ambulance_type", "customer_name", "customer_phone",
    "pickup_lat", "pickup_lng", "pickup_address", "driver_id", "is_emergency",
    "created_at", "accepted_at", "arrived_at", "completed_at",
]


def orders_frame(repository: OrderRepository) -> pd.DataFrame:
    rows = []
    for order in repository.list():
        rows.append({
            "id": order.id,
            "status": order.status.value,
            "ambulance_type": order.ambulance_type,
            "customer_name": order.customer_name,
            "customer_phone": order.customer_phone,
            "pickup_lat": order.location.lat,
            "pickup_lng": order.location.lng,
            "pickup_address": order.location.address,
            "driver_id": order.driver_id,
            "is_emergency": order.is_emergency,
            "created_at": order.created_at,
            "accepted_at": order.accepted_at,
            "arrived_at": order.arrived_at,
            "completed_at": order.completed_at,
        })
    return pd.DataFrame(rows, columns=COLUMNS)


def export_orders(storage_path=config.STORAGE_PATH, output_file="orders_export.csv"):
    df = orders_frame(OrderRepository(JsonFileStore(storage_path)))
    df.to_csv(output_file, index=False)
    print(f"Exported {len(df)} orders to '{output_file}'")

    if df.empty:
        return

    print("\nOrders by status:")
    for status, count in df["status"].value_counts().items():
        print(f"  {status}: {count}")

    # minutes from booking to driver acceptance, accepted orders only
    accepted = df.dropna(subset=["accepted_at"])
    if not accepted.empty:
        wait = (pd.to_datetime(accepted["accepted_at"], utc=True) - pd.to_datetime(accepted["created_at"], utc=True))
        print(f"\nMean time to accept: {wait.dt.total_seconds().mean() / 60:.1f} min")


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    export_orders()
