"""
The demo driver roster. There is no create/delete for drivers.
"""

from typing import Dict, List, Optional

from .models import Driver

DRIVERS: List[Driver] = [
    Driver.new("DRV001", "Rajesh Kumar", "+91 98765 43210", "icu", "DL-01-AB-1234",
               28.6139, 77.209, rating=4.9, total_rides=245),
    Driver.new("DRV002", "Amit Sharma", "+91 98765 43211", "basic", "DL-01-CD-5678",
               28.62, 77.215, rating=4.8, total_rides=189),
    Driver.new("DRV003", "Priya Singh", "+91 98765 43212", "critical", "DL-01-EF-9012",
               28.605, 77.2, rating=4.95, total_rides=312),
    Driver.new("DRV004", "Vikram Patel", "+91 98765 43213", "neonatal", "DL-01-GH-3456",
               28.618, 77.21, rating=4.85, total_rides=156),
]

_BY_ID: Dict[str, Driver] = {driver.id: driver for driver in DRIVERS}


def get_driver(driver_id: str) -> Optional[Driver]:
    return _BY_ID.get(driver_id)
