"""
Tracking package: live ambulance position / ETA shown to the customer.

Public API:
- TrackingSimulator, TrackingSnapshot, format_countdown
- TrackingPolicy, default_tracking_policy
"""
from .policy import TrackingPolicy, default_tracking_policy
from .simulator import TrackingSimulator, TrackingSnapshot, format_countdown

__all__ = [
    "TrackingPolicy",
    "default_tracking_policy",
    "TrackingSimulator",
    "TrackingSnapshot",
    "format_countdown",
]
