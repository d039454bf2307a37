#Marks routing as a package.
#Re-exports the public APIs (geo math, OSRM client, route service) so other
#modules import from routing without knowing internal file names.
#No business logic.

from .eta_service import EtaResult, haversine_km, estimate_eta, has_arrived, format_distance, format_eta
from .osrm_client import OSRMClient, OSRMError
from .route_service import RouteResult, compute_route, straight_line_route

__all__ = [
           "EtaResult",
           "haversine_km",
             "estimate_eta",
             "has_arrived",
             "format_distance",
             "format_eta",
             "OSRMClient",
             "OSRMError",
             "RouteResult",
             "compute_route",
             "straight_line_route",
             ]
