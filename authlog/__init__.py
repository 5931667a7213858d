"""Auth Log Geo package"""

from .patterns import VERSION, ATTEMPT_PATTERNS
from .models import AggregationStore, AuthEntry, DatedEntries, Location
from .parser import parse_file, parse_line, parse_lines
from .geolocation import GeoClient
from .filters import FilterConfig, run_filters
from .output import print_json, print_report
from .errors import AuthlogError, GeolocationError

__all__ = [
    'VERSION', 'AggregationStore', 'AuthEntry', 'DatedEntries', 'Location',
    'parse_file', 'parse_line', 'parse_lines', 'GeoClient', 'FilterConfig',
    'run_filters', 'print_json', 'print_report', 'AuthlogError', 'GeolocationError',
]
