"""Auth Log Geo - IP geolocation client (ip-api.com)"""

import logging
from typing import Optional

import requests

from .errors import GeolocationError
from .models import Location
from .patterns import GEO_API_URL

logger = logging.getLogger(__name__)


class GeoClient:
    """Resolves an IP to a Location with one HTTP request per call.

    Nothing is cached: asking twice for the same IP makes two requests.
    """

    def __init__(self, base_url: str = GEO_API_URL, session: Optional[requests.Session] = None):
        if not base_url.endswith('/'):
            base_url += '/'
        self.base_url = base_url
        self.session = session or requests.Session()

    def url_for(self, ip: str) -> str:
        return f"{self.base_url}json/{ip}"

    def locate(self, ip: str) -> Location:
        logger.debug("making API request for IP '%s'", ip)
        try:
            response = self.session.get(self.url_for(ip))
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise GeolocationError(ip, str(e)) from e
        except ValueError as e:
            raise GeolocationError(ip, f"malformed response: {e}") from e

        if not isinstance(data, dict):
            raise GeolocationError(ip, "malformed response: expected a JSON object")
        if data.get('status', 'success') != 'success':
            raise GeolocationError(ip, data.get('message') or 'lookup failed')

        try:
            return Location(
                country=data.get('country') or '',
                region=data.get('regionName') or '',
                city=data.get('city') or '',
                latitude=float(data.get('lat') or 0.0),
                longitude=float(data.get('lon') or 0.0),
            )
        except (TypeError, ValueError) as e:
            raise GeolocationError(ip, f"malformed response: {e}") from e

    def close(self):
        self.session.close()
