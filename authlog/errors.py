"""Auth Log Geo - Exceptions"""


class AuthlogError(Exception):
    """Base class for errors raised by this package"""


class GeolocationError(AuthlogError):
    """IP lookup failed"""

    def __init__(self, ip: str, reason: str):
        self.ip = ip
        self.reason = reason
        super().__init__(f"error getting location data for IP '{ip}': {reason}")
