"""Auth Log Geo - Constants and patterns"""

import re

VERSION = "1.0.0"

DEFAULT_LOG_PATH = '/var/log/auth.log'

# ip-api.com, keyed by IP: <base>json/<ip>
GEO_API_URL = 'http://ip-api.com/'

LOCATION_FORMAT = '{city}, {region}, {country} ({lat:f}, {lon:f})'

# Matches both timestamp styles:
#   Jan  1 10:15:23 host sshd[1234]: ...
#   2025-12-17T16:09:37.699297-05:00 host sshd-session[123]: ...
# and syslog's collapsed form "message repeated 3 times: [ ... ]"
_PREFIX = (
    r'^(?:'
    r'(?P<date>[A-Z][a-z]{2}\s+\d{1,2})\s+\d{2}:\d{2}:\d{2}'
    r'|'
    r'\d{4}-(?P<month>\d{2})-(?P<day>\d{2})T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?'
    r')\s+\S+\s+sshd(?:-session)?(?:\[\d+\])?:\s+'
    r'(?:message repeated (?P<repeat>\d+) times:\s+\[\s*)?'
)

# Usernames are attacker-supplied and may contain spaces, so the user
# group is lazy and the line is anchored on "from <ip> port"
_FROM = r'\s*from\s+(?P<ip>[^\s\]]+)(?:\s+port\b|\s*\]?\s*$)'

# Login attempt line shapes; order matters, the first match wins
ATTEMPT_PATTERNS = {
    'failed_invalid_user': _PREFIX + r'Failed \S+ for invalid user\s?(?P<user>.*?)' + _FROM,
    'failed': _PREFIX + r'Failed \S+ for (?P<user>.*?)' + _FROM,
    'invalid_user': _PREFIX + r'Invalid user\s?(?P<user>.*?)' + _FROM,
    'accepted': _PREFIX + r'Accepted \S+ for (?P<user>.*?)' + _FROM,
}

COMPILED_PATTERNS = [re.compile(p) for p in ATTEMPT_PATTERNS.values()]
