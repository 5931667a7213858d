import pytest

from authlog.errors import GeolocationError
from authlog.models import Location

SAMPLE_LOG = """\
Jan  1 10:15:23 web sshd[1234]: Failed password for admin from 10.0.0.1 port 22 ssh2
Jan  1 10:15:25 web sshd[1234]: Failed password for root from 10.0.0.1 port 22 ssh2
Jan  1 10:16:02 web CRON[999]: pam_unix(cron:session): session opened for user root by (uid=0)
Jan  1 10:17:40 web sshd[1240]: Invalid user oracle from 203.0.113.7 port 51022
Jan  1 10:17:41 web sshd[1240]: Failed password for invalid user oracle from 203.0.113.7 port 51022 ssh2
Jan  2 08:00:00 web sshd[2000]: Failed password for admin from 10.0.0.2 port 22 ssh2
Jan  2 09:30:12 web sshd[2001]: Accepted publickey for alice from 198.51.100.4 port 40000 ssh2: RSA SHA256:abc
"""

LOCATIONS = {
    '10.0.0.1': Location(country='Germany', region='Hesse', city='Frankfurt am Main',
                         latitude=50.1109, longitude=8.6821),
    '10.0.0.2': Location(country='United States', region='Virginia', city='Ashburn',
                         latitude=39.0438, longitude=-77.4874),
    '203.0.113.7': Location(country='China', region='Beijing', city='Beijing',
                            latitude=39.9042, longitude=116.4074),
    '198.51.100.4': Location(country='Germany', region='Bavaria', city='Munich',
                             latitude=48.1351, longitude=11.5820),
}


class FakeLocator:
    """Answers from a fixed table and records every lookup"""

    def __init__(self, locations=None, failing=()):
        self.locations = LOCATIONS if locations is None else locations
        self.failing = set(failing)
        self.calls = []

    def locate(self, ip):
        self.calls.append(ip)
        if ip in self.failing or ip not in self.locations:
            raise GeolocationError(ip, 'lookup failed')
        return self.locations[ip]

    def close(self):
        pass


@pytest.fixture
def sample_lines():
    return SAMPLE_LOG.splitlines(keepends=True)


@pytest.fixture
def sample_log(tmp_path):
    path = tmp_path / 'auth.log'
    path.write_text(SAMPLE_LOG, encoding='utf-8')
    return path


@pytest.fixture
def locator():
    return FakeLocator()
