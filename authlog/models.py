"""Auth Log Geo - Data models"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .patterns import LOCATION_FORMAT


@dataclass
class Location:
    """Geolocation of a source IP"""
    country: str = ''
    region: str = ''
    city: str = ''
    latitude: float = 0.0
    longitude: float = 0.0

    def compose(self) -> str:
        return LOCATION_FORMAT.format(
            city=self.city,
            region=self.region,
            country=self.country,
            lat=self.latitude,
            lon=self.longitude,
        )

    def to_json(self) -> Dict:
        return {
            'Country': self.country,
            'Region': self.region,
            'City': self.city,
            'Latitude': self.latitude,
            'Longitude': self.longitude,
        }

    @classmethod
    def from_json(cls, data: Dict) -> 'Location':
        return cls(
            country=data.get('Country', ''),
            region=data.get('Region', ''),
            city=data.get('City', ''),
            latitude=float(data.get('Latitude', 0.0)),
            longitude=float(data.get('Longitude', 0.0)),
        )


@dataclass
class AuthEntry:
    """Login attempts from one source IP on one day"""
    ip: str
    count: int = 1
    users: List[str] = field(default_factory=list)
    location: Optional[Location] = None

    def add_user(self, user: str, times: int = 1):
        """Count ``times`` more attempts and remember the username once."""
        self.count += times
        if user and user not in self.users:
            self.users.append(user)

    def location_string(self) -> str:
        return (self.location or Location()).compose()

    def to_json(self) -> Dict:
        return {
            'IP': self.ip,
            'Location': self.location.to_json() if self.location else None,
            'Count': self.count,
            'Users': list(self.users),
        }

    @classmethod
    def from_json(cls, data: Dict) -> 'AuthEntry':
        location = data.get('Location')
        return cls(
            ip=data['IP'],
            count=int(data['Count']),
            users=list(data.get('Users') or []),
            location=Location.from_json(location) if location else None,
        )


class DatedEntries:
    """All entries seen on one day, in first-seen order.

    A dict from IP to position is kept beside the list so that lookups
    stay cheap on busy days; it is rebuilt whenever ``entries`` is
    reassigned.
    """

    def __init__(self, date: str, entries: Optional[List[AuthEntry]] = None):
        self.date = date
        self.entries = entries or []

    @property
    def entries(self) -> List[AuthEntry]:
        return self._entries

    @entries.setter
    def entries(self, value: List[AuthEntry]):
        self._entries = list(value)
        self._index = {}
        for idx, entry in enumerate(self._entries):
            self._index.setdefault(entry.ip, idx)

    def find(self, ip: str) -> Tuple[int, bool]:
        idx = self._index.get(ip)
        if idx is None:
            return 0, False
        return idx, True

    def append(self, entry: AuthEntry):
        self._index.setdefault(entry.ip, len(self._entries))
        self._entries.append(entry)

    def record(self, ip: str, user: str, times: int = 1) -> AuthEntry:
        """Add ``times`` attempts by ``user`` from ``ip``, creating the entry if needed."""
        idx, found = self.find(ip)
        if found:
            entry = self._entries[idx]
            entry.add_user(user, times)
            return entry
        entry = AuthEntry(ip=ip, count=times, users=[user] if user else [])
        self.append(entry)
        return entry

    def filter(self, predicate: Callable[[AuthEntry], bool]) -> List[AuthEntry]:
        return [entry for entry in self._entries if predicate(entry)]

    def transform(self, fn: Callable[[AuthEntry], AuthEntry]) -> List[AuthEntry]:
        return [fn(entry) for entry in self._entries]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, DatedEntries):
            return NotImplemented
        return self.date == other.date and self._entries == other._entries

    def __repr__(self):
        return f"DatedEntries(date={self.date!r}, entries={self._entries!r})"

    def to_json(self) -> Dict:
        return {
            'Date': self.date,
            'Entries': [entry.to_json() for entry in self._entries],
        }

    @classmethod
    def from_json(cls, data: Dict) -> 'DatedEntries':
        return cls(data['Date'], [AuthEntry.from_json(e) for e in data.get('Entries') or []])


class AggregationStore(list):
    """Day buckets in the order their first line appeared in the log"""

    def bucket(self, date: str) -> DatedEntries:
        """Return the bucket for ``date``, appending a new one if unseen."""
        for day in self:
            if day.date == date:
                return day
        day = DatedEntries(date)
        self.append(day)
        return day

    def find_date(self, date: str) -> Optional[DatedEntries]:
        for day in self:
            if day.date == date:
                return day
        return None

    def total_entries(self) -> int:
        return sum(len(day) for day in self)

    def to_json(self) -> List[Dict]:
        return [day.to_json() for day in self]

    @classmethod
    def from_json(cls, data: List[Dict]) -> 'AggregationStore':
        return cls(DatedEntries.from_json(day) for day in data)
