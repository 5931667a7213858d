"""Auth Log Geo - Filter pipeline"""

import logging
import re
from dataclasses import dataclass, replace
from typing import Optional, Pattern, Union

from .errors import GeolocationError
from .models import AggregationStore, AuthEntry, DatedEntries, Location

logger = logging.getLogger(__name__)


@dataclass
class FilterConfig:
    """Filter criteria; unset fields are not applied"""
    threshold: int = 0
    address: Optional[str] = None
    user: Optional[str] = None
    location: Optional[Union[str, Pattern]] = None
    date: Optional[str] = None

    def location_pattern(self) -> Optional[Pattern]:
        if not self.location:
            return None
        if isinstance(self.location, str):
            return re.compile(self.location)
        return self.location


def apply_date_filter(store: AggregationStore, date: str) -> Optional[AggregationStore]:
    """Keep only the bucket whose date equals ``date``, or None if there is none."""
    day = store.find_date(date)
    if day is None:
        return None
    return AggregationStore([day])


def _resolve(locator, entry: AuthEntry) -> AuthEntry:
    try:
        location = locator.locate(entry.ip)
    except GeolocationError as e:
        logger.warning("%s", e)
        location = Location()
    return replace(entry, location=location)


def filter_bucket(day: DatedEntries, config: FilterConfig, locator,
                  location_pattern: Optional[Pattern] = None):
    """Run the entry filters on one bucket in place.

    The location filter needs every surviving entry resolved first, so
    the lookups come after the cheap filters and before it.
    """
    if config.threshold > 0:
        day.entries = day.filter(lambda ae: ae.count >= config.threshold)

    if config.address:
        day.entries = day.filter(lambda ae: ae.ip == config.address)

    if config.user:
        day.entries = day.filter(lambda ae: config.user in ae.users)

    if len(day):
        day.entries = day.transform(lambda ae: _resolve(locator, ae))

    if location_pattern is not None:
        day.entries = day.filter(lambda ae: location_pattern.search(ae.location_string()) is not None)


def apply_entry_filters(store: AggregationStore, config: FilterConfig, locator):
    location_pattern = config.location_pattern()
    for day in store:
        filter_bucket(day, config, locator, location_pattern)


def run_filters(store: AggregationStore, config: FilterConfig, locator) -> Optional[AggregationStore]:
    """Apply every configured filter; returns None when the date filter matched nothing."""
    if config.date:
        store = apply_date_filter(store, config.date)
        if store is None:
            return None

    apply_entry_filters(store, config, locator)
    return store
