"""KOPIS data sources: listing, detail, venue geocoding and ranking."""

from playscout.sources.kopis_client import KopisClient
from playscout.sources.models import RankEntry, ShowListingEntry, ShowRecord, VenueCoordinates
from playscout.sources.ranking import RankingFeed
from playscout.sources.region_lister import DateWindow, RegionLister
from playscout.sources.show_detail import ShowDetailFetcher
from playscout.sources.venue_geocoder import VenueGeocoder

__all__ = [
    "DateWindow",
    "KopisClient",
    "RankEntry",
    "RankingFeed",
    "RegionLister",
    "ShowDetailFetcher",
    "ShowListingEntry",
    "ShowRecord",
    "VenueCoordinates",
    "VenueGeocoder",
]
