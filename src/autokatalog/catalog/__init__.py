"""Catalog data pipeline: normalization, CSV codec, query engine."""

from autokatalog.catalog import csv_codec
from autokatalog.catalog.normalize import load_feed_dir, normalize_record, normalize_vehicle
from autokatalog.catalog.query import brand_options, filter_options, filter_vehicles, paginate, query

__all__ = [
    "csv_codec",
    "normalize_record",
    "normalize_vehicle",
    "load_feed_dir",
    "filter_vehicles",
    "paginate",
    "query",
    "brand_options",
    "filter_options",
]
