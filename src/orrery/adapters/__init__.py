# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for catalog loading, SGP4 propagation and snapshot export.

External dependencies (sgp4, json, csv, file I/O) are confined to this layer.
"""
from orrery.adapters.catalog_json import (
    JsonCatalogSource,
    load_body_catalog,
    load_fallback_satellites,
    read_tle_file,
)
from orrery.adapters.csv_exporter import CsvFrameExporter
from orrery.adapters.sgp4_propagator import Sgp4Propagator

__all__ = [
    "CsvFrameExporter",
    "JsonCatalogSource",
    "Sgp4Propagator",
    "load_body_catalog",
    "load_fallback_satellites",
    "read_tle_file",
]
