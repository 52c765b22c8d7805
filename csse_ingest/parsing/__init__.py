"""
csse_ingest/parsing package marker.
"""

from csse_ingest.parsing.coercion import (
    coerce_optional_float,
    coerce_optional_int,
    coerce_signed_int,
    coerce_string,
    coerce_unsigned_int,
)
from csse_ingest.parsing.delimited import DelimitedTextError, parse_delimited
from csse_ingest.parsing.timestamps import disambiguate_timestamp, parse_timestamp

__all__ = [
    "DelimitedTextError",
    "coerce_optional_float",
    "coerce_optional_int",
    "coerce_signed_int",
    "coerce_string",
    "coerce_unsigned_int",
    "disambiguate_timestamp",
    "parse_delimited",
    "parse_timestamp",
]
