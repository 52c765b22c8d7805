"""
csse_ingest/normalizers package marker.
"""

from csse_ingest.normalizers.row_normalizer import DailyReportRowNormalizer, cell_at, normalize_row

__all__ = [
    "DailyReportRowNormalizer",
    "cell_at",
    "normalize_row",
]
