"""
csse_ingest package marker.
"""
