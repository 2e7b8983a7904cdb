"""
Response Mappers
Pure functions turning provider payloads into DebridFile / RemoteItem records.
"""
from debridkit.mappers import alldebrid, debridlink, premiumize, realdebrid, torbox
from debridkit.mappers.common import normalize_path, strip_root_folder

__all__ = [
    "alldebrid",
    "debridlink",
    "premiumize",
    "realdebrid",
    "torbox",
    "normalize_path",
    "strip_root_folder",
]
