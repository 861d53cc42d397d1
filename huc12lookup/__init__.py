from huc12lookup.get_huc12 import (
    get_huc12, get_huc12code, get_huc12name,
    lookup_table, lookup_codes, lookup_names,
)

__all__ = [
    'get_huc12', 'get_huc12code', 'get_huc12name',
    'lookup_table', 'lookup_codes', 'lookup_names',
]
