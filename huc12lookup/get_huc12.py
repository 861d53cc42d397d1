"""
Look up the HUC12 subwatershed code and name for points in Oregon by querying
Oregon DEQ's WBD feature service. The service column Name is returned as HUC12_Name.
"""
import argparse
import json
import logging
import urllib.parse
import requests
import pandas as pd
import geopandas as gpd
from huc12lookup.config import (
    get_query_url, load_vars, OREGON_X_BOUNDS, OREGON_Y_BOUNDS, HUC12_COLUMNS, NA_WARNING
)
from huc12lookup.utils import broadcast_points, preview_data

logger = logging.getLogger(__name__)

# RFC 3986 reserved characters stay unescaped
_RESERVED = ";/?:@=&+$,#[]!'()*"


def build_query_url(x, y, crs, query_url=None):
    """
    Build the point-intersect query URL for one point.

    crs is passed through as given, e.g. 4326 or "EPSG:4326".
    """
    if query_url is None:
        query_url = get_query_url()
    url = (f"{query_url}geometryType=esriGeometryPoint&geometry={x},{y}"
           f"&inSR={crs}&outFields=*&returnGeometry=false"
           f"&returnIdsOnly=false&f=GeoJSON")
    return urllib.parse.quote(url, safe=_RESERVED)


def fetch_huc12_response(url):
    """
    GET the query URL once. Returns (http_error, text) with the body decoded as UTF-8.
    Transport errors are not caught.
    """
    logger.info(f"Fetching HUC12 from: {url}")
    response = requests.get(url)
    response.encoding = 'utf-8'
    http_error = response.status_code >= 400
    if http_error:
        logger.error(f"HTTP Error {response.status_code}: {response.text}")
    return http_error, response.text


def _na_row():
    logger.warning(NA_WARNING)
    return pd.DataFrame({col: [None] for col in HUC12_COLUMNS}, dtype=object)


def parse_huc12_response(http_error, text):
    """
    Turn a GeoJSON response into a GeoDataFrame with one row per matched feature.

    An HTTP error, a body that isn't JSON or zero features gives a single
    row of missing values instead. An ArcGIS error payload raises ValueError.
    """
    if http_error:
        return _na_row()

    try:
        data = json.loads(text)
    except ValueError as e:
        logger.error(f"Failed to parse GeoJSON from response: {e}")
        return _na_row()

    if not isinstance(data, dict):
        return _na_row()
    if 'error' in data:
        # ArcGIS reports query errors, e.g. an unknown inSR, with a 200 status
        raise ValueError(f"Service returned an error: {data['error']}")

    # features can come back without a geometry member when returnGeometry=false
    features = [dict(feature, geometry=feature.get('geometry')) for feature in data.get('features') or []]
    df = gpd.GeoDataFrame.from_features(features)
    if len(df) == 0:
        return _na_row()
    return df


def select_huc12_fields(df):
    """Keep HUC12 and Name, renaming Name to HUC12_Name."""
    df = df.rename(columns={'Name': 'HUC12_Name'})
    return pd.DataFrame(df[HUC12_COLUMNS]).reset_index(drop=True)


def check_oregon_bounds(x, y):
    """Log a warning for each coordinate outside Oregon. Returns the messages."""
    # older wording had the x and y labels swapped; each message names the bound it checks
    messages = []
    if x < OREGON_X_BOUNDS[0] or x > OREGON_X_BOUNDS[1]:
        messages.append(f"x is far outside of Oregon: {x}")
    if y < OREGON_Y_BOUNDS[0] or y > OREGON_Y_BOUNDS[1]:
        messages.append(f"y is far outside of Oregon: {y}")
    for message in messages:
        logger.warning(message)
    return messages


def get_huc12_(x, y, crs):
    """
    Non vectorized lookup for a single point.

    Out of range coordinates are only warned about, the query still runs.
    Every feature the point falls in is returned.
    """
    check_oregon_bounds(x, y)
    url = build_query_url(x, y, crs)
    http_error, text = fetch_huc12_response(url)
    df = parse_huc12_response(http_error, text)
    return select_huc12_fields(df)


def get_huc12(x, y, crs):
    """
    Get the HUC12 code and name for one or more points.

    x, y and crs are scalars or sequences; scalars are recycled to the
    common length. Points are queried one at a time in input order.
    Returns a DataFrame with columns HUC12 and HUC12_Name.
    """
    xs, ys, crss = broadcast_points(x, y, crs)
    frames = [get_huc12_(xi, yi, ci) for xi, yi, ci in zip(xs, ys, crss)]
    if not frames:
        return pd.DataFrame(columns=HUC12_COLUMNS, dtype=object)
    return pd.concat(frames, ignore_index=True)


def get_huc12code(x, y, crs):
    """Get the HUC12 code for one or more points, None where the lookup failed."""
    return get_huc12(x, y, crs)['HUC12'].tolist()


def get_huc12name(x, y, crs):
    """Get the HUC12 name for one or more points, None where the lookup failed."""
    return get_huc12(x, y, crs)['HUC12_Name'].tolist()


lookup_table = get_huc12
lookup_codes = get_huc12code
lookup_names = get_huc12name


def main(args=None):
    parser = argparse.ArgumentParser(description='Look up the HUC12 subwatershed for points in Oregon.')
    parser.add_argument('--x', type=float, nargs='+', required=True, help='Longitude(s) in decimal degrees')
    parser.add_argument('--y', type=float, nargs='+', required=True, help='Latitude(s) in decimal degrees')
    parser.add_argument('--crs', type=str, nargs='+', default=['4326'], help='CRS of x and y, typically an EPSG code (default: 4326)')
    parser.add_argument('--field', type=str, choices=['table', 'code', 'name'], default='table', help='What to print (default: table)')
    args = parser.parse_args(args)

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    load_vars()

    if args.field == 'code':
        result = get_huc12code(args.x, args.y, args.crs)
    elif args.field == 'name':
        result = get_huc12name(args.x, args.y, args.crs)
    else:
        result = get_huc12(args.x, args.y, args.crs)
        preview_data(result)
    print(result)
    return result


if __name__ == "__main__":
    main()
