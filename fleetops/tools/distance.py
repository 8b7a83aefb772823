"""
Road distance estimation for trucking lanes.

Straight-line (haversine) distances between freight hubs are scaled by a
routing factor to approximate highway miles. Lanes with a known highway
distance use that figure directly.
"""

from math import atan2, cos, radians, sin, sqrt
from typing import Optional

EARTH_RADIUS_MILES = 3959
MIN_ROUTING_FACTOR = 1.10

# Freight hub coordinates per state (lat, lon)
STATE_COORDINATES: dict[str, tuple[float, float]] = {
    "AL": (32.3617, -86.7947),
    "AK": (61.2181, -149.9003),
    "AZ": (33.5722, -112.0892),
    "AR": (34.7465, -92.2896),
    "CA": (34.0522, -118.2437),
    "CO": (39.7392, -104.9903),
    "CT": (41.7658, -72.6734),
    "DE": (39.1612, -75.5264),
    "FL": (28.5383, -81.3792),
    "GA": (33.7490, -84.3880),
    "HI": (21.3099, -157.8581),
    "ID": (43.6150, -116.2023),
    "IL": (41.8781, -87.6298),
    "IN": (39.7684, -86.1581),
    "IA": (41.5868, -93.6250),
    "KS": (39.0473, -95.6890),
    "KY": (38.2009, -84.8733),
    "LA": (29.9511, -90.0715),
    "ME": (45.2538, -69.4455),
    "MD": (39.0458, -76.6413),
    "MA": (42.2352, -71.0275),
    "MI": (42.3314, -84.5951),
    "MN": (44.9537, -93.0900),
    "MS": (32.2988, -90.1848),
    "MO": (39.0997, -94.5786),
    "MT": (45.7833, -108.5007),
    "NE": (41.2524, -95.9980),
    "NV": (39.1638, -119.7674),
    "NH": (43.2081, -71.5376),
    "NJ": (40.0583, -74.4057),
    "NM": (35.0844, -106.6504),
    "NY": (42.1584, -74.9384),
    "NC": (35.7796, -78.6382),
    "ND": (46.8083, -100.7837),
    "OH": (39.9612, -82.9988),
    "OK": (35.4676, -97.5164),
    "OR": (45.5152, -122.6784),
    "PA": (40.2732, -76.8839),
    "RI": (41.8240, -71.4128),
    "SC": (34.0000, -81.0348),
    "SD": (44.2998, -100.3360),
    "TN": (36.1627, -86.7816),
    "TX": (32.7767, -96.7970),
    "UT": (40.7608, -111.8910),
    "VT": (44.2601, -72.5806),
    "VA": (37.4316, -78.6569),
    "WA": (47.0379, -122.9007),
    "WV": (39.6403, -79.9553),
    "WI": (43.0642, -87.9073),
    "WY": (41.1400, -104.8197),
}

# Major freight city coordinates keyed by (city, state)
CITY_COORDINATES: dict[tuple[str, str], tuple[float, float]] = {
    ("Memphis", "TN"): (35.1495, -90.0490),
    ("Nashville", "TN"): (36.1627, -86.7816),
    ("Knoxville", "TN"): (35.9606, -83.9207),
    ("Chattanooga", "TN"): (35.0456, -85.2672),
    ("Byhalia", "MS"): (34.8373, -89.6850),
    ("Jackson", "MS"): (32.2988, -90.1848),
    ("Gulfport", "MS"): (30.3674, -89.0928),
    ("Biloxi", "MS"): (30.3960, -88.8853),
    ("Hattiesburg", "MS"): (31.3271, -89.2903),
    ("Meridian", "MS"): (32.3643, -88.7034),
    ("Tupelo", "MS"): (34.2576, -88.7034),
    ("Atlanta", "GA"): (33.7490, -84.3880),
    ("Savannah", "GA"): (32.0835, -81.0998),
    ("Augusta", "GA"): (33.4734, -82.0105),
    ("Columbus", "GA"): (32.4609, -84.9877),
    ("Macon", "GA"): (32.8407, -83.6324),
    ("Pittsburgh", "PA"): (40.4406, -79.9959),
    ("Philadelphia", "PA"): (39.9526, -75.1652),
    ("Harrisburg", "PA"): (40.2732, -76.8839),
    ("Allentown", "PA"): (40.6084, -75.4902),
    ("Euclid", "OH"): (41.5931, -81.5265),
    ("Cleveland", "OH"): (41.4993, -81.6944),
    ("Columbus", "OH"): (39.9612, -82.9988),
    ("Cincinnati", "OH"): (39.1031, -84.5120),
    ("Toledo", "OH"): (41.6528, -83.5379),
    ("Akron", "OH"): (41.0814, -81.5190),
    ("Chicago", "IL"): (41.8781, -87.6298),
    ("Indianapolis", "IN"): (39.7684, -86.1581),
    ("Louisville", "KY"): (38.2527, -85.7585),
    ("Birmingham", "AL"): (33.5207, -86.8025),
    ("New Orleans", "LA"): (29.9511, -90.0715),
    ("Houston", "TX"): (29.7604, -95.3698),
    ("Dallas", "TX"): (32.7767, -96.7970),
    ("Rosenberg", "TX"): (29.5575, -95.8088),
    ("Baytown", "TX"): (29.7355, -94.9774),
    ("Hudson", "FL"): (28.3642, -82.6890),
    ("Tampa", "FL"): (27.9506, -82.4572),
    ("Lakeland", "FL"): (28.0395, -81.9498),
    ("Orlando", "FL"): (28.5383, -81.3792),
    ("Jacksonville", "FL"): (30.3322, -81.6557),
    ("Miami", "FL"): (25.7617, -80.1918),
    ("Kansas City", "MO"): (39.0997, -94.5786),
    ("Charlotte", "NC"): (35.2271, -80.8431),
    ("Raleigh", "NC"): (35.7796, -78.6382),
    ("Greensboro", "NC"): (36.0726, -79.7920),
    ("Fayetteville", "NC"): (35.0527, -78.8784),
    ("Wilmington", "NC"): (34.2257, -77.9447),
    ("Asheville", "NC"): (35.5951, -82.5515),
}

# Highway miles for lanes run often enough to know exactly
KNOWN_ROUTES: dict[tuple[tuple[str, str], tuple[str, str]], int] = {
    (("Byhalia", "MS"), ("Rosenberg", "TX")): 682,
    (("Memphis", "TN"), ("Rosenberg", "TX")): 720,
    (("Jackson", "MS"), ("Houston", "TX")): 352,
    (("Memphis", "TN"), ("Atlanta", "GA")): 371,
    (("Chicago", "IL"), ("Memphis", "TN")): 341,
    (("Louisville", "KY"), ("Memphis", "TN")): 305,
}

MOUNTAINOUS_STATES = {"CO", "MT", "WY", "UT", "NV", "WV", "PA", "VA", "NC", "TN", "KY"}
DENSE_URBAN_STATES = {"NY", "NJ", "CT", "MA", "RI", "MD", "DE", "CA"}
FLAT_INTERSTATE_STATES = {"TX", "OK", "KS", "NE", "IA", "IL", "IN", "OH"}


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in miles between two coordinates."""
    rlat1, rlon1 = radians(lat1), radians(lon1)
    rlat2, rlon2 = radians(lat2), radians(lon2)

    dlat = rlat2 - rlat1
    dlon = rlon2 - rlon1

    a = sin(dlat / 2) ** 2 + cos(rlat1) * cos(rlat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_MILES * c


def routing_factor(straight_line_miles: float, origin_state: str, destination_state: str) -> float:
    """
    Multiplier converting straight-line miles into road miles.

    Shorter hauls wind through local roads and get a larger factor; terrain,
    congestion and known awkward corridors adjust it further.
    """
    if straight_line_miles > 1000:
        factor = 1.15
    elif straight_line_miles > 600:
        factor = 1.18
    elif straight_line_miles > 400:
        factor = 1.22
    elif straight_line_miles > 200:
        factor = 1.26
    else:
        factor = 1.35

    states = {origin_state, destination_state}
    if states & MOUNTAINOUS_STATES:
        factor += 0.04
    if states & DENSE_URBAN_STATES:
        factor += 0.03
    if origin_state in FLAT_INTERSTATE_STATES and destination_state in FLAT_INTERSTATE_STATES:
        factor -= 0.02

    # MS-TX lanes route around the Mississippi River crossings
    if states == {"MS", "TX"}:
        factor += 0.02

    return max(factor, MIN_ROUTING_FACTOR)


def calculate_distance(origin_state: str, destination_state: str) -> int:
    """
    Estimate road miles between two states' freight hubs.

    Returns 0 for the same state or when either state is unknown.
    """
    if not origin_state or not destination_state or origin_state == destination_state:
        return 0

    origin = STATE_COORDINATES.get(origin_state)
    destination = STATE_COORDINATES.get(destination_state)
    if origin is None or destination is None:
        return 0

    straight_line = haversine_miles(*origin, *destination)
    return round(straight_line * routing_factor(straight_line, origin_state, destination_state))


def known_route_miles(
    origin_city: str, origin_state: str, destination_city: str, destination_state: str
) -> Optional[int]:
    """Look up a known lane in either direction."""
    origin = (origin_city, origin_state)
    destination = (destination_city, destination_state)
    return KNOWN_ROUTES.get((origin, destination), KNOWN_ROUTES.get((destination, origin)))


def calculate_distance_between_cities(
    origin_city: str, origin_state: str, destination_city: str, destination_state: str
) -> int:
    """
    Estimate road miles between two cities.

    Known lanes win; otherwise city coordinates are used. Returns 0 when
    either city is not in the coordinate table, so callers can ask for
    manual entry.
    """
    known = known_route_miles(origin_city, origin_state, destination_city, destination_state)
    if known is not None:
        return known

    origin = CITY_COORDINATES.get((origin_city, origin_state))
    destination = CITY_COORDINATES.get((destination_city, destination_state))
    if origin is None or destination is None:
        return 0

    straight_line = haversine_miles(*origin, *destination)
    return round(straight_line * routing_factor(straight_line, origin_state, destination_state))


def is_nearby(
    city: str,
    state: str,
    other_city: str,
    other_state: str,
    radius_miles: float = 100,
) -> bool:
    """
    Whether two locations are close enough to pick up a follow-on load.

    Locations in the same state are always nearby. Across state lines the
    city distance must be known and within the radius.
    """
    state, other_state = state.upper(), other_state.upper()
    if state == other_state:
        return True

    miles = calculate_distance_between_cities(city, state, other_city, other_state)
    return 0 < miles <= radius_miles
