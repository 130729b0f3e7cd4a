"""Resolve free-text locations to coordinates and distance from home."""
from __future__ import annotations

import math
from typing import Mapping

from job_triage.config import DEFAULT_HOME, Coordinate
from job_triage.log import get_logger

log = get_logger(__name__)

EARTH_RADIUS_KM = 6371.0

# Returned when no known city appears in the location text: far enough to
# fall outside any sensible max-distance preference.
UNKNOWN_DISTANCE_KM = 9999.0

REMOTE_MARKERS: tuple[str, ...] = (
    "remote", "télétravail", "teletravail", "telework", "home office", "full remote",
)

# Insertion order matters: substring lookup returns the FIRST key found in
# the location text, not the longest one.
CITY_COORDINATES: dict[str, Coordinate] = {
    "bruxelles": Coordinate(50.8503, 4.3517),
    "brussels": Coordinate(50.8503, 4.3517),
    "brussel": Coordinate(50.8503, 4.3517),
    "antwerpen": Coordinate(51.2194, 4.4025),
    "anvers": Coordinate(51.2194, 4.4025),
    "gand": Coordinate(51.0543, 3.7174),
    "gent": Coordinate(51.0543, 3.7174),
    "charleroi": Coordinate(50.4101, 4.4446),
    "liège": Coordinate(50.6326, 5.5797),
    "liege": Coordinate(50.6326, 5.5797),
    "namur": Coordinate(50.4674, 4.8720),
    "mons": Coordinate(50.4542, 3.9567),
    "tournai": Coordinate(50.6059, 3.3875),
    "bouge": Coordinate(50.4667, 4.8833),
    "zaventem": Coordinate(50.8876, 4.4699),
    "diegem": Coordinate(50.8940, 4.4363),
    "obourg": Coordinate(50.4761, 4.0061),
    "nivelles": Coordinate(50.5983, 4.3285),
    "wavre": Coordinate(50.7159, 4.6128),
    "leuven": Coordinate(50.8798, 4.7005),
    "louvain": Coordinate(50.8798, 4.7005),
    "bruges": Coordinate(51.2093, 3.2247),
    "brugge": Coordinate(51.2093, 3.2247),
    "asse": Coordinate(50.9101, 4.1984),
    "halle": Coordinate(50.7339, 4.2345),
    "humbeek": Coordinate(50.9667, 4.3833),
    "kortrijk": Coordinate(50.8268, 3.2545),
    "arlon": Coordinate(49.6833, 5.8167),
    "nazareth": Coordinate(50.9576, 3.5959),
    "beveren-leie": Coordinate(50.8833, 3.3500),
    "kapelle-op-den-bos": Coordinate(51.0132, 4.3554),
    "maasmechelen": Coordinate(50.9655, 5.6945),
    "puurs": Coordinate(51.0741, 4.2884),
    "braine-l'alleud": Coordinate(50.6836, 4.3678),
    "merelbeke": Coordinate(50.9945, 3.7456),
    "eines": Coordinate(50.8524, 3.6015),
    "rotselaar": Coordinate(50.9537, 4.7184),
    "wilrijk": Coordinate(51.1683, 4.3943),
    "anderlecht": Coordinate(50.8387, 4.3160),
    "merchtem": Coordinate(50.9587, 4.2185),
    "zwijndrecht": Coordinate(51.2183, 4.3294),
    "wommelgem": Coordinate(51.2036, 4.5230),
    "kontich": Coordinate(51.1348, 4.4449),
    "sint-niklaas": Coordinate(51.1656, 4.1404),
    "roeselare": Coordinate(50.9429, 3.1245),
    "waregem": Coordinate(50.8868, 3.4324),
    "malines": Coordinate(51.0259, 4.4776),
    "mechelen": Coordinate(51.0259, 4.4776),
    "aalst": Coordinate(50.9378, 4.0410),
    "oudenaarde": Coordinate(50.8435, 3.6045),
    "lokeren": Coordinate(51.1042, 3.9912),
    "genk": Coordinate(50.9650, 5.5012),
    "hasselt": Coordinate(50.9307, 5.3325),
    "turnhout": Coordinate(51.3217, 4.9448),
    "belsele": Coordinate(51.1472, 4.0822),
    "mouscron": Coordinate(50.7431, 3.2206),
    "lille": Coordinate(50.6292, 3.0573),
    "villeneuve-d'ascq": Coordinate(50.6233, 3.1444),
    # France (north)
    "valenciennes": Coordinate(50.3570, 3.5183),
    "douai": Coordinate(50.3679, 3.0806),
    "arras": Coordinate(50.2910, 2.7775),
    "lens": Coordinate(50.4292, 2.8310),
    "dunkerque": Coordinate(51.0343, 2.3768),
    "calais": Coordinate(50.9513, 1.8587),
    "maubeuge": Coordinate(50.2775, 3.9734),
    "saint-quentin": Coordinate(49.8454, 3.2867),
    "amiens": Coordinate(49.8941, 2.2957),
    "reims": Coordinate(49.2583, 4.0317),
    "charleville-mézières": Coordinate(49.7621, 4.7157),
    "luxembourg": Coordinate(49.6116, 6.1319),
    "aachen": Coordinate(50.7753, 6.0839),
    # Netherlands (south)
    "maastricht": Coordinate(50.8514, 5.6910),
    "eindhoven": Coordinate(51.4416, 5.4697),
    "breda": Coordinate(51.5719, 4.7683),
    "tilburg": Coordinate(51.5555, 5.0913),
}


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance on a 6371 km sphere."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class GeoResolver:
    """Maps location text to a known city and measures distance from home.

    Lookup: remote marker -> 0 km; exact key; otherwise the first table key
    (insertion order) contained in the text. No match -> UNKNOWN_DISTANCE_KM.
    """

    def __init__(
        self,
        home: Coordinate = DEFAULT_HOME,
        cities: Mapping[str, Coordinate] | None = None,
    ) -> None:
        self.home = home
        self.cities: dict[str, Coordinate] = {
            k.lower(): v for k, v in (cities if cities is not None else CITY_COORDINATES).items()
        }

    def resolve(self, location: str) -> Coordinate | None:
        text = (location or "").lower().strip()
        if not text:
            return None
        if text in self.cities:
            return self.cities[text]
        for city, coord in self.cities.items():
            if city in text:
                return coord
        return None

    def distance_from_home(self, location: str) -> float:
        text = (location or "").lower()
        if any(marker in text for marker in REMOTE_MARKERS):
            return 0.0
        coord = self.resolve(text)
        if coord is None:
            log.debug("Unmatched location %r — treated as out of range", location)
            return UNKNOWN_DISTANCE_KM
        return haversine_km(self.home, coord)
