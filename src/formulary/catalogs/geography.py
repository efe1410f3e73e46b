"""Geography and navigation calculators.

Spherical-earth formulas (haversine distance, initial bearing, destination
point) use a mean earth radius of 6371 km.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, MultiModeCalculator, Result
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import bars, diagram, fmt, mode, num, to_deg, to_rad

EARTH_RADIUS_KM: Final[float] = 6371.0
KM_TO_MI: Final[float] = 0.621371
KM_TO_NM: Final[float] = 0.539957
TAXI_OVERHEAD_HOURS: Final[float] = 0.5

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points given in decimal degrees."""
    d_lat = to_rad(lat2 - lat1)
    d_lon = to_rad(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(to_rad(lat1)) * math.cos(to_rad(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial compass bearing in degrees [0, 360) from point 1 to point 2."""
    d_lon = to_rad(lon2 - lon1)
    y = math.sin(d_lon) * math.cos(to_rad(lat2))
    x = math.cos(to_rad(lat1)) * math.sin(to_rad(lat2)) - math.sin(to_rad(lat1)) * math.cos(
        to_rad(lat2)
    ) * math.cos(d_lon)
    return (to_deg(math.atan2(y, x)) + 360) % 360


def to_dms(degrees: float, is_latitude: bool) -> str:
    """Render decimal degrees as degrees, minutes, seconds with a hemisphere."""
    absolute = abs(degrees)
    whole = math.floor(absolute)
    minutes_float = (absolute - whole) * 60
    minutes = math.floor(minutes_float)
    seconds = (minutes_float - minutes) * 60
    if degrees >= 0:
        hemisphere = "N" if is_latitude else "E"
    else:
        hemisphere = "S" if is_latitude else "W"
    return f"{whole}° {minutes}' {seconds:.2f}\" {hemisphere}"


def _split_hours(hours: float) -> tuple[int, int]:
    total_minutes = round(hours * 60)
    return divmod(total_minutes, 60)


@formula("lat-long-conv.dms")
def _dd_to_dms(v: Inputs) -> Result:
    return Result(
        value=f"{to_dms(v['lat'], True)}, {to_dms(v['lon'], False)}",
        unit="DMS",
        steps=(
            f"Lat: {math.floor(abs(v['lat']))}° + {fmt(abs(v['lat']) % 1 * 60)}'",
            f"Lon: {math.floor(abs(v['lon']))}° + {fmt(abs(v['lon']) % 1 * 60)}'",
        ),
        diagram=diagram(DiagramKind.GLOBE, {"lat": v["lat"], "lon": v["lon"]}),
    )


@formula("great-circle.dist")
def _great_circle(v: Inputs) -> Result:
    km = haversine_km(v["lat1"], v["lon1"], v["lat2"], v["lon2"])
    return Result(
        value=km,
        unit="km",
        steps=(
            "Used Haversine Formula",
            "d = 2R × asin(√a)",
            f"Radius R = {EARTH_RADIUS_KM:g} km",
            f"{km:.1f} km / {km * KM_TO_MI:.1f} mi / {km * KM_TO_NM:.1f} NM",
        ),
        diagram=diagram(
            DiagramKind.GLOBE,
            {
                "lat1": v["lat1"],
                "lon1": v["lon1"],
                "lat2": v["lat2"],
                "lon2": v["lon2"],
                "path": True,
            },
        ),
    )


@formula("elevation-change.grade")
def _grade(v: Inputs) -> Result:
    grade = v["rise"] / v["dist"] * 100
    angle = to_deg(math.atan(v["rise"] / v["dist"]))
    return Result(
        value=grade,
        unit="%",
        steps=(
            "Grade = (Rise / Run) × 100",
            f"Grade = ({fmt(v['rise'])} / {fmt(v['dist'])}) × 100",
            f"Angle = {angle:.1f}°",
        ),
        diagram=diagram(DiagramKind.ELEVATION, {"run": v["dist"], "rise": v["rise"]}),
    )


@formula("initial-bearing.bearing")
def _bearing(v: Inputs) -> Result:
    bearing = initial_bearing(v["lat1"], v["lon1"], v["lat2"], v["lon2"])
    return Result(
        value=bearing,
        unit="°",
        steps=(
            "Formula: θ = atan2(sin(Δλ)cos(φ₂),"
            " cos(φ₁)sin(φ₂) − sin(φ₁)cos(φ₂)cos(Δλ))",
            "Result normalized to 0-360°",
        ),
        diagram=diagram(DiagramKind.COMPASS, {"heading": bearing}),
    )


@formula("destination-point.dest")
def _destination(v: Inputs) -> Result:
    lat1 = to_rad(v["lat"])
    lon1 = to_rad(v["lon"])
    bearing = to_rad(v["brg"])
    angular = v["dist"] / EARTH_RADIUS_KM
    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular)
        + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    )
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )
    lat2_deg, lon2_deg = to_deg(lat2), to_deg(lon2)
    return Result(
        value=f"{lat2_deg:.4f}, {lon2_deg:.4f}",
        unit="Lat, Lon",
        steps=("Used spherical law of cosines derived formula",),
        diagram=diagram(
            DiagramKind.GLOBE,
            {"lat1": v["lat"], "lon1": v["lon"], "lat2": lat2_deg, "lon2": lon2_deg, "path": True},
        ),
    )


@formula("slope-correction.hd")
def _slope_correction(v: Inputs) -> Result:
    rad = to_rad(v["va"])
    hd = v["sd"] * math.cos(rad)
    vd = v["sd"] * math.sin(rad)
    return Result(
        value=hd,
        unit="m",
        steps=(
            "HD = SD × cos(α)",
            f"HD = {fmt(v['sd'])} × cos({fmt(v['va'])}°)",
            f"VD = {fmt(v['sd'])} × sin({fmt(v['va'])}°) = {vd:.2f} m",
        ),
        diagram=diagram(
            DiagramKind.TRIANGLE, {"sd": v["sd"], "hd": hd, "vd": vd, "angle": v["va"]}
        ),
    )


@formula("leveling.elev")
def _leveling(v: Inputs) -> Result:
    height_of_instrument = v["bm"] + v["bs"]
    elevation = height_of_instrument - v["fs"]
    return Result(
        value=elevation,
        unit="m",
        steps=(
            f"HI = BM + BS = {fmt(v['bm'])} + {fmt(v['bs'])} = {height_of_instrument:.3f}",
            f"Elev = HI - FS = {height_of_instrument:.3f} - {fmt(v['fs'])}",
        ),
        diagram=diagram(
            DiagramKind.LEVELING,
            {"bm": v["bm"], "bs": v["bs"], "fs": v["fs"], "elev": elevation},
        ),
    )


@formula("solar-position.pos")
def _solar_elevation(v: Inputs) -> Result:
    """Approximate solar elevation angle.

    Uses the simple cosine declination model and ignores the equation of
    time and longitude within the time zone.
    """
    declination = 23.45 * math.sin(to_rad(360 / 365 * (v["day"] - 81)))
    hour_angle = 15 * (v["hour"] - 12)
    elevation = to_deg(
        math.asin(
            math.sin(to_rad(v["lat"])) * math.sin(to_rad(declination))
            + math.cos(to_rad(v["lat"]))
            * math.cos(to_rad(declination))
            * math.cos(to_rad(hour_angle))
        )
    )
    return Result(
        value=elevation,
        unit="°",
        steps=(
            f"Declination approx: {declination:.2f}°",
            f"Hour Angle: {hour_angle:.1f}°",
        ),
        diagram=diagram(DiagramKind.SUN_PATH, {"elevation": elevation, "hour": v["hour"]}),
    )


@formula("flight-time.time")
def _flight_time(v: Inputs) -> Result:
    total = v["dist"] / v["speed"] + TAXI_OVERHEAD_HOURS
    hours, minutes = _split_hours(total)
    return Result(
        value=total,
        unit="h",
        steps=(
            "Time = Distance / Speed",
            "+ 30 mins overhead for taxi/takeoff",
            f"Approx duration: {hours}h {minutes}m",
        ),
        diagram=diagram(
            DiagramKind.GLOBE, {"path": True, "lat1": 40, "lon1": -74, "lat2": 51, "lon2": 0}
        ),
    )


@formula("wind-correction.wca")
def _wind_correction(v: Inputs) -> Result:
    relative_wind = to_rad(v["windDir"] - v["course"])
    wca_rad = math.asin(v["windSpd"] * math.sin(relative_wind) / v["tas"])
    wca = to_deg(wca_rad)
    ground_speed = v["tas"] * math.cos(wca_rad) + v["windSpd"] * math.cos(relative_wind)
    return Result(
        value=v["course"] + wca,
        unit="°",
        steps=(
            f"WCA: {'+' if wca > 0 else ''}{wca:.1f}°",
            f"Ground Speed: {ground_speed:.1f} kts",
        ),
        diagram=diagram(
            DiagramKind.WIND, {"course": v["course"], "wca": wca, "windDir": v["windDir"]}
        ),
    )


@formula("eta-calculator.eta")
def _eta(v: Inputs) -> Result:
    duration = v["dist"] / v["speed"]
    hours, minutes = _split_hours((v["start"] + duration) % 24)
    return Result(
        value=f"{hours % 24:02d}:{minutes:02d}",
        unit="Arrival Time",
        steps=(f"Duration: {duration:.2f} hours",),
        diagram=bars(("Hours", duration, "#3b82f6")),
    )


COORDINATES = "Coordinates"
DISTANCE = "Distance & Area"
BEARING = "Bearing & Direction"
SURVEYING = "Surveying"
SOLAR = "Time & Solar"
TRAVEL = "Travel & Nav"


def _calc(
    calc_id: str, title: str, category: str, description: str, icon: str, *modes: Any
) -> MultiModeCalculator:
    return MultiModeCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.GEOGRAPHY,
        description=description,
        icon=icon,
        solve_modes=modes,
    )


# fmt: off
CALCULATORS: Final[tuple[MultiModeCalculator, ...]] = (
    _calc(
        "lat-long-conv", "Lat/Long Converter", COORDINATES,
        "Convert Decimal Degrees to DMS.", "globe",
        mode(
            "lat-long-conv", "dms", "DD to DMS",
            num("lat", "Latitude (DD)", "°", 40.7128),
            num("lon", "Longitude (DD)", "°", -74.0060),
        ),
    ),
    _calc(
        "great-circle", "Great Circle Distance", DISTANCE,
        "Shortest path between two points.", "map",
        mode(
            "great-circle", "dist", "Calculate Distance",
            num("lat1", "Point A Lat", "°", 40.7128),
            num("lon1", "Point A Lon", "°", -74.0060),
            num("lat2", "Point B Lat", "°", 51.5074),
            num("lon2", "Point B Lon", "°", -0.1278),
        ),
    ),
    _calc(
        "elevation-change", "Elevation Calculator", DISTANCE,
        "Grade and elevation gain/loss.", "mountain",
        mode(
            "elevation-change", "grade", "Calculate Grade",
            num("dist", "Horizontal Dist", "m", 1000),
            num("rise", "Vertical Rise", "m", 50),
        ),
    ),
    _calc(
        "initial-bearing", "Initial Bearing", BEARING, "Calculate compass heading.", "compass",
        mode(
            "initial-bearing", "bearing", "Calculate Bearing",
            num("lat1", "Start Lat", "°", 34.0522),
            num("lon1", "Start Lon", "°", -118.2437),
            num("lat2", "End Lat", "°", 40.7128),
            num("lon2", "End Lon", "°", -74.0060),
        ),
    ),
    _calc(
        "destination-point", "Destination Point", BEARING,
        "Find coords given dist & bearing.", "navigation",
        mode(
            "destination-point", "dest", "Find Destination",
            num("lat", "Start Lat", "°", 51.5074),
            num("lon", "Start Lon", "°", -0.1278),
            num("brg", "Bearing", "°", 90),
            num("dist", "Distance", "km", 100),
        ),
    ),
    _calc(
        "slope-correction", "Slope Correction", SURVEYING,
        "Convert slope distance to horizontal.", "ruler",
        mode(
            "slope-correction", "hd", "Horizontal Distance",
            num("sd", "Slope Dist", "m", 100),
            num("va", "Vertical Angle", "°", 5),
        ),
    ),
    _calc(
        "leveling", "Differential Leveling", SURVEYING,
        "Calculate elevation from rod readings.", "ruler",
        mode(
            "leveling", "elev", "Find Elevation",
            num("bm", "Benchmark Elev", "m", 100),
            num("bs", "Backsight (+)", "m", 1.5),
            num("fs", "Foresight (-)", "m", 1.2),
        ),
    ),
    _calc(
        "solar-position", "Solar Position", SOLAR, "Sun elevation and azimuth.", "sun",
        mode(
            "solar-position", "pos", "Calculate Position",
            num("lat", "Latitude", "°", 40.7),
            num("hour", "Hour (24h)", "", 12, 0, 23),
            num("day", "Day of Year", "", 180, 1, 365),
        ),
    ),
    _calc(
        "flight-time", "Flight Estimator", TRAVEL, "Est. flight time between cities.", "plane",
        mode(
            "flight-time", "time", "Flight Time",
            num("dist", "Distance", "km", 5800),
            num("speed", "Speed", "km/h", 900),
        ),
    ),
    _calc(
        "wind-correction", "Wind Correction", TRAVEL,
        "Calculate heading and ground speed.", "wind",
        mode(
            "wind-correction", "wca", "Calculate WCA",
            num("course", "True Course", "°", 90),
            num("tas", "True Airspeed", "kn", 150),
            num("windDir", "Wind Direction", "°", 45),
            num("windSpd", "Wind Speed", "kn", 20),
        ),
    ),
    _calc(
        "eta-calculator", "ETA Calculator", TRAVEL, "Arrival time based on speed.", "clock",
        mode(
            "eta-calculator", "eta", "Calculate ETA",
            num("dist", "Distance", "km", 200),
            num("speed", "Speed", "km/h", 100),
            num("start", "Start Hour", "", 14, 0, 23),
        ),
    ),
)
# fmt: on


def register_geography_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all geography calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
