"""Shape the backend's pre-aggregated statistics into DataFrames.

Nothing is aggregated here: the backend already did the work. These
helpers only normalise column names and types so the charts can rely on
them, and tolerate sections the backend leaves out.
"""

import pandas as pd

SUMMARY_FIELDS = {
    "totalFlights": "total_flights",
    "avgDepDelay": "avg_dep_delay",
    "avgArrDelay": "avg_arr_delay",
    "avgAirTime": "avg_air_time",
    "avgDistance": "avg_distance",
    "onTimePercentage": "on_time_pct",
}


def _frame(rows, columns, numeric=()):
    """DataFrame with exactly ``columns`` (camelCase API keys -> snake_case)."""
    df = pd.DataFrame(rows or [])
    df = df.reindex(columns=list(columns.keys()))
    df = df.rename(columns=columns)
    for col in numeric:
        df[col] = pd.to_numeric(df[col], errors="coerce")
    return df


def _rows(payload, key):
    if isinstance(payload, dict):
        return payload.get(key) or []
    return []


# =========================
# FLIGHT STATS
# =========================
def summary(payload):
    source = (payload.get("summary") or payload) if isinstance(payload, dict) else {}
    out = {}
    for api_key, name in SUMMARY_FIELDS.items():
        value = pd.to_numeric(source.get(api_key), errors="coerce")
        out[name] = 0 if pd.isna(value) else value
    return out


# =========================
# DELAY ANALYSIS
# =========================
def delay_frames(payload):
    monthly = _frame(
        _rows(payload, "monthly"),
        {"month": "month", "depDelay": "dep_delay", "arrDelay": "arr_delay"},
        numeric=("dep_delay", "arr_delay"),
    )
    distribution = _frame(
        _rows(payload, "distribution"),
        {"range": "range", "count": "count"},
        numeric=("count",),
    )
    return monthly, distribution


# =========================
# AIRLINE COMPARISON
# =========================
def airline_frames(payload):
    rows = payload if isinstance(payload, list) else _rows(payload, "airlines")
    airlines = _frame(
        rows,
        {
            "airline": "airline",
            "flights": "flights",
            "onTime": "on_time",
            "avgDelay": "avg_delay",
            "avgDistance": "avg_distance",
        },
        numeric=("flights", "on_time", "avg_delay", "avg_distance"),
    )

    top = airlines.head(5)
    performance = pd.DataFrame({
        "airline": top["airline"].fillna("").astype(str).str.split(" ").str[0],
        "punctuality": top["on_time"],
        "efficiency": 100 - top["avg_delay"] * 2,
        "volume": top["flights"] / 1500,
        "satisfaction": top["on_time"] - 5,
    })
    return airlines, performance


# =========================
# POPULAR ROUTES
# =========================
def route_frames(payload):
    top_routes = _frame(
        _rows(payload, "topRoutes"),
        {
            "route": "route",
            "flights": "flights",
            "avgDelay": "avg_delay",
            "distance": "distance",
            "onTimeRate": "on_time_rate",
        },
        numeric=("flights", "avg_delay", "distance", "on_time_rate"),
    )
    categories = _frame(
        _rows(payload, "distanceCategories"),
        {"category": "category", "flights": "flights", "value": "value"},
        numeric=("flights", "value"),
    )
    return top_routes, categories


# =========================
# TIME ANALYSIS
# =========================
def time_frames(payload):
    hourly = _frame(
        _rows(payload, "hourly"),
        {"hour": "hour", "departures": "departures", "arrivals": "arrivals", "delay": "delay"},
        numeric=("departures", "arrivals", "delay"),
    )
    weekly = _frame(
        _rows(payload, "weekly"),
        {"day": "day", "flights": "flights", "avgDelay": "avg_delay", "onTime": "on_time"},
        numeric=("flights", "avg_delay", "on_time"),
    )

    peaks = {"departure": "", "arrival": ""}
    if not hourly.empty:
        if hourly["departures"].notna().any():
            peaks["departure"] = hourly.loc[hourly["departures"].idxmax(), "hour"]
        if hourly["arrivals"].notna().any():
            peaks["arrival"] = hourly.loc[hourly["arrivals"].idxmax(), "hour"]
    return hourly, weekly, peaks
