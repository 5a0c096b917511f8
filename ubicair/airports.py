"""Static airport coordinates used to point plane icons at their destination."""

from types import MappingProxyType

AIRPORTS = MappingProxyType({
    "MAD": (40.4719, -3.5626),    # Madrid-Barajas
    "BCN": (41.2971, 2.0785),     # Barcelona-El Prat
    "LHR": (51.4700, -0.4543),    # London Heathrow
    "CDG": (49.0097, 2.5479),     # Paris Charles de Gaulle
    "JFK": (40.6413, -73.7781),   # New York JFK
    "FRA": (50.0379, 8.5622),     # Frankfurt
    "AMS": (52.3105, 4.7683),     # Amsterdam Schiphol
    "FCO": (41.8003, 12.2389),    # Rome Fiumicino
    "DXB": (25.2532, 55.3657),    # Dubai
    "LAX": (33.9416, -118.4085),  # Los Angeles
})
