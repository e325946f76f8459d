"""Lookup tables used by search."""

SEARCH_STOPWORDS = frozenset(
    {
        "parking",
        "park",
        "lot",
        "lots",
        "garage",
        "garages",
        "parkade",
        "parkades",
        "location",
        "locations",
        "spot",
        "spots",
        "near",
        "nearest",
        "find",
        "show",
        "me",
    }
)

NEIGHBOURHOOD_KEYWORDS = (
    "downtown",
    "byward",
    "market",
    "rideau",
    "sparks",
    "bank",
    "somerset",
    "kent",
    "lyon",
    "elgin",
)

# Landmarks and streets resolved without a geocoding call.
KNOWN_ADDRESSES: dict[str, tuple[float, float]] = {
    "819 dynes rd": (45.3234, -75.7845),
    "819 dynes road": (45.3234, -75.7845),
    "100 rideau st": (45.4258, -75.6918),
    "100 rideau street": (45.4258, -75.6918),
    "parliament hill": (45.4236, -75.7005),
    "byward market": (45.4284, -75.6918),
    "university of ottawa": (45.4217, -75.6832),
    "carleton university": (45.3875, -75.6972),
    "ottawa hospital": (45.3834, -75.6478),
    "lansdowne park": (45.3948, -75.6821),
    "td place": (45.3948, -75.6821),
    "canadian tire centre": (45.2967, -75.9267),
    "rideau centre": (45.4258, -75.6918),
    "bayshore shopping centre": (45.3567, -75.7989),
    "st laurent shopping centre": (45.4189, -75.6234),
    "downtown ottawa": (45.4215, -75.6972),
    "sparks street": (45.4214, -75.6981),
    "elgin street": (45.4151, -75.6925),
    "bank street": (45.4098, -75.6889),
    "somerset street": (45.4175, -75.6972),
    "preston street": (45.3989, -75.7012),
    "wellington street": (45.4012, -75.7234),
    "kanata": (45.3234, -75.8967),
    "orleans": (45.4656, -75.5234),
    "nepean": (45.3289, -75.7734),
    "gloucester": (45.4189, -75.6234),
    "vanier": (45.4356, -75.6645),
    "hintonburg": (45.4012, -75.7234),
    "westboro": (45.3689, -75.7642),
    "glebe": (45.4009, -75.6890),
    "sandy hill": (45.4156, -75.6812),
    "centretown": (45.4175, -75.6972),
}

# Forward sortation areas (first three postal code characters).
POSTAL_PREFIXES: dict[str, tuple[float, float]] = {
    "k1p": (45.4215, -75.6972),
    "k1n": (45.4284, -75.6918),
    "k1r": (45.4175, -75.6972),
    "k1s": (45.4009, -75.6890),
    "k1g": (45.4156, -75.6812),
    "k1h": (45.3948, -75.6821),
    "k1j": (45.4189, -75.6234),
    "k1k": (45.4356, -75.6645),
    "k1l": (45.4656, -75.5234),
    "k4a": (45.4756, -75.4834),
    "k1e": (45.3989, -75.6234),
    "k1y": (45.3689, -75.7642),
    "k1z": (45.4012, -75.7234),
    "k2p": (45.3567, -75.7989),
    "k2h": (45.3289, -75.7734),
    "k2j": (45.3234, -75.8967),
    "k2k": (45.3534, -75.9167),
    "k2l": (45.2967, -75.9267),
    "k2g": (45.3612, -75.6834),
    "k1v": (45.3456, -75.7123),
    "k1t": (45.3289, -75.6567),
    "k1w": (45.2967, -75.7234),
    "k4m": (45.2734, -75.7567),
    "k1a": (45.4567, -75.7234),
    "k1m": (45.4789, -75.6789),
    "k4b": (45.5234, -75.6567),
}
