"""Static site copy. Edit text here; data endpoints live in `catalog`."""

from __future__ import annotations

THEME = {
    "primary": "#1565c0",    # TheBus
    "secondary": "#6a1b9a",  # WMATA
    "accent": "#2e7d32",     # Sidewalks
    "highlight": "#ef6c00",  # Bus stops
}

CONTENT = {
    "tagline": "Walkability gaps near schools, bus stops, and services",
    "kicker": "CityLab • Fall 2025",
    "intro": (
        "Residents of Upper Marlboro, MD face inconsistent sidewalk coverage on key corridors. "
        "This site compiles map layers and field findings to prioritize safe, ADA-compliant connections."
    ),
    "about_credit": (
        "Created by Danielle T. Fisher for CityLab — Johns Hopkins Carey Business School & MICA, Fall 2025."
    ),
    "footer": "CityLab • Upper Marlboro Sidewalks • Multipage v1",
}

HOME_PILLS = ["Equity", "Safety", "ADA", "First/Last Mile"]

PROBLEM_STATEMENT = (
    "Inconsistent sidewalks and missing curb ramps force pedestrians (especially students, seniors, "
    "wheelchair users, and bus riders) to walk on roadway shoulders. Several key segments lack continuous, "
    "safe pedestrian routes to schools, government buildings, health providers, and bus stops."
)

PROBLEM_BULLETS = [
    "Gaps on primary corridors (e.g., Old Marlboro Pike & Old Crain Hwy).",
    "Limited crossing protection at key intersections.",
    "First/last-mile gaps between homes and transit service.",
]

PROFILES_INTRO = (
    "Personas illustrate lived experiences based on field observation and adult interviews. "
    "The child perspective is included with a parent and does not involve direct child interviews."
)

PROFILES = [
    {
        "title": "Tanya (36, Nurse) + Kayla (11, Student)",
        "body": (
            "Morning drop-offs happen along a busy two-lane corridor without sidewalks. To reach the school "
            "bus stop, Kayla walks the grassy edge or cuts across yards. Tanya worries about speeding drivers "
            "and limited sightlines."
        ),
        "items": [
            ("Route", "Old Marlboro Pike → nearest bus stop"),
            ("Barrier", "No sidewalk/curb; narrow shoulder"),
            ("Design need", "Continuous sidewalk + RRFB crossing"),
        ],
    },
    {
        "title": "Ms. Gloria (69, Retired Postal Worker)",
        "body": (
            "Uses a cane and avoids dusk trips because of uneven edges and missing curb ramps. Reaching the "
            "nearest stop requires walking in the travel lane for ~200 ft."
        ),
        "items": [
            ("Route", "Residential loop → Old Crain Hwy"),
            ("Barrier", "Missing curb ramps"),
            ("Design need", "ADA ramps + sidewalk infill"),
        ],
    },
    {
        "title": "Derrick (42, Delivery Driver)",
        "body": (
            "Parks legally but must walk along shoulders to reach storefronts. Trucks and buses encroach on "
            "the edge where pedestrians walk."
        ),
        "items": [
            ("Route", "Downtown errands around Water St"),
            ("Barrier", "No continuous pedestrian zone"),
            ("Design need", "Sidewalk + curb extensions"),
        ],
    },
    {
        "title": "Marcus (33, County Employee)",
        "body": (
            "Uses TheBus to connect to Metro. First/last-mile gaps add 10 minutes and force unsafe crossings "
            "to reach the stop."
        ),
        "items": [
            ("Route", "Home → TheBus stop → Largo Town Center"),
            ("Barrier", "Discontinuous sidewalks"),
            ("Design need", "Fill gaps + align stops with crossings"),
        ],
    },
    {
        "title": "Renee (28, Retail)",
        "body": (
            "Walks with stroller to daycare. Sloped shoulders and puddling after rain make the route impassable."
        ),
        "items": [
            ("Route", "Apartment cluster → daycare"),
            ("Barrier", "No sidewalk; drainage issues"),
            ("Design need", "Sidewalk with proper grading + inlet"),
        ],
    },
    {
        "title": "Mr. James (71, Veteran)",
        "body": "Uses a mobility scooter; uneven edges and missing curb cuts force detours in the road.",
        "items": [
            ("Route", "Home → clinic → grocery"),
            ("Barrier", "No curb cuts"),
            ("Design need", "ADA curb ramps + clear width"),
        ],
    },
]

METHODS = {
    "Scope": (
        "We mapped sidewalk coverage, bus routes/stops (TheBus 2025 & WMATA 2025), schools, and grocery "
        "access for Upper Marlboro, MD. We computed walking distances and first/last-mile conditions to "
        "essential destinations."
    ),
    "Sources": (
        "Official county/state feature services and agency pages. Each map layer and statement references "
        "the numbered source on the Sources page."
    ),
    "Method": (
        "Layers are requested as live GeoJSON from ArcGIS Feature/Map Services when available. For walk "
        "metrics, we apply a standard 5 km/h walking speed and measure distance to nearest bus stop, school "
        "entrance, and grocery point. ADA considerations (curb ramps, detectable warnings) inform gap scoring."
    ),
}

# Metrics are not computed; values stay as placeholders.
KPI_PLACEHOLDERS = [
    {"label": "% corridor without sidewalks (study area)", "value": "—", "footnote": "[1]"},
    {"label": "# bus stops lacking sidewalk within 100 ft", "value": "—", "footnote": "[2][3]"},
    {"label": "Median walk to nearest grocery", "value": "—", "footnote": "[4]"},
]

COMPARE = {
    "title": "Comparison Neighborhood: Edgewater, MD (Income/Scale Match)",
    "body": (
        "To contextualize Upper Marlboro's walkability gaps, we mirror the same measures in a predominantly "
        "white, similar-income community: **Edgewater, MD**. This page will replicate sidewalk coverage, "
        "transit access, and access to groceries/schools using comparable data sources."
    ),
    "placeholder": (
        "(Placeholder) Add Edgewater layers here using the same endpoints and methods for an "
        "apples-to-apples comparison."
    ),
    "pills": ["Income Parity", "Demographic Contrast", "Method Match"],
}

VIDEO_PLACEHOLDER = "Embed your Loom/YouTube link here"

ABOUT_NOTE = (
    "This site is an academic visualization. Child perspectives are represented ethically via parent/guardian "
    "interviews and direct observation; no minors were interviewed directly."
)

SOURCES = [
    {
        "title": "Sidewalks",
        "detail": "Prince George's County DPW&T `transportation/Sidewalks` MapServer (live GeoJSON query).",
        "retrieved": "Nov 4, 2025",
        "link_label": "REST",
        "url": "https://gis.princegeorgescountymd.gov/arcgis/rest/services/transportation/Sidewalks/MapServer/0",
    },
    {
        "title": "TheBus Summer 2025",
        "detail": "Stops & Routes FeatureServer (live GeoJSON).",
        "retrieved": "Nov 4, 2025",
        "link_label": "REST",
        "url": "https://gis.princegeorgescountymd.gov/arcgis/rest/services/dpwt/BUS_STOP_ROUTE_SUMMER2025/FeatureServer/layers",
    },
    {
        "title": "WMATA Major Bus Routes",
        "detail": "FeatureServer Layer 17 (live GeoJSON).",
        "retrieved": "Nov 4, 2025",
        "link_label": "REST",
        "url": "https://services2.arcgis.com/2NBEaAVPObxRmRog/ArcGIS/rest/services/WMATA_Rail_Map_WFL1/FeatureServer/17",
    },
    {
        "title": "Grocery Stores",
        "detail": "Prince George's County Business MapServer Layer 7 (live GeoJSON).",
        "retrieved": "Nov 4, 2025",
        "link_label": "REST",
        "url": "https://gis.princegeorgescountymd.gov/arcgis/rest/services/Business/Businesses/MapServer/7",
    },
    {
        "title": "PGCPS School Locations",
        "detail": "FeatureServer (live GeoJSON).",
        "retrieved": "Nov 4, 2025",
        "link_label": "REST",
        "url": "https://services1.arcgis.com/qTQ6qYkHpxlu0G82/arcgis/rest/services/PGCPS_School_Locations/FeatureServer/0",
    },
    {
        "title": "Metrorail Hours (not 24/7)",
        "detail": "WMATA.",
        "retrieved": "Nov 4, 2025",
        "link_label": "WMATA Rail Hours",
        "url": "https://www.wmata.com/service/rail/",
    },
    {
        "title": "Call-A-Bus Service Window",
        "detail": "Prince George's County DPW&T.",
        "retrieved": "Nov 4, 2025",
        "link_label": "Call-A-Bus",
        "url": "https://www.princegeorgescountymd.gov/departments-offices/public-works-transportation/metro-and-transportation/call-bus",
    },
    {
        "title": "TheBus Redesign 2025",
        "detail": "County landing page.",
        "retrieved": "Nov 4, 2025",
        "link_label": "TheBus 2025",
        "url": "https://www.princegeorgescountymd.gov/departments-offices/thebus-new-routes-2025",
    },
]

SOURCES_FOOTNOTE = (
    "Each interactive layer on the Maps page is loaded directly from the listed REST services using GeoJSON "
    "queries with WGS84 (EPSG:4326)."
)
