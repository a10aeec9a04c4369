"""
Constants and fixed parameters for TileRenderer package.

This module defines the property-code table consumed by the classifier,
terrain categories and their stacking priorities, the fixed priorities of
the other shape variants, and the styling constants used by the compositor.
"""

from enum import Enum, IntEnum

# ============================================================================
# Property Codes
# ============================================================================


class PropertyCode(IntEnum):
    """Numeric property codes carried by feature records.

    Codes are unsigned 16-bit values. Members that the classifier tests as a
    range (natural plains, rocks, place sizes) are declared contiguously and
    must stay that way.
    """

    NAME = 1

    # https://wiki.openstreetmap.org/wiki/Key:boundary
    BADMINISTRATIVE = 100
    BFOREST = 101

    # https://wiki.openstreetmap.org/wiki/Key:admin_level
    A2 = 110
    A4 = 111
    A6 = 112
    A8 = 113

    # https://wiki.openstreetmap.org/wiki/Key:place (largest to smallest)
    PCITY = 200
    PTOWN = 201
    PVILLAGE = 202
    PHAMLET = 203
    PLOCALITY = 204
    PISOLATED_DWELLING = 205

    # https://wiki.openstreetmap.org/wiki/Key:natural
    NFELL = 300
    NGRASSLAND = 301
    NHEATH = 302
    NMOOR = 303
    NSCRUB = 304
    NWETLAND = 305
    NWOOD = 306
    NTREE_ROW = 307
    NBARE_ROCK = 308
    NROCK = 309
    NSCREE = 310
    NBEACH = 311
    NSAND = 312
    NWATER = 313
    NPEAK = 314
    NCLIFF = 315

    # https://wiki.openstreetmap.org/wiki/Key:landuse
    LFOREST = 400
    LORCHARD = 401
    LRESIDENTIAL = 402
    LCEMETERY = 403
    LINDUSTRIAL = 404
    LCOMMERCIAL = 405
    LSQUARE = 406
    LCONSTRUCTION = 407
    LMILITARY = 408
    LQUARRY = 409
    LBROWNFIELD = 410
    LFARM = 411
    LMEADOW = 412
    LGRASS = 413
    LGREENFIELD = 414
    LRECREATION_GROUND = 415
    LWINTER_SPORTS = 416
    LALLOTMENTS = 417
    LRESERVOIR = 418
    LBASIN = 419

    BUILDING = 500
    AMENITY = 501

    # Feature-type tags (https://wiki.openstreetmap.org/wiki/Key:highway)
    HMOTORWAY = 600
    HTRUNK = 601
    HPRIMARY = 602
    HSECONDARY = 603
    HTERTIARY = 604
    HUNCLASSIFIED = 605
    HRESIDENTIAL = 606
    HROAD = 607

    # https://wiki.openstreetmap.org/wiki/Key:waterway
    WRIVER = 700
    WSTREAM = 701
    WCANAL = 702
    WDRAIN = 703

    # https://wiki.openstreetmap.org/wiki/Key:railway
    RRAIL = 800
    RLIGHT_RAIL = 801
    RSUBWAY = 802
    RTRAM = 803


MAX_PROPERTY_CODE = 0xFFFF

HIGHWAY_CODES = frozenset({
    PropertyCode.HMOTORWAY,
    PropertyCode.HTRUNK,
    PropertyCode.HPRIMARY,
    PropertyCode.HSECONDARY,
    PropertyCode.HTERTIARY,
    PropertyCode.HUNCLASSIFIED,
    PropertyCode.HRESIDENTIAL,
    PropertyCode.HROAD,
})

WATERWAY_CODES = frozenset({
    PropertyCode.WRIVER,
    PropertyCode.WSTREAM,
    PropertyCode.WCANAL,
    PropertyCode.WDRAIN,
})

RAILWAY_CODES = frozenset({
    PropertyCode.RRAIL,
    PropertyCode.RLIGHT_RAIL,
    PropertyCode.RSUBWAY,
    PropertyCode.RTRAM,
})

# ============================================================================
# Terrain Categories and Stacking Priorities
# ============================================================================


class TerrainCategory(Enum):
    PLAIN = "plain"
    HILLS = "hills"
    MOUNTAINS = "mountains"
    FOREST = "forest"
    DESERT = "desert"
    UNKNOWN = "unknown"
    WATER = "water"
    RESIDENTIAL = "residential"


TERRAIN_PRIORITIES = {
    TerrainCategory.PLAIN: 10,
    TerrainCategory.HILLS: 12,
    TerrainCategory.MOUNTAINS: 13,
    TerrainCategory.FOREST: 11,
    TerrainCategory.DESERT: 9,
    TerrainCategory.UNKNOWN: 8,
    TerrainCategory.WATER: 40,
    TerrainCategory.RESIDENTIAL: 41,
}

BORDER_PRIORITY = 30
WATERWAY_PRIORITY = 40
RAILWAY_PRIORITY = 45
ROAD_PRIORITY = 50
SETTLEMENT_PRIORITY = 60

UNKNOWN_SETTLEMENT_NAME = "Unknown"

# ============================================================================
# Styling Constants
# ============================================================================

TERRAIN_COLORS = {
    TerrainCategory.PLAIN: "lightgreen",
    TerrainCategory.HILLS: "darkgreen",
    TerrainCategory.MOUNTAINS: "lightgray",
    TerrainCategory.FOREST: "green",
    TerrainCategory.DESERT: "sandybrown",
    TerrainCategory.UNKNOWN: "magenta",
    TerrainCategory.WATER: "lightblue",
    TerrainCategory.RESIDENTIAL: "lightcoral",
}
TERRAIN_LINEWIDTH = 1.2

# Railway: solid backing line with a dashed line on top
RAILWAY_BASE_COLOR = "darkgray"
RAILWAY_BASE_LINEWIDTH = 2.0
RAILWAY_DASH_COLOR = "lightgray"
RAILWAY_DASH_LINEWIDTH = 1.2
RAILWAY_DASH_PATTERN = (2.0, 4.0)

BORDER_COLOR = "gray"
BORDER_LINEWIDTH = 2.0

WATERWAY_COLOR = "lightblue"
WATERWAY_LINEWIDTH = 1.2

# Road: wider under-color, narrower top color
ROAD_EDGE_COLOR = "yellow"
ROAD_EDGE_LINEWIDTH = 2.2
ROAD_COLOR = "coral"
ROAD_LINEWIDTH = 2.0
