"""Configuration — environment variables and manufacturing constants."""
import os

# Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8420"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://localhost:8420").split(",")
    if o.strip()
]

# === DEFAULT BOX (outer dimensions) ===
DEFAULT_HEIGHT = 52.0        # [mm]
DEFAULT_WIDTH = 80.0         # [mm]
DEFAULT_DEPTH = 60.0         # [mm]
DEFAULT_RADIUS = 6.0         # [mm]
DEFAULT_WALL = 2.0           # [mm]
DEFAULT_BOTTOM = 3.0         # [mm]

MIN_SIZE = 20.0              # [mm] height/width/depth lower bound
MAX_SIZE = 256.0             # [mm] height/width/depth upper bound

# === CROSS SECTIONS ===
ARC_SEGMENTS = 10            # points per quarter arc = ARC_SEGMENTS + 2

# === CLIPS ===
CLIP_HEIGHT = 12.0           # [mm] extrusion of one clip
CLIP_PITCH = 40.0            # [mm] spacing between clip origins (both axes)
CLIP_PADDING = 5.0           # [mm] keep clips away from the rounded corners
CHAMFER_NORMAL = (0.0, 1.0, 1.0)  # 45 deg trim plane through the clip origin

# === VENT HOLES ===
HOLE_LONG = 7.0              # [mm] hole rectangle, long side
HOLE_SHORT = 3.0             # [mm] hole rectangle, short side
HOLE_TILT = 45.0             # [deg] in-plane rotation, prints without bridging
EDGE_CLEARANCE = 3.0         # [mm] hole to face edge
MIN_GAP = 4.0                # [mm] between adjacent holes
GAP_STEP = 1.0               # [mm] gap growth while over the axis cap
MAX_GAP = 30.0               # [mm] stop growing the gap past this
MAX_AXIS_COUNT = int(os.environ.get("MAX_AXIS_COUNT", "12"))
WALL_OVERSHOOT = 3.0         # [mm] extra hole depth beyond the wall
FACE_OFFSET = 1.0            # [mm] hole prisms start this far outside the face
TOP_OVERSHOOT = 1.0          # [mm] cavity pokes through the open top

# === BOTTOM CUTOUT ===
BOTTOM_MARGIN = 5.0          # [mm] inset from the inner walls
BOTTOM_OVERSHOOT = 0.4       # [mm] below the floor and above it
RIB_WIDTH = 8.0              # [mm]
RIB_COUNT = 1

# === KERNEL ===
TRIM_EXTENT = 1000.0         # [mm] half-space box size for plane trims
PLACEHOLDER_Z = -99999.0     # [mm] where the no-op hole solid is parked
