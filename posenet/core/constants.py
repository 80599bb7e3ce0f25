"""
Global constants for the PoseNet decoder

Includes:
- Body part definitions (17 keypoints)
- Multi-pose traversal tree and rendering skeleton
- Decoding defaults
- Model preprocessing constants
"""

# ===== Body Parts (17 points) =====
PART_NAMES = [
    'nose',             # 0
    'left_eye',         # 1
    'right_eye',        # 2
    'left_ear',         # 3
    'right_ear',        # 4
    'left_shoulder',    # 5
    'right_shoulder',   # 6
    'left_elbow',       # 7
    'right_elbow',      # 8
    'left_wrist',       # 9
    'right_wrist',      # 10
    'left_hip',         # 11
    'right_hip',        # 12
    'left_knee',        # 13
    'right_knee',       # 14
    'left_ankle',       # 15
    'right_ankle',      # 16
]

NUM_KEYPOINTS = len(PART_NAMES)

PART_IDS = {name: part_id for part_id, name in enumerate(PART_NAMES)}

# Parent -> child edges of the pose tree used for multi-pose decoding.
# Edge id is the list index; displacement channels follow this order.
PARENT_CHILD_TUPLES = [
    (0, 1),     # nose -> left_eye
    (1, 3),     # left_eye -> left_ear
    (0, 2),     # nose -> right_eye
    (2, 4),     # right_eye -> right_ear
    (0, 5),     # nose -> left_shoulder
    (5, 7),     # left_shoulder -> left_elbow
    (7, 9),     # left_elbow -> left_wrist
    (5, 11),    # left_shoulder -> left_hip
    (11, 13),   # left_hip -> left_knee
    (13, 15),   # left_knee -> left_ankle
    (0, 6),     # nose -> right_shoulder
    (6, 8),     # right_shoulder -> right_elbow
    (8, 10),    # right_elbow -> right_wrist
    (6, 12),    # right_shoulder -> right_hip
    (12, 14),   # right_hip -> right_knee
    (14, 16),   # right_knee -> right_ankle
]

NUM_EDGES = len(PARENT_CHILD_TUPLES)

# Skeleton - joint pairs connected when rendering a pose
SKELETON_JOINT_PAIRS = [
    # Head
    (0, 1), (0, 2), (1, 3), (2, 4),
    # Torso
    (5, 6), (5, 11), (6, 12), (5, 12), (6, 11), (11, 12),
    # Arms
    (5, 7), (7, 9), (6, 8), (8, 10),
    # Legs
    (11, 13), (13, 15), (12, 14), (14, 16),
]

# ===== Decoding Defaults =====
# Radius of the window used to find local maxima in the heatmaps
LOCAL_MAXIMUM_RADIUS = 1

DEFAULT_SCORE_THRESHOLD = 0.25
DEFAULT_NMS_RADIUS = 100
DEFAULT_MAX_POSES = 20
MAX_POSE_DETECTIONS_LIMIT = 20
DEFAULT_MIN_CONFIDENCE = 0.7

# Stride is rounded down to a multiple of this value
STRIDE_MULTIPLE = 8

# ===== Model Definitions =====
MODEL_TYPES = ['mobilenet', 'resnet50']
ESTIMATION_TYPES = ['single', 'multi']

# Index of the forward/backward displacement layers in the raw model outputs
DISPLACEMENT_LAYER_ORDER = {
    'mobilenet': {'fwd': 2, 'bwd': 3},
    'resnet50': {'fwd': 3, 'bwd': 2},
}

OUTPUT_KEYS = ['heatmaps', 'offsets', 'displacement_fwd', 'displacement_bwd']
RAW_LAYER_KEYS = ['output_0', 'output_1', 'output_2', 'output_3']

# ===== Preprocessing =====
# Per-channel RGB means subtracted by the ResNet50 model
RESNET_MEAN = (123.15, 115.90, 103.06)
MIN_INPUT_DIM = 64
DEFAULT_INPUT_DIMS = (256, 256)  # (width, height)

# CSV column names
CSV_POSE_COLUMNS = [
    'image_name', 'frame', 'pose_id', 'pose_score'
] + [f'{part}_{coord}' for part in PART_NAMES for coord in ['x', 'y', 'conf']]
