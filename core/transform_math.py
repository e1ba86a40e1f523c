#!/usr/bin/env python3
"""
Transform Math Module
Point/vector transforms and quaternion decomposition built on NumPy.

Quaternions are stored (x, y, z, w). Euler angles follow the host engine
convention: rotation applied Z, then X, then Y, returned in degrees wrapped
to [0, 360).
"""

import numpy as np

# Mirror X to swap handedness (left-handed Y-up -> right-handed Y-up)
UNITY_TO_MAYA = np.diag([-1.0, 1.0, 1.0, 1.0])

IDENTITY = np.identity(4)

# |sin(pitch)| above this is treated as gimbal lock
_GIMBAL_THRESHOLD = 0.9999


def as_matrix(matrix):
    """Coerce a 4x4 nested sequence (or None) to a float64 array

    Raises:
        ValueError: If the input is not 4x4
    """
    if matrix is None:
        return IDENTITY.copy()
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (4, 4):
        raise ValueError(f"Transform must be 4x4, got shape {m.shape}")
    return m


def transform_points(points, matrix):
    """Apply an affine transform to an (N, 3) array of positions"""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    m = as_matrix(matrix)
    return pts @ m[:3, :3].T + m[:3, 3]


def transform_vectors(vectors, matrix):
    """Apply the linear part of a transform (no translation) to (N, 3) vectors"""
    vecs = np.asarray(vectors, dtype=np.float64).reshape(-1, 3)
    m = as_matrix(matrix)
    return vecs @ m[:3, :3].T


def quaternion_to_matrix(quat):
    """Build a 3x3 rotation matrix from an (x, y, z, w) quaternion"""
    q = np.asarray(quat, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm > 0:
        q = q / norm
    x, y, z, w = q

    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
        [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
        [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
    ])


def quaternion_to_euler(quat):
    """Decompose an (x, y, z, w) quaternion into ZXY Euler angles

    Lossy: different quaternions can map to the same angles and the result
    depends on the decomposition order.

    Returns:
        tuple: (rx, ry, rz) in degrees, each in [0, 360)
    """
    rot = quaternion_to_matrix(quat)

    sin_x = float(np.clip(-rot[1][2], -1.0, 1.0))
    x = np.arcsin(sin_x)

    if abs(sin_x) < _GIMBAL_THRESHOLD:
        # Normal case
        y = np.arctan2(rot[0][2], rot[2][2])
        z = np.arctan2(rot[1][0], rot[1][1])
    else:
        # Gimbal lock: fold roll into yaw
        y = np.arctan2(-rot[2][0], rot[0][0])
        z = 0.0

    angles = np.mod(np.degrees([x, y, z]), 360.0)
    # np.mod can round a tiny negative angle up to exactly 360
    angles[angles >= 360.0] = 0.0
    return tuple(float(a) + 0.0 for a in angles)
