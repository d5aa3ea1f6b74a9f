from math import cos
from math import sin

import numpy as np


# epsilon for testing whether a number is close to zero
_EPS = np.finfo(float).eps * 4.0
_AXIS_VECTORS = {
    'x': np.array([1, 0, 0]),
    'y': np.array([0, 1, 0]),
    'z': np.array([0, 0, 1]),
    '-x': np.array([-1, 0, 0]),
    '-y': np.array([0, -1, 0]),
    '-z': np.array([0, 0, -1]),
}


def convert_to_axis_vector(axis):
    """Convert axis to float vector.

    Parameters
    ----------
    axis : list or tuple or numpy.ndarray or str
        joint axis given as 'x', 'y', 'z' (optionally negated with '-')
        or as a 3-dimensional vector.

    Returns
    -------
    axis : numpy.ndarray
        converted axis

    Examples
    --------
    >>> from skchain.coordinates.math import convert_to_axis_vector
    >>> convert_to_axis_vector('x')
    array([1., 0., 0.])
    >>> convert_to_axis_vector('-z')
    array([ 0.,  0., -1.])
    >>> convert_to_axis_vector([1, 1, 0])
    array([1., 1., 0.])
    """
    if isinstance(axis, str):
        try:
            return _AXIS_VECTORS[axis].astype(np.float64)
        except KeyError:
            raise ValueError(
                "Axis conversion for '{}' is not supported.".format(axis))
    elif isinstance(axis, (list, tuple, np.ndarray)):
        axis = np.array(axis, dtype=np.float64)
        if axis.shape != (3,):
            raise ValueError(
                'Axis must have exactly three elements, get shape {}'
                .format(axis.shape))
        return axis
    raise TypeError("Invalid type for axis. "
                    "Must be one of: str, list, tuple, ndarray. get {}"
                    .format(type(axis)))


def _check_valid_rotation(rotation):
    """Checks that the given rotation matrix is valid."""
    rotation = np.array(rotation, dtype=np.float64)
    if rotation.shape != (3, 3):
        raise ValueError('Rotation must be specified as a 3x3 ndarray')

    if np.abs(np.linalg.det(rotation) - 1.0) > 1e-3:
        raise ValueError('Illegal rotation. Must have determinant == 1.0, '
                         'get {}'.format(np.linalg.det(rotation)))
    return rotation


def _check_valid_translation(translation):
    """Checks that the translation vector is valid."""
    translation = np.array(translation, dtype=np.float64)
    t = translation.squeeze()
    if t.shape != (3,):
        raise ValueError(
            'Translation must be specified as a 3-vector, '
            '3x1 ndarray, or 1x3 ndarray')
    return t


def normalize_vector(v, ord=2):
    """Return normalized vector

    Parameters
    ----------
    v : list or numpy.ndarray
        vector
    ord : int (optional)
        ord of np.linalg.norm

    Returns
    -------
    v : numpy.ndarray
        normalized vector. A zero vector is returned as it is.

    Examples
    --------
    >>> from skchain.coordinates.math import normalize_vector
    >>> normalize_vector([1, 1, 1])
    array([0.57735027, 0.57735027, 0.57735027])
    """
    v = np.array(v, dtype=np.float64)
    norm = np.linalg.norm(v, ord=ord)
    if norm < _EPS:
        return v
    return v / norm


def outer_product_matrix(v):
    """Returns the skew symmetric matrix of v.

    The matrix satisfies ``outer_product_matrix(a).dot(b) == a x b``.

    .. math::
        \\left(
            \\begin{array}{ccc}
              0 & -v_2 & v_1 \\\\
              v_2 & 0 & -v_0 \\\\
              -v_1 & v_0 & 0
            \\end{array}
        \\right)

    Examples
    --------
    >>> from skchain.coordinates.math import outer_product_matrix
    >>> outer_product_matrix([1, 2, 3])
    array([[ 0, -3,  2],
           [ 3,  0, -1],
           [-2,  1,  0]])
    """
    return np.array([[0, -v[2], v[1]],
                     [v[2], 0, -v[0]],
                     [-v[1], v[0], 0]])


def cross_product(a, b):
    return np.dot(outer_product_matrix(a), b)


def rotation_matrix(theta, axis, skip_normalization=False):
    """Return the rotation matrix.

    Return the rotation matrix associated with counterclockwise rotation
    about the given axis by theta radians. Columns of the returned matrix
    are the rotated frame's axes expressed in the original frame.

    Parameters
    ----------
    theta : float
        radian
    axis : str or list or numpy.ndarray
        rotation axis such that 'x', 'y', 'z' or a 3-dimensional vector.
    skip_normalization : bool
        if `True`, skip normalization for axis.

    Returns
    -------
    rot : numpy.ndarray
        rotation matrix about the given axis by theta radians.
    """
    axis = convert_to_axis_vector(axis)
    if not skip_normalization:
        axis = axis / np.sqrt(np.dot(axis, axis))
    a = np.cos(theta / 2.0)
    b, c, d = -axis * np.sin(theta / 2.0)
    aa, bb, cc, dd = a * a, b * b, c * c, d * d
    bc, ad, ac, ab, bd, cd = b * c, a * d, a * c, a * b, b * d, c * d
    return np.array([[aa + bb - cc - dd, 2 * (bc + ad), 2 * (bd - ac)],
                     [2 * (bc - ad), aa + cc - bb - dd, 2 * (cd + ab)],
                     [2 * (bd + ac), 2 * (cd - ab), aa + dd - bb - cc]])


def quaternion_norm(q):
    return np.sqrt(np.dot(q, q))


def quaternion_normalize(q):
    """Normalize quaternion [w, x, y, z].

    A zero quaternion is mapped to the identity quaternion.
    """
    q = np.array(q, dtype=np.float64)
    norm = quaternion_norm(q)
    if norm < _EPS:
        return np.array([1.0, 0.0, 0.0, 0.0])
    return q / norm


def quaternion2matrix(q, normalize=False):
    """Returns matrix of given quaternion.

    Parameters
    ----------
    q : list or numpy.ndarray
        quaternion [w, x, y, z] order
    normalize : bool
        if normalize is True, input quaternion is normalized.

    Returns
    -------
    rot : numpy.ndarray
        3x3 rotation matrix

    Examples
    --------
    >>> from skchain.coordinates.math import quaternion2matrix
    >>> quaternion2matrix([1, 0, 0, 0])
    array([[1., 0., 0.],
           [0., 1., 0.],
           [0., 0., 1.]])
    """
    q = np.array(q, dtype=np.float64)
    if normalize:
        q = quaternion_normalize(q)
    elif not np.allclose(quaternion_norm(q), 1.0):
        raise ValueError("quaternion q's norm is not 1")
    q0, q1, q2, q3 = q
    m = np.zeros((3, 3))
    m[0, 0] = q0 * q0 + q1 * q1 - q2 * q2 - q3 * q3
    m[0, 1] = 2 * (q1 * q2 - q0 * q3)
    m[0, 2] = 2 * (q1 * q3 + q0 * q2)

    m[1, 0] = 2 * (q1 * q2 + q0 * q3)
    m[1, 1] = q0 * q0 - q1 * q1 + q2 * q2 - q3 * q3
    m[1, 2] = 2 * (q2 * q3 - q0 * q1)

    m[2, 0] = 2 * (q1 * q3 - q0 * q2)
    m[2, 1] = 2 * (q2 * q3 + q0 * q1)
    m[2, 2] = q0 * q0 - q1 * q1 - q2 * q2 + q3 * q3
    return m


def random_quaternion():
    """Generate uniform random unit quaternion [w, x, y, z]."""
    rand = np.random.rand(3)
    r1 = np.sqrt(1.0 - rand[0])
    r2 = np.sqrt(rand[0])
    pi2 = np.pi * 2.0
    t1 = pi2 * rand[1]
    t2 = pi2 * rand[2]
    return np.array((cos(t2) * r2,
                     sin(t1) * r1,
                     cos(t1) * r1,
                     sin(t2) * r2),
                    dtype=np.float64)


def random_rotation():
    return quaternion2matrix(random_quaternion())


def random_translation():
    return np.random.rand(3)
