from logging import getLogger

import numpy as np

from skchain.coordinates.math import convert_to_axis_vector
from skchain.coordinates.math import normalize_vector
from skchain.coordinates.math import quaternion2matrix
from skchain.coordinates.math import quaternion_norm
from skchain.coordinates.math import quaternion_normalize
from skchain.coordinates.math import rotation_matrix
from skchain.coordinates.spatial import make_spatial_transform
from skchain.coordinates.spatial import SpatialTransform


logger = getLogger(__name__)

_default_axis = 'z'
_identity_quaternion = (1.0, 0.0, 0.0, 0.0)


def calc_target_joint_dimension(joint_list):
    """Calculate Total Degrees of Freedom from joint list

    Parameters
    ----------
    joint_list : list[skchain.model.Joint]

    Returns
    -------
    n : int
        total Degrees of Freedom
    """
    n = 0
    for j in joint_list:
        n += j.joint_dof
    return n


def _check_param(joint, q):
    q = np.asarray(q, dtype=np.float64).reshape(-1)
    if q.shape[0] != joint.param_size:
        raise ValueError(
            '{} expects {} parameters, get {}'.format(
                joint, joint.param_size, q.shape[0]))
    return q


def _unit_quaternion(joint, q):
    norm = quaternion_norm(q)
    if not np.isclose(norm, 1.0):
        logger.warning('{} :quaternion norm({}) is not 1, normalized'
                       .format(joint, norm))
        return quaternion_normalize(q)
    return q


class Joint(object):
    """Joint connecting a predecessor body to a successor body.

    A joint maps its position parameters ``q`` to the transform from its
    own frame to the successor body (``pose``), and maps its velocity
    parameters ``alpha`` to a spatial motion vector expressed in the
    successor body through ``motion_subspace``.

    Parameters
    ----------
    name : str or None
        name of this joint.
    """

    def __init__(self, name=None):
        self.name = name
        self._motion_subspace = None

    @property
    def joint_dof(self):
        raise NotImplementedError

    @property
    def param_size(self):
        raise NotImplementedError

    @property
    def motion_subspace(self):
        """Return the 6 x joint_dof motion subspace matrix."""
        return self._motion_subspace.copy()

    def pose(self, q):
        raise NotImplementedError

    def zero_param(self):
        return np.zeros(self.param_size)

    def zero_dof(self):
        return np.zeros(self.joint_dof)

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.name:
            prefix = self.__class__.__name__ + \
                ' ' + hex(id(self)) + ' ' + self.name
        else:
            prefix = self.__class__.__name__ + ' ' + hex(id(self))

        return '#<%s>' % prefix


class _AxisJoint(Joint):

    def __init__(self, axis=_default_axis, forward=True, *args, **kwargs):
        super(_AxisJoint, self).__init__(*args, **kwargs)
        axis = normalize_vector(convert_to_axis_vector(axis))
        if np.allclose(axis, 0.0):
            raise ValueError('Joint axis must not be a zero vector')
        self.axis = axis
        self.forward = forward

    @property
    def direction(self):
        return 1.0 if self.forward else -1.0


class RevoluteJoint(_AxisJoint):
    """One dof rotation about ``axis``."""

    def __init__(self, *args, **kwargs):
        super(RevoluteJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 1))
        self._motion_subspace[:3, 0] = self.direction * self.axis

    @property
    def joint_dof(self):
        """Returns DOF of revolute joint, 1."""
        return 1

    @property
    def param_size(self):
        return 1

    def pose(self, q):
        q = _check_param(self, q)
        return make_spatial_transform(
            rotation_matrix(self.direction * q[0], self.axis))


class PrismaticJoint(_AxisJoint):
    """One dof translation along ``axis``."""

    def __init__(self, *args, **kwargs):
        super(PrismaticJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 1))
        self._motion_subspace[3:, 0] = self.direction * self.axis

    @property
    def joint_dof(self):
        """Returns DOF of prismatic joint, 1."""
        return 1

    @property
    def param_size(self):
        return 1

    def pose(self, q):
        q = _check_param(self, q)
        return SpatialTransform(
            translation=self.direction * q[0] * self.axis,
            check_validity=False)


class CylindricalJoint(_AxisJoint):
    """Rotation about and translation along ``axis``.

    Parameters are ``[angle, translation]``.
    """

    def __init__(self, *args, **kwargs):
        super(CylindricalJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 2))
        self._motion_subspace[:3, 0] = self.direction * self.axis
        self._motion_subspace[3:, 1] = self.direction * self.axis

    @property
    def joint_dof(self):
        return 2

    @property
    def param_size(self):
        return 2

    def pose(self, q):
        q = _check_param(self, q)
        return make_spatial_transform(
            rotation_matrix(self.direction * q[0], self.axis),
            self.direction * q[1] * self.axis)


class PlanarJoint(Joint):
    """Rotation about z and translation in the xy plane.

    Parameters are ``[angle, x, y]``. Velocities are expressed in the
    successor body frame.
    """

    def __init__(self, *args, **kwargs):
        super(PlanarJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 3))
        self._motion_subspace[2, 0] = 1.0
        self._motion_subspace[3, 1] = 1.0
        self._motion_subspace[4, 2] = 1.0

    @property
    def joint_dof(self):
        return 3

    @property
    def param_size(self):
        return 3

    def pose(self, q):
        q = _check_param(self, q)
        return make_spatial_transform(
            rotation_matrix(q[0], 'z'), [q[1], q[2], 0.0])


class SphericalJoint(Joint):
    """Free rotation parameterized by a [w, x, y, z] quaternion.

    Angular velocities are expressed in the successor body frame.
    """

    def __init__(self, *args, **kwargs):
        super(SphericalJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 3))
        self._motion_subspace[:3, :] = np.eye(3)

    @property
    def joint_dof(self):
        return 3

    @property
    def param_size(self):
        return 4

    def zero_param(self):
        return np.array(_identity_quaternion)

    def pose(self, q):
        q = _unit_quaternion(self, _check_param(self, q))
        return make_spatial_transform(quaternion2matrix(q))


class FreeJoint(Joint):
    """Six dof joint, parameters are ``[w, x, y, z, tx, ty, tz]``.

    Velocities are the successor body twist in its own frame.
    """

    def __init__(self, *args, **kwargs):
        super(FreeJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.eye(6)

    @property
    def joint_dof(self):
        return 6

    @property
    def param_size(self):
        return 7

    def zero_param(self):
        return np.concatenate([_identity_quaternion, np.zeros(3)])

    def pose(self, q):
        q = _check_param(self, q)
        quat = _unit_quaternion(self, q[:4])
        return make_spatial_transform(quaternion2matrix(quat), q[4:])


class FixedJoint(Joint):

    def __init__(self, *args, **kwargs):
        super(FixedJoint, self).__init__(*args, **kwargs)
        self._motion_subspace = np.zeros((6, 0))

    @property
    def joint_dof(self):
        """Returns DOF of fixed joint, 0."""
        return 0

    @property
    def param_size(self):
        return 0

    def pose(self, q=None):
        if q is not None:
            _check_param(self, q)
        return SpatialTransform()
