from logging import getLogger

import numpy as np

from skchain.coordinates.math import _check_valid_translation
from skchain.coordinates.spatial import SpatialTransform
from skchain.exceptions import TopologyMismatchError
from skchain.model.configuration import check_match_alpha
from skchain.model.configuration import check_match_body_pos
from skchain.model.configuration import check_match_joint_config
from skchain.model.topology import Topology


logger = getLogger(__name__)


class Jacobian(object):
    """Geometric Jacobian of a point attached to a body of a topology.

    The joints between the root and the target body are collected once at
    construction, root first. Columns of the computed matrix follow this
    order, so joint velocities multiplied with it must be given in the
    same root-to-leaf order.

    The matrix is allocated once and overwritten by every call to
    :meth:`jacobian` (and :meth:`safe_jacobian`, :meth:`velocity`). The
    returned array is that buffer unless ``copy=True`` is given, so keep a
    copy if the result must outlive the next call. An instance must not be
    shared between threads without external locking.

    Parameters
    ----------
    topology : skchain.model.Topology
        topology the joint path is computed from.
    body_name : str
        name of the target body.
    point : list(3,) or numpy.ndarray(3,) or None
        point expressed in the target body frame. Origin if `None`.

    Examples
    --------
    >>> from skchain.kinematics import Jacobian
    >>> from skchain.model import Body
    >>> from skchain.model import Configuration
    >>> from skchain.model import forward_kinematics
    >>> from skchain.model import RevoluteJoint
    >>> from skchain.model import Topology
    >>> topology = Topology.chain(
    ...     [Body('b0'), Body('b1')],
    ...     [RevoluteJoint('z', name='j0'), RevoluteJoint('z', name='j1')])
    >>> config = forward_kinematics(topology, Configuration(topology))
    >>> jac = Jacobian(topology, 'b1', point=[1, 0, 0])
    >>> jac.jacobian(topology, config).shape
    (6, 2)
    """

    def __init__(self, topology, body_name, point=None):
        body_index = topology.body_index_by_name(body_name)

        joints_path = []
        dof = 0
        index = body_index
        while index is not None:
            joints_path.insert(0, index)
            dof += topology.joint(index).joint_dof
            index = topology.parent(index)

        if point is None:
            point = np.zeros(3)
        self._point = _check_valid_translation(point)
        self._point_transform = SpatialTransform(translation=self._point,
                                                 check_validity=False)
        self.body_name = body_name
        self._body_index = body_index
        self._joints_path = tuple(joints_path)
        self._joints_dof = tuple(
            topology.joint(i).joint_dof for i in joints_path)
        self._dof = dof
        self._jacobian = np.empty((6, dof))
        logger.debug('Jacobian path to body {}: {} (dof={})'.format(
            body_name, self._joints_path, dof))

    @property
    def joints_path(self):
        """Joint indices from the root to the target body."""
        return self._joints_path

    @property
    def dof(self):
        return self._dof

    @property
    def point(self):
        return self._point.copy()

    @property
    def body_index(self):
        return self._body_index

    def _check_joints_path(self, topology):
        max_index = max(self._joints_path)
        if max_index >= topology.nr_joints:
            raise TopologyMismatchError(
                'Joints path {} mismatch topology: joint index {} is out of '
                'range for {} joints'.format(
                    self._joints_path, max_index, topology.nr_joints))
        joints_dof = tuple(
            topology.joint(i).joint_dof for i in self._joints_path)
        if joints_dof != self._joints_dof:
            raise TopologyMismatchError(
                'Joints path {} mismatch topology: joint dofs {} differ '
                'from {}'.format(
                    self._joints_path, joints_dof, self._joints_dof))

    def jacobian(self, topology, configuration, copy=False):
        """Compute the Jacobian without checking its inputs.

        ``configuration`` must be consistent with ``topology`` and its
        world poses must be up to date. Each column block maps a joint
        velocity to the spatial velocity ``[angular; linear]`` of the point,
        expressed in a frame at the point oriented like the world.

        Parameters
        ----------
        topology : skchain.model.Topology
        configuration : skchain.model.Configuration
        copy : bool
            if `True`, return a copy of the internal buffer.

        Returns
        -------
        jacobian : numpy.ndarray
            (6, dof) matrix. The internal buffer unless ``copy`` is `True`.
        """
        succ = topology.successors
        pred_to_joint = topology.pred_to_joint
        body_pos_w = configuration.body_pos_w

        X_0_N = self._point_transform * body_pos_w[self._joints_path[-1]]
        col = 0
        for i in self._joints_path:
            joint = topology.joint(i)
            X_i = configuration.joint_config[i]
            X_0_i = body_pos_w[succ[i]].rotation_only()
            X_i_N = X_0_N * body_pos_w[i].inverse_transformation()

            X = X_0_i.inverse_transformation() * X_i_N * \
                pred_to_joint[i] * X_i
            joint_dof = joint.joint_dof
            self._jacobian[:, col:col + joint_dof] = \
                X.matrix().dot(joint.motion_subspace)
            col += joint_dof

        if copy:
            return self._jacobian.copy()
        return self._jacobian

    def safe_jacobian(self, topology, configuration, copy=False):
        """Compute the Jacobian after checking its inputs.

        Raises
        ------
        skchain.exceptions.ConfigurationMismatchError
            configuration sizes do not match the topology.
        skchain.exceptions.TopologyMismatchError
            the joint path does not fit in the topology or the dofs of
            its joints differ from the ones at construction.
        """
        check_match_body_pos(topology, configuration)
        check_match_joint_config(topology, configuration)
        self._check_joints_path(topology)
        return self.jacobian(topology, configuration, copy=copy)

    def velocity(self, topology, configuration):
        """Return the spatial velocity of the point.

        Multiplies the Jacobian with the velocities of the path joints
        taken from ``configuration.alpha``. The internal buffer is
        overwritten.

        Returns
        -------
        velocity : numpy.ndarray
            6-dimensional ``[angular; linear]`` velocity.
        """
        alpha = np.concatenate(
            [np.asarray(configuration.alpha[i], dtype=np.float64)
             for i in self._joints_path])
        return self.jacobian(topology, configuration).dot(alpha)

    def safe_velocity(self, topology, configuration):
        check_match_alpha(topology, configuration)
        check_match_body_pos(topology, configuration)
        check_match_joint_config(topology, configuration)
        self._check_joints_path(topology)
        return self.velocity(topology, configuration)

    def full_jacobian(self, topology, jacobian):
        """Place the path columns at their position in the full dof vector.

        Parameters
        ----------
        topology : skchain.model.Topology
        jacobian : numpy.ndarray
            (n, dof) matrix whose columns follow the joint path.

        Returns
        -------
        full_jacobian : numpy.ndarray
            (n, topology.nr_dof) matrix, zero for joints off the path.
        """
        jacobian = np.asarray(jacobian)
        if jacobian.shape[1] != self._dof:
            raise ValueError(
                'jacobian must have {} columns, get {}'.format(
                    self._dof, jacobian.shape[1]))
        self._check_joints_path(topology)
        full = np.zeros((jacobian.shape[0], topology.nr_dof))
        joint_pos_in_dof = topology.joint_pos_in_dof
        col = 0
        for i in self._joints_path:
            joint_dof = topology.joint(i).joint_dof
            pos = joint_pos_in_dof[i]
            full[:, pos:pos + joint_dof] = jacobian[:, col:col + joint_dof]
            col += joint_dof
        return full

    def sub_topology(self, topology):
        """Return the joint path as a new chain topology.

        Bodies and joints are renumbered in path order and fixed transforms
        are copied unchanged. No check is done on ``topology``.
        """
        bodies = []
        joints = []
        predecessors = []
        successors = []
        parents = []
        pred_to_joint = []
        joint_to_succ = []

        for index, i in enumerate(self._joints_path):
            previous = index - 1 if index > 0 else None
            bodies.append(topology.body(i))
            parents.append(previous)

            joints.append(topology.joint(i))
            successors.append(index)
            predecessors.append(previous)
            pred_to_joint.append(topology.pred_to_joint[i])
            joint_to_succ.append(topology.joint_to_succ[i])

        logger.debug('Extracted chain of {} bodies to body {}'.format(
            len(bodies), self.body_name))
        return Topology(bodies, joints, predecessors, successors, parents,
                        pred_to_joint, joint_to_succ)

    def safe_sub_topology(self, topology):
        self._check_joints_path(topology)
        return self.sub_topology(topology)

    def __repr__(self):
        return '#<{} {} body={} dof={}>'.format(
            self.__class__.__name__, hex(id(self)), self.body_name, self._dof)
