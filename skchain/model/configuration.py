import numpy as np

from skchain.coordinates.spatial import SpatialTransform
from skchain.exceptions import ConfigurationMismatchError


class Configuration(object):
    """Dynamic state of a topology at one instant.

    Parameters
    ----------
    topology : skchain.model.Topology
        topology used to size and zero-initialize every list.

    Attributes
    ----------
    q : list[numpy.ndarray]
        position parameters of each joint.
    alpha : list[numpy.ndarray]
        velocity parameters of each joint.
    joint_config : list[skchain.coordinates.SpatialTransform]
        transform of each joint computed from ``q``.
    body_pos_w : list[skchain.coordinates.SpatialTransform]
        world pose of each body, ``X_0_i``.
    """

    def __init__(self, topology):
        joints = topology.joints
        self.q = [j.zero_param() for j in joints]
        self.alpha = [j.zero_dof() for j in joints]
        self.joint_config = [SpatialTransform() for _ in joints]
        self.body_pos_w = [SpatialTransform()
                           for _ in range(topology.nr_bodies)]

    def set_q(self, topology, q):
        """Set joint positions from a flat vector of size ``nr_params``."""
        q = np.asarray(q, dtype=np.float64).reshape(-1)
        if q.shape[0] != topology.nr_params:
            raise ValueError(
                'q must have {} elements, get {}'.format(
                    topology.nr_params, q.shape[0]))
        offsets = topology.joint_pos_in_param
        self.q = [q[offset:offset + joint.param_size].copy()
                  for offset, joint in zip(offsets, topology.joints)]

    def set_alpha(self, topology, alpha):
        """Set joint velocities from a flat vector of size ``nr_dof``."""
        alpha = np.asarray(alpha, dtype=np.float64).reshape(-1)
        if alpha.shape[0] != topology.nr_dof:
            raise ValueError(
                'alpha must have {} elements, get {}'.format(
                    topology.nr_dof, alpha.shape[0]))
        offsets = topology.joint_pos_in_dof
        self.alpha = [alpha[offset:offset + joint.joint_dof].copy()
                      for offset, joint in zip(offsets, topology.joints)]


def _check_size(name, values, expected):
    if len(values) != expected:
        raise ConfigurationMismatchError(
            '{} size mismatch: expected {} elements, get {}'.format(
                name, expected, len(values)))


def check_match_q(topology, configuration):
    _check_size('q', configuration.q, topology.nr_joints)
    for i, (joint, q) in enumerate(zip(topology.joints, configuration.q)):
        if len(q) != joint.param_size:
            raise ConfigurationMismatchError(
                'q[{}] size mismatch: expected {} elements, get {}'.format(
                    i, joint.param_size, len(q)))


def check_match_alpha(topology, configuration):
    _check_size('alpha', configuration.alpha, topology.nr_joints)
    for i, (joint, alpha) in enumerate(
            zip(topology.joints, configuration.alpha)):
        if len(alpha) != joint.joint_dof:
            raise ConfigurationMismatchError(
                'alpha[{}] size mismatch: expected {} elements, get {}'
                .format(i, joint.joint_dof, len(alpha)))


def check_match_joint_config(topology, configuration):
    _check_size('joint_config', configuration.joint_config,
                topology.nr_joints)


def check_match_body_pos(topology, configuration):
    _check_size('body_pos_w', configuration.body_pos_w, topology.nr_bodies)


def forward_kinematics(topology, configuration):
    """Update joint transforms and body world poses from ``q``.

    Parameters
    ----------
    topology : skchain.model.Topology
    configuration : skchain.model.Configuration
        updated in place.

    Returns
    -------
    configuration : skchain.model.Configuration
    """
    check_match_q(topology, configuration)
    check_match_joint_config(topology, configuration)
    check_match_body_pos(topology, configuration)

    joints = topology.joints
    pred = topology.predecessors
    succ = topology.successors
    pred_to_joint = topology.pred_to_joint
    for i, joint in enumerate(joints):
        configuration.joint_config[i] = joint.pose(configuration.q[i])
        parent_to_son = configuration.joint_config[i] * pred_to_joint[i]
        if pred[i] is None:
            configuration.body_pos_w[succ[i]] = parent_to_son
        else:
            configuration.body_pos_w[succ[i]] = \
                parent_to_son * configuration.body_pos_w[pred[i]]
    return configuration
