from cached_property import cached_property
import numpy as np

from skchain.coordinates.spatial import SpatialTransform
from skchain.model.joint import calc_target_joint_dimension


class Topology(object):
    """Static description of an articulated rigid-body tree.

    Bodies and joints are stored in flat lists indexed by integers. Joint
    ``i`` connects body ``predecessors[i]`` to body ``successors[i]`` and
    body ``i`` is the successor of joint ``i``, so body and joint indices
    share the same space. ``parents[i]`` is the index of the parent body of
    body ``i`` or `None` for the root. Parents must come before their
    children.

    Parameters
    ----------
    bodies : list[skchain.model.Body]
    joints : list[skchain.model.Joint]
    predecessors : list[int or None]
    successors : list[int]
    parents : list[int or None]
    pred_to_joint : list[skchain.coordinates.SpatialTransform]
        fixed transform from the predecessor body frame to joint ``i``.
    joint_to_succ : list[skchain.coordinates.SpatialTransform]
        fixed transform from joint ``i`` to its successor body frame.
    """

    def __init__(self, bodies, joints, predecessors, successors, parents,
                 pred_to_joint, joint_to_succ):
        bodies = list(bodies)
        n = len(bodies)
        arrays = [('joints', joints),
                  ('predecessors', predecessors),
                  ('successors', successors),
                  ('parents', parents),
                  ('pred_to_joint', pred_to_joint),
                  ('joint_to_succ', joint_to_succ)]
        for name, values in arrays:
            if len(values) != n:
                raise ValueError(
                    'Length of {} ({}) does not match the number of '
                    'bodies ({})'.format(name, len(values), n))
        for i, parent in enumerate(parents):
            if parent is not None and not (0 <= parent < i):
                raise ValueError(
                    'parents[{}] must be None or a smaller index, get {}'
                    .format(i, parent))
        self._bodies = bodies
        self._joints = list(joints)
        self._predecessors = list(predecessors)
        self._successors = list(successors)
        self._parents = list(parents)
        self._pred_to_joint = list(pred_to_joint)
        self._joint_to_succ = list(joint_to_succ)
        self._body_name_to_index = {
            body.name: i for i, body in enumerate(self._bodies)}
        self._joint_name_to_index = {
            joint.name: i for i, joint in enumerate(self._joints)
            if joint.name is not None}

    @classmethod
    def chain(cls, bodies, joints, pred_to_joint=None, joint_to_succ=None):
        """Build a serial chain where joint ``i`` moves body ``i``.

        Parameters
        ----------
        bodies : list[skchain.model.Body]
        joints : list[skchain.model.Joint]
        pred_to_joint : list[skchain.coordinates.SpatialTransform] or None
            identity transforms if `None`.
        joint_to_succ : list[skchain.coordinates.SpatialTransform] or None
            identity transforms if `None`.

        Returns
        -------
        topology : skchain.model.Topology
        """
        n = len(bodies)
        if pred_to_joint is None:
            pred_to_joint = [SpatialTransform() for _ in range(n)]
        if joint_to_succ is None:
            joint_to_succ = [SpatialTransform() for _ in range(n)]
        previous = [None] + list(range(n - 1))
        return cls(bodies, joints,
                   predecessors=previous,
                   successors=list(range(n)),
                   parents=list(previous),
                   pred_to_joint=pred_to_joint,
                   joint_to_succ=joint_to_succ)

    @property
    def bodies(self):
        return list(self._bodies)

    @property
    def joints(self):
        return list(self._joints)

    @property
    def predecessors(self):
        return list(self._predecessors)

    @property
    def successors(self):
        return list(self._successors)

    @property
    def parents(self):
        return list(self._parents)

    @property
    def pred_to_joint(self):
        return list(self._pred_to_joint)

    @property
    def joint_to_succ(self):
        return list(self._joint_to_succ)

    @property
    def nr_bodies(self):
        return len(self._bodies)

    @property
    def nr_joints(self):
        return len(self._joints)

    @cached_property
    def nr_dof(self):
        return calc_target_joint_dimension(self._joints)

    @cached_property
    def nr_params(self):
        return sum(j.param_size for j in self._joints)

    @cached_property
    def joint_pos_in_dof(self):
        """Column offset of each joint in a full velocity vector."""
        return np.cumsum(
            [0] + [j.joint_dof for j in self._joints])[:-1].astype(np.int64)

    @cached_property
    def joint_pos_in_param(self):
        """Offset of each joint in a full position vector."""
        return np.cumsum(
            [0] + [j.param_size for j in self._joints])[:-1].astype(np.int64)

    def body(self, index):
        return self._bodies[index]

    def joint(self, index):
        return self._joints[index]

    def parent(self, index):
        """Return the parent body index of body ``index``, `None` for root."""
        return self._parents[index]

    def body_index_by_name(self, name):
        try:
            return self._body_name_to_index[name]
        except KeyError:
            raise KeyError('Body {} is not in this topology'.format(name))

    def joint_index_by_name(self, name):
        try:
            return self._joint_name_to_index[name]
        except KeyError:
            raise KeyError('Joint {} is not in this topology'.format(name))

    def __repr__(self):
        return '#<{} {} bodies={} joints={} dof={}>'.format(
            self.__class__.__name__, hex(id(self)),
            self.nr_bodies, self.nr_joints, self.nr_dof)
