from skchain.coordinates.math import rotation_matrix
from skchain.coordinates.spatial import make_spatial_transform
from skchain.coordinates.spatial import SpatialTransform
from skchain.model.body import Body
from skchain.model.joint import FixedJoint
from skchain.model.joint import FreeJoint
from skchain.model.joint import PrismaticJoint
from skchain.model.joint import RevoluteJoint
from skchain.model.joint import SphericalJoint
from skchain.model.topology import Topology


def planar_arm(n_links=3, link_length=1.0, fixed_base=False):
    """Serial arm of revolute z joints spaced along x.

    Parameters
    ----------
    n_links : int
        number of moving links.
    link_length : float
        distance between successive joints.
    fixed_base : bool
        if `True`, prepend a fixed ``base`` body as root.

    Returns
    -------
    topology : skchain.model.Topology
        bodies are named ``link0``, ``link1``, ... and joints ``joint0``,
        ``joint1``, ...
    """
    bodies = []
    joints = []
    pred_to_joint = []
    if fixed_base:
        bodies.append(Body('base'))
        joints.append(FixedJoint(name='base_fixed'))
        pred_to_joint.append(SpatialTransform())
    for i in range(n_links):
        bodies.append(Body('link{}'.format(i)))
        joints.append(RevoluteJoint('z', name='joint{}'.format(i)))
        if i == 0:
            pred_to_joint.append(SpatialTransform())
        else:
            pred_to_joint.append(
                make_spatial_transform(pos=[link_length, 0, 0]))
    return Topology.chain(bodies, joints, pred_to_joint)


def branching_tree():
    """Floating torso with two arms and a head.

    ::

        torso(free) -+- r_shoulder(spherical) - r_elbow(rev y) - r_hand(fixed)
                     +- l_shoulder(spherical) - l_elbow(rev y) - l_hand(fixed)
                     +- neck(prismatic z) - head(rev z)

    Returns
    -------
    topology : skchain.model.Topology
    """
    names = ['torso',
             'r_upper_arm', 'r_forearm', 'r_hand',
             'l_upper_arm', 'l_forearm', 'l_hand',
             'neck', 'head']
    joints = [FreeJoint(name='root'),
              SphericalJoint(name='r_shoulder'),
              RevoluteJoint('y', name='r_elbow'),
              FixedJoint(name='r_wrist'),
              SphericalJoint(name='l_shoulder'),
              RevoluteJoint('y', name='l_elbow', forward=False),
              FixedJoint(name='l_wrist'),
              PrismaticJoint('z', name='neck_lift'),
              RevoluteJoint('z', name='neck_yaw')]
    parents = [None, 0, 1, 2, 0, 4, 5, 0, 7]
    pred_to_joint = [
        SpatialTransform(),
        make_spatial_transform(pos=[0, -0.2, 0.4]),
        make_spatial_transform(pos=[0, 0, -0.3]),
        make_spatial_transform(
            rotation_matrix(0.5, 'x'), [0, 0, -0.25]),
        make_spatial_transform(pos=[0, 0.2, 0.4]),
        make_spatial_transform(pos=[0, 0, -0.3]),
        make_spatial_transform(
            rotation_matrix(-0.5, 'x'), [0, 0, -0.25]),
        make_spatial_transform(pos=[0, 0, 0.5]),
        make_spatial_transform(pos=[0.05, 0, 0.1]),
    ]
    return Topology([Body(name) for name in names],
                    joints,
                    predecessors=list(parents),
                    successors=list(range(len(names))),
                    parents=parents,
                    pred_to_joint=pred_to_joint,
                    joint_to_succ=[SpatialTransform() for _ in names])
