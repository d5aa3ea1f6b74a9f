import unittest

import numpy as np
from numpy import pi
from numpy import testing

from skchain.coordinates.math import random_quaternion
from skchain.coordinates.math import random_translation
from skchain.exceptions import ConfigurationMismatchError
from skchain.exceptions import TopologyMismatchError
from skchain.kinematics import Jacobian
from skchain.model import Body
from skchain.model import Configuration
from skchain.model import CylindricalJoint
from skchain.model import FixedJoint
from skchain.model import forward_kinematics
from skchain.model import FreeJoint
from skchain.model import PlanarJoint
from skchain.model import PrismaticJoint
from skchain.model import RevoluteJoint
from skchain.model import SphericalJoint
from skchain.model import Topology
import skchain.models


def random_configuration(topology, seed=0):
    np.random.seed(seed)
    config = Configuration(topology)
    for i, joint in enumerate(topology.joints):
        if isinstance(joint, FreeJoint):
            config.q[i] = np.concatenate(
                [random_quaternion(), random_translation()])
        elif isinstance(joint, SphericalJoint):
            config.q[i] = random_quaternion()
        else:
            config.q[i] = np.random.uniform(-pi, pi, joint.param_size)
        config.alpha[i] = np.random.uniform(-1, 1, joint.joint_dof)
    return forward_kinematics(topology, config)


class TestJacobian(unittest.TestCase):

    def test_joints_path(self):
        topology = skchain.models.branching_tree()
        jac = Jacobian(topology, 'l_hand')
        self.assertEqual(jac.joints_path, (0, 4, 5, 6))
        self.assertEqual(jac.dof, 10)
        self.assertEqual(jac.body_index, 6)
        testing.assert_array_equal(jac.point, np.zeros(3))

        jac = Jacobian(topology, 'head', point=[0, 0, 0.1])
        self.assertEqual(jac.joints_path, (0, 7, 8))
        self.assertEqual(jac.dof, 8)
        testing.assert_array_equal(jac.point, [0, 0, 0.1])

        with self.assertRaises(KeyError):
            Jacobian(topology, 'tail')
        with self.assertRaises(ValueError):
            Jacobian(topology, 'head', point=[0, 0])

    def test_point_is_immutable(self):
        topology = skchain.models.planar_arm(2)
        jac = Jacobian(topology, 'link1', point=[1, 2, 3])
        point = jac.point
        point[0] = 10
        testing.assert_array_equal(jac.point, [1, 2, 3])

    def test_construction_logs_path(self):
        topology = skchain.models.planar_arm(2)
        with self.assertLogs('skchain.kinematics.jacobian', level='DEBUG'):
            Jacobian(topology, 'link1')

    def test_shape(self):
        joints = [FreeJoint(), SphericalJoint(), RevoluteJoint('x'),
                  FixedJoint(), CylindricalJoint('y'), PlanarJoint()]
        bodies = [Body('b{}'.format(i)) for i in range(len(joints))]
        topology = Topology.chain(bodies, joints)
        config = random_configuration(topology)
        for i, dof in enumerate([6, 9, 10, 10, 12, 15]):
            jac = Jacobian(topology, 'b{}'.format(i))
            self.assertEqual(jac.dof, dof)
            self.assertEqual(
                jac.jacobian(topology, config).shape, (6, dof))
            self.assertEqual(
                jac.safe_jacobian(topology, config).shape, (6, dof))

    def test_zero_configuration(self):
        joints = [RevoluteJoint('x'), PrismaticJoint('y'),
                  RevoluteJoint([0, 1, 1])]
        topology = Topology.chain(
            [Body('b0'), Body('b1'), Body('b2')], joints)
        config = forward_kinematics(topology, Configuration(topology))
        jac = Jacobian(topology, 'b2')
        J = jac.jacobian(topology, config)
        self.assertEqual(J.shape, (6, 3))
        for i, joint in enumerate(joints):
            testing.assert_almost_equal(
                J[:, i], joint.motion_subspace[:, 0])

    def test_root_body(self):
        topology = skchain.models.planar_arm(3, fixed_base=True)
        config = forward_kinematics(topology, Configuration(topology))
        jac = Jacobian(topology, 'base')
        self.assertEqual(jac.joints_path, (0,))
        self.assertEqual(jac.dof, 0)
        self.assertEqual(jac.jacobian(topology, config).shape, (6, 0))
        self.assertEqual(jac.safe_jacobian(topology, config).shape, (6, 0))
        self.assertEqual(jac.sub_topology(topology).nr_joints, 1)

        topology = skchain.models.planar_arm(3)
        config = forward_kinematics(topology, Configuration(topology))
        jac = Jacobian(topology, 'link0')
        self.assertEqual(jac.joints_path, (0,))
        self.assertEqual(jac.dof, 1)
        testing.assert_almost_equal(
            jac.jacobian(topology, config)[:, 0], [0, 0, 1, 0, 0, 0])

    def test_point_velocity_direction(self):
        topology = skchain.models.planar_arm(1)
        config = Configuration(topology)
        jac = Jacobian(topology, 'link0', point=[1, 0, 0])
        for theta in [0.0, pi / 2.0, -2.0]:
            config.q[0] = np.array([theta])
            forward_kinematics(topology, config)
            # a point on a disk rotating about z moves tangentially
            testing.assert_almost_equal(
                jac.jacobian(topology, config)[:, 0],
                [0, 0, 1, -np.sin(theta), np.cos(theta), 0])

    def test_deterministic(self):
        topology = skchain.models.branching_tree()
        config = random_configuration(topology)
        jac = Jacobian(topology, 'r_hand', point=[0.1, 0.2, 0.3])
        J1 = jac.jacobian(topology, config, copy=True)
        J2 = jac.jacobian(topology, config, copy=True)
        testing.assert_array_equal(J1, J2)
        J3 = Jacobian(topology, 'r_hand', point=[0.1, 0.2, 0.3]).jacobian(
            topology, config)
        testing.assert_array_equal(J1, J3)

    def test_buffer_reuse(self):
        topology = skchain.models.planar_arm(3)
        config = random_configuration(topology)
        jac = Jacobian(topology, 'link2')
        J1 = jac.jacobian(topology, config)
        J2 = jac.safe_jacobian(topology, config)
        self.assertIs(J1, J2)

        J3 = jac.jacobian(topology, config, copy=True)
        self.assertIsNot(J3, J1)
        self.assertFalse(np.shares_memory(J3, J1))
        testing.assert_array_equal(J3, J1)

        before = J3.copy()
        config.q[0] = config.q[0] + 0.5
        forward_kinematics(topology, config)
        J4 = jac.jacobian(topology, config)
        self.assertIs(J4, J1)
        testing.assert_array_equal(J3, before)
        self.assertFalse(np.allclose(J1[:, 0], before[:, 0]))

    def test_safe_jacobian_topology_mismatch(self):
        topology = skchain.models.planar_arm(5)
        config = random_configuration(topology)
        jac = Jacobian(topology, 'link4')
        self.assertEqual(max(jac.joints_path), 4)
        J = jac.jacobian(topology, config)
        before = J.copy()

        truncated = skchain.models.planar_arm(3)
        truncated_config = random_configuration(truncated, seed=1)
        with self.assertRaises(TopologyMismatchError):
            jac.safe_jacobian(truncated, truncated_config)
        testing.assert_array_equal(J, before)

        # configuration of the original topology against a smaller one
        with self.assertRaises(TopologyMismatchError):
            jac.safe_jacobian(truncated, config)
        testing.assert_array_equal(J, before)

    def test_safe_jacobian_configuration_mismatch(self):
        topology = skchain.models.planar_arm(3)
        config = random_configuration(topology)
        jac = Jacobian(topology, 'link2')
        J = jac.jacobian(topology, config)
        before = J.copy()

        config.body_pos_w = config.body_pos_w[:2]
        with self.assertRaises(ConfigurationMismatchError):
            jac.safe_jacobian(topology, config)
        testing.assert_array_equal(J, before)

        config = random_configuration(topology)
        config.joint_config = config.joint_config[:1]
        with self.assertRaises(ConfigurationMismatchError):
            jac.safe_jacobian(topology, config)
        testing.assert_array_equal(J, before)

    def test_safe_jacobian_joint_dof_mismatch(self):
        bodies = [Body('b0'), Body('b1')]
        topology = Topology.chain(
            bodies, [RevoluteJoint('z'), RevoluteJoint('x')])
        jac = Jacobian(topology, 'b1')
        J = jac.safe_jacobian(topology, random_configuration(topology))
        before = J.copy()

        # same number of joints, fewer dofs on the path
        fixed_end = Topology.chain(
            bodies, [RevoluteJoint('y'), FixedJoint()])
        with self.assertRaises(TopologyMismatchError):
            jac.safe_jacobian(fixed_end, random_configuration(fixed_end))
        testing.assert_array_equal(J, before)

        # same number of joints, more dofs on the path
        spherical_end = Topology.chain(
            bodies, [RevoluteJoint('y'), SphericalJoint()])
        with self.assertRaises(TopologyMismatchError):
            jac.safe_jacobian(spherical_end,
                              random_configuration(spherical_end))
        testing.assert_array_equal(J, before)

        with self.assertRaises(TopologyMismatchError):
            jac.safe_sub_topology(spherical_end)
        with self.assertRaises(TopologyMismatchError):
            jac.safe_velocity(fixed_end, random_configuration(fixed_end))
        testing.assert_array_equal(J, before)

    def test_velocity(self):
        topology = skchain.models.planar_arm(1)
        config = Configuration(topology)
        config.q[0] = np.array([pi / 2.0])
        config.alpha[0] = np.array([2.0])
        forward_kinematics(topology, config)
        jac = Jacobian(topology, 'link0', point=[1, 0, 0])
        testing.assert_almost_equal(
            jac.velocity(topology, config), [0, 0, 2, -2, 0, 0])
        testing.assert_almost_equal(
            jac.safe_velocity(topology, config), [0, 0, 2, -2, 0, 0])

        topology = skchain.models.branching_tree()
        config = random_configuration(topology)
        jac = Jacobian(topology, 'l_hand')
        J = jac.jacobian(topology, config, copy=True)
        alpha = np.concatenate([config.alpha[i] for i in jac.joints_path])
        testing.assert_almost_equal(
            jac.velocity(topology, config), J.dot(alpha))

        config.alpha[5] = np.zeros(2)
        with self.assertRaises(ConfigurationMismatchError):
            jac.safe_velocity(topology, config)

    def test_full_jacobian(self):
        topology = skchain.models.branching_tree()
        jac = Jacobian(topology, 'head')
        J = np.arange(48, dtype=np.float64).reshape(6, 8) + 1.0
        full = jac.full_jacobian(topology, J)
        self.assertEqual(full.shape, (6, topology.nr_dof))
        testing.assert_array_equal(full[:, 0:6], J[:, 0:6])
        testing.assert_array_equal(full[:, 14], J[:, 6])
        testing.assert_array_equal(full[:, 15], J[:, 7])
        testing.assert_array_equal(full[:, 6:14], np.zeros((6, 8)))

        with self.assertRaises(ValueError):
            jac.full_jacobian(topology, np.zeros((6, 3)))
        with self.assertRaises(TopologyMismatchError):
            jac.full_jacobian(skchain.models.planar_arm(3), J)

    def test_sub_topology(self):
        topology = skchain.models.branching_tree()
        jac = Jacobian(topology, 'l_hand')
        chain = jac.sub_topology(topology)
        self.assertIsNot(chain, topology)
        self.assertEqual(chain.nr_bodies, 4)
        self.assertEqual(chain.nr_joints, 4)
        self.assertEqual(chain.parents, [None, 0, 1, 2])
        self.assertEqual(chain.successors, [0, 1, 2, 3])
        self.assertEqual(chain.predecessors, [None, 0, 1, 2])
        self.assertEqual(chain.nr_dof, jac.dof)
        for new_index, i in enumerate(jac.joints_path):
            self.assertIs(chain.body(new_index), topology.body(i))
            self.assertIs(chain.joint(new_index), topology.joint(i))
            self.assertIs(chain.pred_to_joint[new_index],
                          topology.pred_to_joint[i])
            self.assertIs(chain.joint_to_succ[new_index],
                          topology.joint_to_succ[i])
        self.assertEqual(topology.nr_bodies, 9)

        safe_chain = jac.safe_sub_topology(topology)
        self.assertEqual(safe_chain.parents, chain.parents)

    def test_sub_topology_jacobian(self):
        topology = skchain.models.branching_tree()
        config = random_configuration(topology)
        jac = Jacobian(topology, 'l_hand', point=[0, 0.1, 0])
        J = jac.jacobian(topology, config, copy=True)

        chain = jac.sub_topology(topology)
        chain_config = Configuration(chain)
        chain_config.q = [config.q[i] for i in jac.joints_path]
        forward_kinematics(chain, chain_config)
        chain_jac = Jacobian(chain, 'l_hand', point=[0, 0.1, 0])
        self.assertEqual(chain_jac.joints_path, (0, 1, 2, 3))
        testing.assert_almost_equal(chain_jac.jacobian(chain, chain_config), J)

    def test_safe_sub_topology_mismatch(self):
        topology = skchain.models.planar_arm(5)
        jac = Jacobian(topology, 'link4')
        with self.assertRaises(TopologyMismatchError):
            jac.safe_sub_topology(skchain.models.planar_arm(3))
        self.assertEqual(
            jac.safe_sub_topology(skchain.models.planar_arm(6)).nr_joints, 5)

    def test_independent_instances(self):
        topology = skchain.models.planar_arm(3)
        config = random_configuration(topology)
        jac1 = Jacobian(topology, 'link2')
        jac2 = Jacobian(topology, 'link2')
        J1 = jac1.jacobian(topology, config)
        J2 = jac2.jacobian(topology, config)
        self.assertIsNot(J1, J2)
        testing.assert_array_equal(J1, J2)
