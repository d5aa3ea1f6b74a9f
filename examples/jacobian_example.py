#!/usr/bin/env python

import argparse

import numpy as np

from skchain.kinematics import Jacobian
from skchain.model import Configuration
from skchain.model import forward_kinematics
import skchain.models


def main():
    parser = argparse.ArgumentParser(
        description='Compute the Jacobian of a hand point of a tree')
    parser.add_argument(
        '--body', type=str, default='r_hand',
        help='Name of the target body')
    parser.add_argument(
        '--no-interactive', action='store_true',
        help='Run without printing the full matrices')
    args = parser.parse_args()

    topology = skchain.models.branching_tree()
    config = Configuration(topology)
    config.q[2] = np.array([0.4])
    config.q[5] = np.array([-0.3])
    config.q[8] = np.array([0.2])
    forward_kinematics(topology, config)

    jac = Jacobian(topology, args.body, point=[0, 0, -0.1])
    print('joints path: {}'.format(
        [topology.joint(i).name for i in jac.joints_path]))
    print('dof: {}'.format(jac.dof))

    J = jac.safe_jacobian(topology, config, copy=True)
    full = jac.full_jacobian(topology, J)
    chain = jac.safe_sub_topology(topology)
    print('jacobian shape: {}, full jacobian shape: {}'.format(
        J.shape, full.shape))
    print('sub chain: {}'.format(chain))
    if not args.no_interactive:
        np.set_printoptions(precision=3, suppress=True)
        print(J)


if __name__ == '__main__':
    main()
