#!/usr/bin/env python
"""Benchmark script for Jacobian computation.

Compares the buffer reusing call with the copying one on planar arms of
several lengths.

Usage:
    python benchmarks/jacobian_benchmark.py
    python benchmarks/jacobian_benchmark.py --links 5 20 50 --iterations 5000
"""

import argparse
import time

import numpy as np

from skchain.kinematics import Jacobian
from skchain.model import Configuration
from skchain.model import forward_kinematics
import skchain.models


def benchmark_arm(n_links, n_iterations, seed=42):
    """Benchmark Jacobian computation on a planar arm.

    Parameters
    ----------
    n_links : int
        Number of links of the arm.
    n_iterations : int
        Number of Jacobian computations.
    seed : int
        Random seed.

    Returns
    -------
    dict
        Benchmark results.
    """
    topology = skchain.models.planar_arm(n_links)
    config = Configuration(topology)
    config.set_q(topology,
                 np.random.RandomState(seed).uniform(-np.pi, np.pi, n_links))
    forward_kinematics(topology, config)
    jac = Jacobian(topology, 'link{}'.format(n_links - 1), point=[0.5, 0, 0])

    results = {'n_links': n_links}
    for copy in (False, True):
        t_start = time.time()
        for _ in range(n_iterations):
            jac.jacobian(topology, config, copy=copy)
        results['copy' if copy else 'reuse'] = time.time() - t_start
    return results


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark Jacobian computation")
    parser.add_argument(
        '--links', type=int, nargs='+', default=[3, 7, 20, 50],
        help='Arm lengths to test')
    parser.add_argument(
        '--iterations', type=int, default=2000,
        help='Number of computations per arm')
    args = parser.parse_args()

    print(f"{'Links':>6} {'reuse (s)':>12} {'copy (s)':>12} {'jac/sec':>12}")
    print("-" * 46)
    for n_links in args.links:
        r = benchmark_arm(n_links, args.iterations)
        rate = args.iterations / r['reuse']
        print(f"{r['n_links']:>6} {r['reuse']:>12.3f} {r['copy']:>12.3f} "
              f"{rate:>12,.0f}")


if __name__ == '__main__':
    main()
