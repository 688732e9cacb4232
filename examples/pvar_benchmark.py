import argparse
import logging
import time

import numpy as np

import pvariation
from pvariation.tools import random_walk


def ex_bm(n, backends, rng):
    # Example: random walk made of iid -1/+1 increments, checked against the dynamic program
    print(f'\nPoor man\'s Brownian path with {n} steps:')
    path = random_walk(n, scale=1. / np.sqrt(n), rng=rng)

    for p in [1.0, np.sqrt(2), 2.0, np.exp(1)]:
        pv_ref_start = time.time()
        pv_ref = pvariation.p_var_ref(path, p)
        pv_ref_time = time.time() - pv_ref_start
        for backend in backends:
            pv_start = time.time()
            pv = pvariation.p_var_points(path, p, backend=backend)
            pv_time = time.time() - pv_start
            pv_err = abs(pv.value - pv_ref.value) + pvariation.p_var_points_check(pv, path, p)
            print(f'{p:5.2f}-variation [{backend:>6}]: {pv.value:7.2f}, sequence length: {len(pv.points):5d}, '
                  f'error {pv_err:.2e}, time: {pv_time:7.4f}, reference time: {pv_ref_time:7.2f}')


def ex_bm_long(backends, rng):
    # Example: long random walks, no error check
    print('\nVery poor man\'s very long Brownian path:')
    for n in [10, 100, 1000, 10000, 100000, 1000000]:
        path = random_walk(n, scale=1. / np.sqrt(n), rng=rng)
        p = 2.25
        for backend in backends:
            pv_start = time.time()
            pv = pvariation.p_var_points(path, p, backend=backend)
            pv_time = time.time() - pv_start
            print(f'{n:10d} steps [{backend:>6}]: {p:5.2f}-variation: {pv.value:7.2f}, '
                  f'sequence length: {len(pv.points):5d}, time: {pv_time:7.4f}')


if __name__ == '__main__':

    parser = argparse.ArgumentParser()
    parser.add_argument('-n', '--steps', help='Number of steps of the checked random walk.', type=int, default=2500)
    parser.add_argument('-b', '--backend', help='Backend to time, all of them by default.', choices=pvariation.BACKENDS, action='append')
    parser.add_argument('-l', '--long', help='Also time very long random walks.', action='store_true')
    parser.add_argument('-s', '--seed', help='Random seed.', type=int, default=0)
    parser.add_argument('-v', '--verbose', help='Print the stage sizes.', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    backends = args.backend or list(pvariation.BACKENDS)
    rng = np.random.default_rng(args.seed)

    if 'numba' in backends:
        # compile before timing
        pvariation.pvar([0., 1., 0.], 2., backend='numba')

    ex_bm(args.steps, backends, rng)
    if args.long:
        ex_bm_long(backends, rng)
