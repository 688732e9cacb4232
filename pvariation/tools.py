import numpy as np
import math


def white(steps, width=1, time=1.):
    mu, sigma = 0, math.sqrt(time / steps)
    return np.random.normal(mu, sigma, (steps, width))

def brownian(steps, width=1, time=1.):
    path = np.zeros((steps + 1, width))
    np.cumsum(white(steps, width, time), axis=0, out=path[1:, :])
    return path

def random_walk(steps, scale=1., rng=None):
    """1-D walk of iid -1/+1 increments, returned as a numpy array of length steps + 1"""
    rng = np.random.default_rng() if rng is None else rng
    path = np.zeros(steps + 1)
    np.cumsum(scale * rng.choice([-1., 1.], size=steps), out=path[1:])
    return path
