import math
import itertools
import collections


p_var = collections.namedtuple('p_var', ['value', 'points'])


def p_var_ref(x, p):
    # Reference dynamic program over increasing subsequences, O(n^2) but obviously correct.
    # cum_p_var[j] is the best sum over subsequences of x[0..j] ending at j.
    n = len(x)
    if n <= 1:
        return p_var(value=0.0, points=list(range(n)))
    cum_p_var = [0.0] * n
    point_links = [0] * n
    for j in range(1, n):
        for m in range(0, j):
            candidate = cum_p_var[m] + pow(abs(x[j] - x[m]), p)
            if candidate > cum_p_var[j]:
                cum_p_var[j] = candidate
                point_links[j] = m

    points = []
    point_i = n - 1
    while True:
        points.append(point_i)
        if point_i == 0:
            break
        point_i = point_links[point_i]
    points.reverse()
    return p_var(value=cum_p_var[-1], points=points)


def p_var_brute_force(x, p):
    # Exhaustive search over all subsequences containing both endpoints, only usable for tiny n.
    # Dropping an endpoint never increases the sum, so they can always be kept.
    n = len(x)
    if n <= 1:
        return 0.0
    best = 0.0
    inner = range(1, n - 1)
    for k in range(0, n - 1):
        for middle in itertools.combinations(inner, k):
            points = (0,) + middle + (n - 1,)
            best = max(best, sum(pow(abs(x[b] - x[a]), p) for a, b in zip(points[:-1], points[1:])))
    return best


def p_var_points_check(ret, x, p):
    # Check whether the p-variation ret.value is indeed reached on the sequence ret.points.
    # Return abs value of the error.
    if len(ret.points) == 0:
        return abs(ret.value) if len(x) == 0 else math.inf

    if any(b <= a for a, b in zip(ret.points[:-1], ret.points[1:])):
        return math.inf

    v = 0.0
    for k in range(1, len(ret.points)):
        v += pow(abs(x[ret.points[k]] - x[ret.points[k-1]]), p)
    return abs(v - ret.value)
