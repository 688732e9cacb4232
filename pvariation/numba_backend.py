import numpy as np
from numba import njit


# ===========================================================================================================
# The elimination pipeline compiled with numba. The doubly linked list of admissible points is held in
# three arrays (prev, nxt, weight) of the length of the sequence; nxt[i] == n marks the last point.
# ===========================================================================================================
@njit
def pvar_diff(diff, p):
    return abs(diff) ** p


@njit
def detect_local_extrema(x, prev, nxt, weight, p):
    n = x.shape[0]
    last_extremum = 0
    direction = 0
    new_extremum = False

    prev[0] = 0
    weight[0] = 0.
    nxt[n-1] = n

    for i in range(n):
        j = i + 1
        if j != n:
            if x[j] > x[i]:
                new_extremum = direction == -1
                direction = 1
            elif x[j] < x[i]:
                new_extremum = direction == 1
                direction = -1
            else:
                new_extremum = False
        else:
            new_extremum = True
        if new_extremum:
            nxt[last_extremum] = i
            prev[i] = last_extremum
            weight[i] = pvar_diff(x[i] - x[last_extremum], p)
            last_extremum = i


@njit
def check_short_intervals(x, prev, nxt, weight, p):
    n = x.shape[0]
    csum = 0.
    int_begin = 0
    int_end = 0
    for _ in range(3):
        int_end = nxt[int_end]
        if int_end == n:
            return
        csum += weight[int_end]

    while True:
        fjoin = pvar_diff(x[int_begin] - x[int_end], p)
        if csum >= fjoin:
            int_end = nxt[int_end]
            if int_end == n:
                return
            int_begin = nxt[int_begin]
            csum -= weight[int_begin]
            csum += weight[int_end]
        else:
            nxt[int_begin] = int_end
            prev[int_end] = int_begin
            weight[int_end] = fjoin
            int_begin = int_end
            csum = 0.
            for _ in range(3):
                if int_begin > 0:
                    csum += weight[int_begin]
                    int_begin = prev[int_begin]
                else:
                    int_end = nxt[int_end]
                    if int_end == n:
                        return
                    csum += weight[int_end]


@njit
def best_joint(x, p, left_it, left_ev, n_left, right_it, right_ev, n_right, maxbalance, takefjoin, best_l, best_r):
    # the cursor into the right candidates is kept across the outer loop
    cursor = 0
    for i in range(n_left):
        for k in range(cursor, n_right):
            fjoin = pvar_diff(x[left_it[i]] - x[right_it[k]], p)
            balance = fjoin - right_ev[k] - left_ev[i]
            if balance > maxbalance:
                maxbalance = balance
                takefjoin = fjoin
                best_l = left_it[i]
                best_r = right_it[k]
                cursor = k
    return maxbalance, takefjoin, best_l, best_r


@njit
def merge_two_good_intervals(x, prev, nxt, weight, p, a, v, b, scratch_it, scratch_ev):
    """scratch_it, scratch_ev: arrays of shape (4, n) holding the candidates of
       [a,v) minima, [a,v) maxima, (v,b] minima and (v,b] maxima, in that order.
    """
    if a == v or v == b:
        return

    n_av_mins = 0
    n_av_maxs = 0
    n_vb_mins = 0
    n_vb_maxs = 0

    ev = 0.
    it = v
    amin = x[v]
    amax = x[v]
    while it != a:
        ev += weight[it]
        it = prev[it]
        if x[it] > amax:
            amax = x[it]
            scratch_it[1, n_av_maxs] = it
            scratch_ev[1, n_av_maxs] = ev
            n_av_maxs += 1
        if x[it] < amin:
            amin = x[it]
            scratch_it[0, n_av_mins] = it
            scratch_ev[0, n_av_mins] = ev
            n_av_mins += 1

    ev = 0.
    it = v
    bmin = x[v]
    bmax = x[v]
    while it != b:
        it = nxt[it]
        ev += weight[it]
        if x[it] > bmax:
            bmax = x[it]
            scratch_it[3, n_vb_maxs] = it
            scratch_ev[3, n_vb_maxs] = ev
            n_vb_maxs += 1
        if x[it] < bmin:
            bmin = x[it]
            scratch_it[2, n_vb_mins] = it
            scratch_ev[2, n_vb_mins] = ev
            n_vb_mins += 1

    maxbalance, takefjoin, best_l, best_r = best_joint(x, p,
                                                       scratch_it[0], scratch_ev[0], n_av_mins,
                                                       scratch_it[3], scratch_ev[3], n_vb_maxs,
                                                       0., 0., a, b)
    maxbalance, takefjoin, best_l, best_r = best_joint(x, p,
                                                       scratch_it[1], scratch_ev[1], n_av_maxs,
                                                       scratch_it[2], scratch_ev[2], n_vb_mins,
                                                       maxbalance, takefjoin, best_l, best_r)

    if maxbalance > 0:
        assert a <= best_l and best_l < best_r and best_r <= b, "joint out of the merged interval"
        nxt[best_l] = best_r
        prev[best_r] = best_l
        weight[best_r] = takefjoin


@njit
def merge_intervals_recursively(x, prev, nxt, weight, p, LSI):
    n = x.shape[0]
    scratch_it = np.zeros((4, n), dtype=np.int64)
    scratch_ev = np.zeros((4, n), dtype=np.float64)

    boundaries = np.zeros(n + 1, dtype=np.int64)
    m = 0
    it = 0
    count = 0
    while it < n:
        if count % LSI == 0:
            boundaries[m] = it
            m += 1
        count += 1
        it = nxt[it]
    boundaries[m] = n - 1
    m += 1

    # each round merges (L0,L1,L2), (L2,L3,L4), ... and compacts the surviving boundaries in place
    while m > 2:
        k = 0
        i = 0
        while i + 2 < m:
            merge_two_good_intervals(x, prev, nxt, weight, p,
                                     boundaries[i], boundaries[i+1], boundaries[i+2],
                                     scratch_it, scratch_ev)
            boundaries[k] = boundaries[i]
            k += 1
            i += 2
        while i < m:
            boundaries[k] = boundaries[i]
            k += 1
            i += 1
        m = k


@njit
def p_var_links(x, p, LSI):
    """Input:
              - x: float64 array of shape (n,), n >= 3
              - p: exponent
              - LSI: initial length of the optimal intervals
       Output:
              - (nxt, weight) arrays describing the optimal subsequence
    """
    n = x.shape[0]
    prev = np.zeros(n, dtype=np.int64)
    nxt = np.zeros(n, dtype=np.int64)
    nxt[:] = n
    weight = np.zeros(n, dtype=np.float64)

    detect_local_extrema(x, prev, nxt, weight, p)
    check_short_intervals(x, prev, nxt, weight, p)
    merge_intervals_recursively(x, prev, nxt, weight, p, LSI)
    return nxt, weight


@njit
def accumulate(nxt, weight):
    n = nxt.shape[0]
    value = 0.
    i = 0
    while i < n:
        value += weight[i]
        i = nxt[i]
    return value


@njit
def chain_points(nxt):
    n = nxt.shape[0]
    count = 0
    i = 0
    while i < n:
        count += 1
        i = nxt[i]
    points = np.zeros(count, dtype=np.int64)
    i = 0
    for k in range(count):
        points[k] = i
        i = nxt[i]
    return points
