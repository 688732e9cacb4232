import logging
import collections

logger = logging.getLogger(__name__)


JoinCandidate = collections.namedtuple('JoinCandidate', ['index', 'weight'])


def pvar_diff(diff, p):
    """The increment used in p-variation, i.e. |diff|^p"""
    return abs(diff) ** p


# ===========================================================================================================
# Admissible points
# ===========================================================================================================
class AdmissiblePoints():
    """Doubly linked list of admissible points, stored as three arrays indexed by position in the sequence.

       - prev[i]: index of the preceding admissible point
       - next[i]: index of the following admissible point, n for the last one
       - weight[i]: |x[i] - x[prev[i]]|^p, the contribution of the edge ending at i
    """

    def __init__(self, n):
        self.n = n
        self.prev = [0] * n
        self.next = [n] * n
        self.weight = [0.0] * n

    def link(self, a, b, weight):
        """Join a -> b directly, dropping every point in between"""
        assert 0 <= a < b < self.n, f"link ({a}, {b}) out of bounds for {self.n} points"
        self.next[a] = b
        self.prev[b] = a
        self.weight[b] = weight

    def points(self):
        i = 0
        out = []
        while i < self.n:
            out.append(i)
            i = self.next[i]
        return out

    def __len__(self):
        count = 0
        i = 0
        while i < self.n:
            count += 1
            i = self.next[i]
        return count


# ===========================================================================================================
# Stage 1: local extrema
# ===========================================================================================================
def detect_local_extrema(x, links, p):
    """Put the endpoints and the local extrema of x in the chain.
       Flat runs do not change the direction, so ties never create an extremum.
    """
    n = len(x)
    last_extremum = 0
    direction = 0

    links.prev[0] = 0
    links.weight[0] = 0.0
    links.next[n - 1] = n

    for i in range(n):
        j = i + 1
        if j != n:
            if x[j] > x[i]:
                new_extremum = (direction == -1)
                direction = 1
            elif x[j] < x[i]:
                new_extremum = (direction == 1)
                direction = -1
            else:
                new_extremum = False
        else:
            new_extremum = True
        if new_extremum:
            links.link(last_extremum, i, pvar_diff(x[i] - x[last_extremum], p))
            last_extremum = i


# ===========================================================================================================
# Stage 2: intervals of three edges
# ===========================================================================================================
def check_short_intervals(x, links, p):
    """Make sure that all intervals of three edges are optimal.

       If |x[begin] - x[end]|^p > sum of the weights strictly inside [begin, end]
       while all shorter intervals are optimal, then the middle points are redundant.
    """
    n = len(x)
    csum = 0.0
    int_begin = int_end = 0
    for _ in range(3):
        int_end = links.next[int_end]
        if int_end == n:
            return
        csum += links.weight[int_end]

    while True:
        fjoin = pvar_diff(x[int_begin] - x[int_end], p)
        if csum >= fjoin:
            # middle points are significant, slide the window by one edge
            int_end = links.next[int_end]
            if int_end == n:
                return
            int_begin = links.next[int_begin]
            csum -= links.weight[int_begin]
            csum += links.weight[int_end]
        else:
            links.link(int_begin, int_end, fjoin)
            int_begin = int_end
            # the neighbouring windows changed, rebuild three edges around the new joint
            csum = 0.0
            for _ in range(3):
                if int_begin > 0:
                    csum += links.weight[int_begin]
                    int_begin = links.prev[int_begin]
                else:
                    int_end = links.next[int_end]
                    if int_end == n:
                        return
                    csum += links.weight[int_end]


# ===========================================================================================================
# Stage 3: merging optimal intervals
# ===========================================================================================================
class IntervalMerger():
    """Merges two adjacent optimal intervals [a, v] and [v, b] into one optimal interval [a, b].

       The four candidate lists are scratch space owned by the merger and reused by every merge.
    """

    def __init__(self, x, links, p):
        self.x = x
        self.links = links
        self.p = p
        self.av_mins = []
        self.av_maxs = []
        self.vb_mins = []
        self.vb_maxs = []

    def reset(self):
        self.av_mins.clear()
        self.av_maxs.clear()
        self.vb_mins.clear()
        self.vb_maxs.clear()

    def fill(self, a, v, b):
        """Collect the running extrema of [a, v) and (v, b], walking away from v"""
        x, links = self.x, self.links

        ev = 0.0
        it = v
        amin = amax = x[v]
        while it != a:
            ev += links.weight[it]
            it = links.prev[it]
            if x[it] > amax:
                amax = x[it]
                self.av_maxs.append(JoinCandidate(it, ev))
            if x[it] < amin:
                amin = x[it]
                self.av_mins.append(JoinCandidate(it, ev))

        ev = 0.0
        it = v
        bmin = bmax = x[v]
        while it != b:
            it = links.next[it]
            ev += links.weight[it]
            if x[it] > bmax:
                bmax = x[it]
                self.vb_maxs.append(JoinCandidate(it, ev))
            if x[it] < bmin:
                bmin = x[it]
                self.vb_mins.append(JoinCandidate(it, ev))

    def best_joint(self, lefts, rights, best):
        """Scan lefts x rights for a joint with a balance above best[0].
           The cursor into rights is kept across the outer loop.
        """
        x, p = self.x, self.p
        cursor = 0
        for left in lefts:
            for k in range(cursor, len(rights)):
                right = rights[k]
                fjoin = pvar_diff(x[left.index] - x[right.index], p)
                balance = fjoin - right.weight - left.weight
                if balance > best[0]:
                    best[:] = [balance, fjoin, left.index, right.index]
                    cursor = k
        return best

    def __call__(self, a, v, b):
        if a == v or v == b:
            return False

        self.reset()
        self.fill(a, v, b)

        # [max balance, joint weight, left index, right index]
        best = [0.0, 0.0, a, b]
        self.best_joint(self.av_mins, self.vb_maxs, best)
        self.best_joint(self.av_maxs, self.vb_mins, best)

        if best[0] > 0:
            self.links.link(best[2], best[3], best[1])
            return True
        return False


def interval_boundaries(links, LSI):
    """Every LSI-th admissible point, followed by the last point"""
    boundaries = []
    it = 0
    count = 0
    while it < links.n:
        if count % LSI == 0:
            boundaries.append(it)
        count += 1
        it = links.next[it]
    boundaries.append(links.n - 1)
    return boundaries


def merge_intervals_recursively(x, links, p, LSI=2):
    """Merge adjacent optimal intervals pairwise until a single interval spans the sequence.
       LSI is the length of the optimal intervals in the beginning.
    """
    merge = IntervalMerger(x, links, p)
    boundaries = interval_boundaries(links, LSI)

    rounds = 0
    while len(boundaries) > 2:
        merged = []
        i = 0
        while i + 2 < len(boundaries):
            merge(boundaries[i], boundaries[i + 1], boundaries[i + 2])
            merged.append(boundaries[i])
            i += 2
        merged.extend(boundaries[i:])
        boundaries = merged
        rounds += 1
    logger.debug("merged intervals in %d rounds", rounds)
    return rounds


# ===========================================================================================================
# Stage 4: accumulation
# ===========================================================================================================
def accumulate(links):
    value = 0.0
    i = 0
    while i < links.n:
        value += links.weight[i]
        i = links.next[i]
    return value


def p_var_links(x, p, LSI=4):
    """Runs the elimination pipeline on a sequence of length >= 3 and returns the final chain"""
    links = AdmissiblePoints(len(x))
    debug = logger.isEnabledFor(logging.DEBUG)
    detect_local_extrema(x, links, p)
    if debug:
        logger.debug("%d of %d points are local extrema", len(links), len(x))
    check_short_intervals(x, links, p)
    if debug:
        logger.debug("%d points left after checking short intervals", len(links))
    merge_intervals_recursively(x, links, p, LSI)
    if debug:
        logger.debug("%d points in the optimal subsequence", len(links))
    return links
