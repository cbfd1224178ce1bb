"""
The seven instrumented sorts.

Each sort is a generator over an ArrayModel that mutates it in place and
yields a StepEvent right after every observable action. A generator only
touches the array while it is being resumed, so whoever drives it decides
when (and whether) the next step happens.
"""
import enum

from .model import StepEvent, StepKind

C, S, P = StepKind.COMPARE, StepKind.SWAP, StepKind.PLACE


# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================

def bubble_sort(a):
    n = len(a)
    for i in range(n - 1):
        for j in range(n - i - 1):
            yield StepEvent(C, j, j+1, a.get(j+1))
            if a.get(j) > a.get(j+1):
                a.swap(j, j+1); yield StepEvent(S, j, j+1, a.get(j))


def random_sort(a):
    """
    Scan for an adjacent inversion; if there is one, swap two random indices.

    The swap is not aimed at the inversion and the two indices may coincide,
    so this only ends when chance leaves the array sorted.
    """
    n = len(a)
    while True:
        inversion = False
        for i in range(n - 1):
            yield StepEvent(C, i, i+1, a.get(i))
            if a.get(i) > a.get(i+1):
                inversion = True
                break
        if not inversion:
            return
        j = int(a.rng.integers(0, n))
        i = int(a.rng.integers(0, n))
        a.swap(i, j); yield StepEvent(S, i, j, a.get(i))


def insertion_sort(a):
    for i in range(1, len(a)):
        key = a.get(i); j = i - 1
        while j >= 0 and a.get(j) > key:
            a.set(j+1, a.get(j)); yield StepEvent(P, j+1, j, a.get(j+1))
            j -= 1
        a.set(j+1, key); yield StepEvent(P, j+1, None, key)


def selection_sort(a):
    n = len(a)
    for i in range(n - 1):
        mi = i
        for j in range(i+1, n):
            if a.get(j) < a.get(mi): mi = j
            yield StepEvent(C, j, mi, a.get(j))
        a.swap(i, mi); yield StepEvent(S, i, mi, a.get(i))


def merge_sort(a):
    def _merge(lo, mid, hi):
        left  = [a.get(k) for k in range(lo, mid+1)]
        right = [a.get(k) for k in range(mid+1, hi+1)]
        i = j = 0; k = lo
        while i < len(left) and j < len(right):
            if left[i] <= right[j]: a.set(k, left[i]); i += 1
            else:                   a.set(k, right[j]); j += 1
            yield StepEvent(P, k, None, a.get(k)); k += 1
        while i < len(left):
            a.set(k, left[i]); yield StepEvent(P, k, None, left[i]); i += 1; k += 1
        while j < len(right):
            a.set(k, right[j]); yield StepEvent(P, k, None, right[j]); j += 1; k += 1

    def _ms(lo, hi):
        if lo < hi:
            mid = (lo + hi) // 2
            yield from _ms(lo, mid); yield from _ms(mid+1, hi)
            yield from _merge(lo, mid, hi)

    yield from _ms(0, len(a) - 1)


def quick_sort(a):
    def _partition(lo, hi):
        pivot = a.get(hi); i = lo - 1
        for j in range(lo, hi):
            if a.get(j) < pivot:
                i += 1; a.swap(i, j); yield StepEvent(S, j, i, a.get(j))
        a.swap(i+1, hi); yield StepEvent(S, i+1, hi, a.get(i+1))
        return i + 1

    def _q(lo, hi):
        if lo < hi:
            p = yield from _partition(lo, hi)
            yield from _q(lo, p - 1); yield from _q(p + 1, hi)

    yield from _q(0, len(a) - 1)


def bucket_layout(values):
    """Distribute `values` into floor(max/10)+1 buckets, keeping arrival order."""
    if not values:
        return []
    buckets = [[] for _ in range(max(values) // 10 + 1)]
    for v in values:
        buckets[v // 10].append(v)
    return buckets


def bucket_sort(a):
    # Distribution reads the array without writing it, so the layout can be
    # taken up front and the steps replayed index by index.
    buckets = bucket_layout(list(a.snapshot()))
    for i in range(len(a)):
        yield StepEvent(P, i, None, a.get(i))
    k = 0
    for bk in buckets:
        for v in sorted(bk):
            a.set(k, v); yield StepEvent(P, k, None, v); k += 1


# ============================================================
# ========================= REGISTRY =========================
# ============================================================

class Algorithm(enum.Enum):
    BUBBLE    = ("bubble",    "Bubble Sort")
    RANDOM    = ("random",    "Random Sort")
    INSERTION = ("insertion", "Insertion Sort")
    SELECTION = ("selection", "Selection Sort")
    MERGE     = ("merge",     "Merge Sort")
    QUICK     = ("quick",     "Quick Sort")
    BUCKET    = ("bucket",    "Bucket Sort")

    def __init__(self, key, display_name):
        self.key = key
        self.display_name = display_name

    @classmethod
    def lookup(cls, name):
        """Find an algorithm by member, key ("quick") or display name ("Quick Sort")."""
        if isinstance(name, cls):
            return name
        wanted = str(name).strip().lower()
        for algo in cls:
            if wanted in (algo.key, algo.display_name.lower(), algo.name.lower()):
                return algo
        raise KeyError(f"Unknown algorithm: {name!r}")


_GENERATORS = {
    Algorithm.BUBBLE:    bubble_sort,
    Algorithm.RANDOM:    random_sort,
    Algorithm.INSERTION: insertion_sort,
    Algorithm.SELECTION: selection_sort,
    Algorithm.MERGE:     merge_sort,
    Algorithm.QUICK:     quick_sort,
    Algorithm.BUCKET:    bucket_sort,
}


def get_generator(algorithm, model):
    return _GENERATORS[Algorithm.lookup(algorithm)](model)
