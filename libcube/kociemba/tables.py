"""
Move and pruning tables for two-phase search. Tables are built with numpy once per process,
optionally kept in npz file between runs
"""
import os
import time
import zipfile
import logging
import threading
import numpy as np

from ..cubes.cubies import MOVE_CUBES
from . import coords

log = logging.getLogger("cube.tables")

# states expanded in one numpy step of breadth-first search
BFS_CHUNK = 1 << 18

TABLE_NAMES = (
    'twist_move', 'flip_move', 'slice_move',
    'corner_move', 'ud_edge_move', 'slice_perm_move',
    'prune_twist_slice', 'prune_flip_slice',
    'prune_corner_slice', 'prune_edge_slice',
)


def build_twist_move():
    co = coords.all_twists()
    res = np.zeros((coords.N_TWIST, coords.N_MOVES), dtype=np.int16)
    for m, cube in enumerate(MOVE_CUBES):
        res[:, m] = coords.twist_of((co[:, cube.cp] + np.array(cube.co)) % 3)
    return res


def build_flip_move():
    eo = coords.all_flips()
    res = np.zeros((coords.N_FLIP, coords.N_MOVES), dtype=np.int16)
    for m, cube in enumerate(MOVE_CUBES):
        res[:, m] = coords.flip_of((eo[:, cube.ep] + np.array(cube.eo)) % 2)
    return res


def build_slice_move():
    occ = coords.all_slice_occupancies()
    res = np.zeros((coords.N_SLICE, coords.N_MOVES), dtype=np.int16)
    for m, cube in enumerate(MOVE_CUBES):
        res[:, m] = coords.slice_of(occ[:, cube.ep])
    return res


def _phase2_perm_move(size, get_perm):
    perms = coords.all_permutations(size)
    res = np.zeros((len(perms), coords.N_PHASE2_MOVES), dtype=np.int32)
    for k, m in enumerate(coords.PHASE2_MOVES):
        perm = get_perm(MOVE_CUBES[m])
        assert sorted(perm) == list(range(size))
        res[:, k] = coords.perm_rank(perms[:, perm])
    return res


def build_corner_move():
    return _phase2_perm_move(8, lambda c: c.cp)


def build_ud_edge_move():
    return _phase2_perm_move(8, lambda c: c.ep[:8])


def build_slice_perm_move():
    return _phase2_perm_move(4, lambda c: [e - 8 for e in c.ep[8:]])


def build_pruning(move_a, move_b, start_a=0, start_b=0):
    """
    Distances to goal in product of two coordinates, found by breadth-first search
    :param move_a: move table of first coordinate, shape (n_a, moves)
    :param move_b: move table of second coordinate, shape (n_b, moves)
    :return: int8 array of n_a * n_b distances indexed by a * n_b + b, -1 for unreached
    """
    assert move_a.shape[1] == move_b.shape[1]
    n_b = len(move_b)
    move_a = move_a.astype(np.int64)
    move_b = move_b.astype(np.int64)
    dist = np.full(len(move_a) * n_b, -1, dtype=np.int8)
    start = start_a * n_b + start_b
    dist[start] = 0
    frontier = np.array([start], dtype=np.int64)
    depth = 0
    while frontier.size:
        depth += 1
        found = []
        for ofs in range(0, frontier.size, BFS_CHUNK):
            a, b = np.divmod(frontier[ofs:ofs + BFS_CHUNK], n_b)
            nxt = (move_a[a] * n_b + move_b[b]).ravel()
            nxt = np.unique(nxt[dist[nxt] < 0])
            dist[nxt] = depth
            found.append(nxt)
        frontier = np.unique(np.concatenate(found))
        log.debug("Depth %d: %d new states", depth, frontier.size)
    return dist


def build():
    """
    Build all tables from scratch
    :return: dict of name -> numpy array
    """
    ts = time.time()
    res = {
        'twist_move': build_twist_move(),
        'flip_move': build_flip_move(),
        'slice_move': build_slice_move(),
        'corner_move': build_corner_move(),
        'ud_edge_move': build_ud_edge_move(),
        'slice_perm_move': build_slice_perm_move(),
    }
    log.info("Move tables built in %.2f sec", time.time() - ts)
    ts = time.time()
    res['prune_twist_slice'] = build_pruning(res['twist_move'], res['slice_move'], start_b=coords.SOLVED_SLICE)
    res['prune_flip_slice'] = build_pruning(res['flip_move'], res['slice_move'], start_b=coords.SOLVED_SLICE)
    res['prune_corner_slice'] = build_pruning(res['corner_move'], res['slice_perm_move'])
    res['prune_edge_slice'] = build_pruning(res['ud_edge_move'], res['slice_perm_move'])
    log.info("Pruning tables built in %.2f sec", time.time() - ts)
    return res


class Tables:
    """
    Tables converted to python lists and bytes, which are the fastest to index from plain python search
    """
    def __init__(self, arrays):
        missing = [name for name in TABLE_NAMES if name not in arrays]
        assert not missing, "Missing tables: %s" % missing
        self.arrays = arrays
        self.twist_move = arrays['twist_move'].tolist()
        self.flip_move = arrays['flip_move'].tolist()
        self.slice_move = arrays['slice_move'].tolist()
        self.corner_move = arrays['corner_move'].tolist()
        self.ud_edge_move = arrays['ud_edge_move'].tolist()
        self.slice_perm_move = arrays['slice_perm_move'].tolist()
        # unreached entries become 255 and cut the branch
        self.prune_twist_slice = arrays['prune_twist_slice'].astype(np.uint8).tobytes()
        self.prune_flip_slice = arrays['prune_flip_slice'].astype(np.uint8).tobytes()
        self.prune_corner_slice = arrays['prune_corner_slice'].astype(np.uint8).tobytes()
        self.prune_edge_slice = arrays['prune_edge_slice'].astype(np.uint8).tobytes()

    def __repr__(self):
        return "Tables(%s)" % ", ".join("%s=%s" % (name, self.arrays[name].shape) for name in TABLE_NAMES)

    def phase1_h(self, twist, flip, slc):
        return max(self.prune_twist_slice[twist * coords.N_SLICE + slc],
                   self.prune_flip_slice[flip * coords.N_SLICE + slc])

    def phase2_h(self, corner, edge, slc_perm):
        return max(self.prune_corner_slice[corner * coords.N_SLICE_PERM + slc_perm],
                   self.prune_edge_slice[edge * coords.N_SLICE_PERM + slc_perm])


def _read_cache(file_name):
    try:
        with np.load(file_name) as data:
            arrays = {name: data[name] for name in data.files}
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        log.error("Can't read tables cache %s, rebuilding: %s", file_name, e)
        return None
    missing = [name for name in TABLE_NAMES if name not in arrays]
    if missing:
        log.warning("Cache %s misses tables %s, rebuilding", file_name, ", ".join(missing))
        return None
    return arrays


def _cache_name(cache):
    # np.savez_compressed appends the suffix itself
    if cache is not None and not cache.endswith(".npz"):
        return cache + ".npz"
    return cache


def save_cache(arrays, file_name):
    np.savez_compressed(file_name, **arrays)
    log.info("Tables saved to %s", file_name)


def load_arrays(cache=None):
    """
    Read tables from cache file or build them, saving result to the cache
    :param cache: optional npz file name, suffix is added when missing
    :return: dict of name -> numpy array
    """
    cache = _cache_name(cache)
    arrays = None
    if cache is not None and os.path.isfile(cache):
        log.info("Loading tables from %s", cache)
        arrays = _read_cache(cache)
    if arrays is None:
        arrays = build()
        if cache is not None:
            save_cache(arrays, cache)
    return arrays


_lock = threading.Lock()
_tables = None


def load(cache=None):
    """
    Return process-wide tables, building them on first call. When tables are already
    in memory, other cache file is only written if it doesn't exist yet
    :param cache: optional npz file name to read tables from or save them to
    """
    global _tables
    cache = _cache_name(cache)
    with _lock:
        if _tables is None:
            _tables = Tables(load_arrays(cache))
        elif cache is not None and not os.path.isfile(cache):
            log.info("Tables already loaded, writing them to %s", cache)
            save_cache(_tables.arrays, cache)
        return _tables
