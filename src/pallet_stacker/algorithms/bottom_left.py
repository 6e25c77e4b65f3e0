"""Bottom-left-fill packing of one layer with per-box orientation choice."""

DEFAULT_MAX_ATTEMPTS = 1000


def can_place(x, y, w, l, occupied, max_w, max_l):
    """Return ``True`` when the rectangle is in bounds and overlaps nothing.

    Touching edges are allowed; only a strict interior overlap blocks.
    """
    if x < 0 or y < 0 or x + w > max_w or y + l > max_l:
        return False
    for ox, oy, ow, ol in occupied:
        if x < ox + ow and x + w > ox and y < oy + ol and y + l > oy:
            return False
    return True


def find_position(box_l, box_w, max_l, max_w, occupied):
    """Locate the first free spot for a ``box_w`` x ``box_l`` footprint.

    The origin and the right/top neighbours of every placed rectangle are
    tried first.  When none of them is free the whole footprint is scanned
    row-major on a grid of a quarter of the smaller box side (at least 1).
    """
    candidates = [(0.0, 0.0)]
    for ox, oy, ow, ol in occupied:
        candidates.append((ox + ow, oy))
        candidates.append((ox, oy + ol))
    for x, y in candidates:
        if can_place(x, y, box_w, box_l, occupied, max_w, max_l):
            return x, y

    step = max(1.0, min(box_l, box_w) / 4)
    n_y = int((max_l - box_l) // step)
    n_x = int((max_w - box_w) // step)
    for iy in range(n_y + 1):
        y = iy * step
        for ix in range(n_x + 1):
            x = ix * step
            if can_place(x, y, box_w, box_l, occupied, max_w, max_l):
                return x, y
    return None


def pack_bottom_left_fill(max_l, max_w, orientations, max_attempts=DEFAULT_MAX_ATTEMPTS):
    """Place boxes one at a time until no orientation fits.

    ``orientations`` is an ordered list of ``(length, width, name)``; for every
    box the first orientation that can be placed wins.  Returns a list of
    ``(x, y, w, l, name)`` tuples.
    """
    placed = []
    occupied = []
    attempts = 0
    while attempts < max_attempts:
        for box_l, box_w, name in orientations:
            position = find_position(box_l, box_w, max_l, max_w, occupied)
            if position is None:
                continue
            x, y = position
            placed.append((x, y, box_w, box_l, name))
            occupied.append((x, y, box_w, box_l))
            break
        else:
            break
        attempts += 1
    return placed
