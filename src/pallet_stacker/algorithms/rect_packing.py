import math


def pack_rectangles_2d(width, length, box_w, box_l):
    """Regular gap-free grid of ``box_w`` x ``box_l`` rectangles.

    Positions are emitted row by row (rows run along ``length``) as
    ``(x, y, w, l)`` tuples.
    """
    if box_w <= 0 or box_l <= 0 or width < box_w or length < box_l:
        return 0, []
    n_rows = int(math.floor(length / box_l))
    n_cols = int(math.floor(width / box_w))
    positions = []
    for row in range(n_rows):
        for col in range(n_cols):
            positions.append((col * box_w, row * box_l, box_w, box_l))
    return len(positions), positions
