from cms.domain.exceptions import InvariantViolation


def assert_page_position(left, right, depth):
    if left is None or right is None or depth is None:
        raise InvariantViolation("Page position is incomplete")

    if left < 1 or right <= left:
        raise InvariantViolation(f"Invalid page position: left={left}, right={right}")

    if (right - left) % 2 == 0:
        raise InvariantViolation(
            f"Page range [{left}, {right}] cannot enclose a whole number of child pages"
        )

    if depth < 0:
        raise InvariantViolation(f"Page depth cannot be negative: {depth}")


def assert_tree(nodes):
    """
    Check a whole nested set.

    ``nodes`` is an iterable of ``(id, left, right, depth)`` tuples. Ranges
    must nest without overlapping, depths must match the nesting level and
    the coordinates must be exactly ``1..2n`` with no gaps.
    """
    nodes = sorted(nodes, key=lambda node: node[1])
    stack = []
    coordinates = []

    for page_id, left, right, depth in nodes:
        assert_page_position(left, right, depth)

        while stack and stack[-1][1] < left:
            stack.pop()

        if stack and right > stack[-1][1]:
            raise InvariantViolation(
                f"Page {page_id} overlaps the range of page {stack[-1][0]}"
            )

        if depth != len(stack):
            raise InvariantViolation(
                f"Page {page_id} has depth {depth} but is nested {len(stack)} level(s) deep"
            )

        stack.append((page_id, right))
        coordinates.extend((left, right))

    if sorted(coordinates) != list(range(1, len(coordinates) + 1)):
        raise InvariantViolation("Page tree coordinates are not contiguous")
