from cms.domain.values import DateRange


def published_range(current: DateRange, now) -> DateRange:
    """
    The publish window after publishing a page at ``now``.

    The page goes live immediately. A future unpublish date is kept; one
    that has already passed is dropped so the page does not unpublish
    itself straight away.
    """
    end = current.end
    if end is not None and end < now:
        end = None
    return DateRange(now, end)


def unpublished_range(current: DateRange, now) -> DateRange:
    """
    The publish window after unpublishing a page at ``now``.

    A start date that would fall after the new end is dropped.
    """
    start = current.start
    if start is not None and start > now:
        start = None
    return DateRange(start, now)
