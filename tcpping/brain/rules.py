# tcpping/brain/rules.py


def count_exhausted(probe_count: int, sent: int) -> bool:
    """probe_count == 0 means unbounded."""
    return probe_count > 0 and sent >= probe_count


def in_skip_window(remaining_skip: int) -> bool:
    return remaining_skip > 0


def should_wait(probe_count: int, sent: int, cancelled: bool) -> bool:
    """
    True if another probe will follow this one, so the interval applies.
    No delay after the last scheduled probe or once cancellation is seen.
    """
    if cancelled:
        return False
    return not count_exhausted(probe_count, sent)
