from __future__ import annotations


def round_half_up(numerator: int, denominator: int) -> int:
    """``numerator / denominator`` rounded half-up; 0 when denominator is 0.

    Integer arithmetic, so x.5 always rounds up (builtin round() would not).
    """
    if denominator <= 0:
        return 0
    return (numerator * 2 + denominator) // (2 * denominator)


def ratio_percent(part: int, total: int) -> int:
    return round_half_up(part * 100, total)


def percentage(present: int, absent: int) -> int:
    """Attendance rate: present over recorded (present + absent) cells."""
    return ratio_percent(present, present + absent)
