"""Daily target ramp.

Linear interpolation from the starting minutes to the goal, one value per
training date.
"""

import math


def _round_half_away_from_zero(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compute_daily_targets(starting_minutes: int, target_minutes: int, count: int) -> list[int]:
    """Compute per-day target minutes.

    Each intermediate value is rounded on its own (not cumulatively), so the
    ramp never decreases but may repeat a value when the total increase is
    small. The last value is always exactly target_minutes.

    Args:
        starting_minutes: Minutes on the first day
        target_minutes: Goal minutes reached on the last day
        count: Number of training dates

    Returns:
        List of count integers, index-aligned with the training dates
    """
    if count <= 0:
        return []
    if count == 1:
        return [target_minutes]
    if starting_minutes >= target_minutes:
        return [target_minutes] * count

    step = (target_minutes - starting_minutes) / (count - 1)
    targets = [_round_half_away_from_zero(starting_minutes + step * i) for i in range(count - 1)]
    targets.append(target_minutes)
    return targets
