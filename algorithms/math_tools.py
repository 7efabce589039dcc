import math


class MathTools:
    """Provides the arithmetic helpers used by XP scoring and leveling."""

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer, ties towards positive infinity."""
        return int(math.floor(value + 0.5))

    @staticmethod
    def to_number(value, default: float = 0) -> int | float:
        """Coerce ``value`` to a finite number, falling back to ``default``.

        Booleans and non-numeric text are not numbers. Integral text such as
        ``"12"`` becomes an ``int`` so it serializes without a decimal point.
        """
        if isinstance(value, bool):
            return default
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return default
            return value
        try:
            num = float(value)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(num):
            return default
        return int(num) if num.is_integer() else num

    @staticmethod
    def volume(weight: float, reps: float, sets: float) -> float:
        """Return training volume as weight times reps times sets."""
        return weight * reps * sets

    @staticmethod
    def pretty(value: float) -> str:
        """Format ``value`` with thousands separators."""
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return f"{value:,}"
