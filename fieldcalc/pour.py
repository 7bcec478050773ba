class PourAccumulator:
    """
    Running total of accepted cubic yards for the current pour.

    This is the truth source for what has been ordered. Over-order buffering is a
    display concern (LoadPlanner) and is never written back here.
    """

    def __init__(self):
        self._total_yards = 0.0

    def add_current(self, volume) -> float:
        """Add the current item. Zero or missing volume is a no-op."""
        if volume:
            self._total_yards += float(volume)
        return self._total_yards

    def clear(self) -> None:
        self._total_yards = 0.0

    def total(self) -> float:
        return self._total_yards
