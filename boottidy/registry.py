"""Routine registry for pluggable moment and interval backends"""

from boottidy.routines.base import IntervalRoutine, WeightedMomentsRoutine


def get_routines(backend_name: str) -> tuple[WeightedMomentsRoutine, IntervalRoutine]:
    """Get the routine pair for a backend name.

    Args:
        backend_name: Currently only 'mock'

    Returns:
        (weighted_moments_routine, interval_routine)
    """
    if backend_name == "mock":
        from boottidy.routines.mock_routines import MockIntervals, MockWeightedMoments
        return MockWeightedMoments(), MockIntervals()

    else:
        raise ValueError(f"Unknown backend: {backend_name}")
