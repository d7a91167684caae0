"""Sample procedures referenced by average_suite.yaml."""


def average(values):
    """Arithmetic mean; an empty list averages to 0."""
    if not values:
        return 0
    return sum(values) / len(values)


def empty_list_returns_zero():
    assert average([]) == 0


def single_value_is_its_own_average():
    assert average([7]) == 7


def mixed_values():
    result = average([1, 2, 3, 4])
    assert result == 2.5, f"expected 2.5, got {result}"


def wrong_expectation():
    result = average([1, 2])
    assert result == 2, f"expected 2, got {result}"
