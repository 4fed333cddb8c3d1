import pytest

from pltr.search import binary_search_maximum


@pytest.mark.parametrize(
    "threshold, a, b, expected",
    [
        (5, 0, 10, 4),
        (11, 0, 10, 9),  # always true
        (5, 5, 10, None),  # already false at the lower bound
        (11, 0, 7, 6),  # bounded by the open upper end
        (1, 0, 1, 0),
    ],
)
def test_binary_search_maximum(threshold, a, b, expected) -> None:
    values = list(range(10))
    assert binary_search_maximum(lambda i: values[i] < threshold, a, b) == expected


def test_predicate_never_probed_outside_range() -> None:
    probed: list[int] = []

    def pred(i: int) -> bool:
        probed.append(i)
        return i < 40

    assert binary_search_maximum(pred, 3, 100) == 39
    assert all(3 <= i < 100 for i in probed)
    # bisection, not a scan
    assert len(probed) <= 10


def test_empty_range_rejected() -> None:
    with pytest.raises(ValueError):
        binary_search_maximum(lambda i: True, 4, 4)
